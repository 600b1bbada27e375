"""
表单验证器
"""
import json
import re
from wtforms.validators import ValidationError

SLUG_PATTERN = re.compile(r'^[^\s/?#]+$')


def validate_slug(form, field):
    """slug 作为 URL 路径片段，不能含空白、斜杠、? 和 #"""
    if field.data and not SLUG_PATTERN.match(field.data):
        raise ValidationError('スラッグに空白や記号 (/ ? #) は使用できません')


def validate_username(form, field):
    """验证用户名格式"""
    if field.data:
        # 只允许字母、数字、下划线、日文
        if not re.match(r'^[\w.-]+$', field.data):
            raise ValidationError('ユーザー名に使用できない文字が含まれています')


def _coordinate(limit, label):
    def _validate(form, field):
        if field.data is None or field.data == '':
            return
        try:
            value = float(field.data)
        except (TypeError, ValueError):
            raise ValidationError(f'{label}は数値で入力してください')
        if not -limit <= value <= limit:
            raise ValidationError(f'{label}は -{limit} から {limit} の範囲で入力してください')
    return _validate


validate_latitude = _coordinate(90, '緯度')
validate_longitude = _coordinate(180, '経度')


def validate_json_document(form, field):
    """富文本内容：JSON 对象/数组，或者能解析为 JSON 的字符串"""
    value = field.data
    if value is None:
        raise ValidationError('本文を入力してください')
    if isinstance(value, str):
        try:
            json.loads(value)
        except ValueError:
            raise ValidationError('本文の形式が正しくありません')
    elif not isinstance(value, (dict, list)):
        raise ValidationError('本文の形式が正しくありません')


def validate_website(form, field):
    """可选的网址，填写时必须是 http(s) 链接"""
    if field.data and not re.match(r'^https?://[^\s]+$', field.data):
        raise ValidationError('URLの形式が正しくありません')
