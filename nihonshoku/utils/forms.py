"""
JSON 请求体 -> WTForms 表单
前端全部以 JSON 提交，这里统一把请求体作为表单 data 处理，不经过 formdata
"""
from flask import request
from wtforms import Field
from nihonshoku.exceptions import ValidationError


def strip(value):
    return value.strip() if isinstance(value, str) else value


def as_text(value):
    """经纬度等以文本存储的数值字段"""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def none_if_blank(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class JSONField(Field):
    """原样保留 JSON 值（对象 / 数组 / 字符串）"""

    def process_data(self, value):
        self.data = value

    def _value(self):
        return '' if self.data is None else str(self.data)


def json_body():
    """读取 JSON 请求体，必须是对象"""
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError('リクエストの形式が正しくありません')
    return payload


def load_form(form_class, data, skip=()):
    """
    用 data 构造并验证表单，失败时抛出 ValidationError
    CSRF 由全局 CSRFProtect 负责，这里关闭表单级校验
    :param skip: 不参与本次验证的字段（部分更新时未提交的字段）
    """
    form = form_class(formdata=None, data=data, meta={'csrf': False})
    for name in skip:
        del form[name]
    if not form.validate():
        raise ValidationError.from_form(form)
    return form
