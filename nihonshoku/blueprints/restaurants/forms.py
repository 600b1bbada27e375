from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, SelectField
from wtforms.validators import DataRequired, Length
from nihonshoku.models import Restaurant
from nihonshoku.utils.forms import strip, none_if_blank, as_text
from nihonshoku.utils.validators import validate_latitude, validate_longitude, validate_website

STATUS_CHOICES = [
    (Restaurant.STATUS_PUBLISHED, '公開'),
    (Restaurant.STATUS_UNPUBLISHED, '非公開'),
    (Restaurant.STATUS_DRAFT, '下書き'),
    (Restaurant.STATUS_DELETED, '削除済み'),
]


class RestaurantForm(FlaskForm):
    """餐厅表单"""
    name = StringField('店名', filters=[strip], validators=[
        DataRequired(message='店名を入力してください'), Length(max=255)
    ])
    description = TextAreaField('店舗説明', filters=[strip], validators=[
        DataRequired(message='店舗説明を入力してください')
    ])
    address = StringField('住所', filters=[strip], validators=[
        DataRequired(message='住所を入力してください')
    ])
    latitude = StringField('緯度', filters=[as_text, strip], validators=[
        DataRequired(message='緯度を入力してください'), validate_latitude
    ])
    longitude = StringField('経度', filters=[as_text, strip], validators=[
        DataRequired(message='経度を入力してください'), validate_longitude
    ])
    cuisine_type = SelectField('料理の種類', choices=[
        ('washoku', '和食'),
        ('sushi', '寿司'),
        ('ramen', 'ラーメン'),
        ('izakaya', '居酒屋'),
        ('other', 'その他'),
    ], default='washoku')
    price_range = SelectField('価格帯', choices=[
        ('budget', 'お手頃 (£)'),
        ('moderate', '普通 (££)'),
        ('expensive', '高級 (£££)'),
        ('luxury', '超高級 (££££)'),
    ], default='moderate')
    status = SelectField('ステータス', choices=STATUS_CHOICES, default=Restaurant.STATUS_DRAFT)
    website = StringField('ウェブサイト', filters=[strip, none_if_blank], validators=[
        validate_website
    ])
    phone = StringField('電話番号', filters=[strip, none_if_blank], validators=[
        Length(max=32)
    ])


class RestaurantStatusForm(FlaskForm):
    """只修改状态"""
    status = SelectField('ステータス', choices=STATUS_CHOICES, validators=[
        DataRequired(message='ステータスを指定してください')
    ])
