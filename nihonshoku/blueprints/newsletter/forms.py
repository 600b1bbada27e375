from flask_wtf import FlaskForm
from wtforms import EmailField
from wtforms.validators import DataRequired, Email, Length
from nihonshoku.utils.forms import strip


class NewsletterForm(FlaskForm):
    """新闻通讯订阅表单"""
    email = EmailField('メールアドレス', filters=[strip], validators=[
        DataRequired(message='メールアドレスを入力してください'),
        Email(message='メールアドレスの形式が正しくありません'),
        Length(max=255)
    ])
