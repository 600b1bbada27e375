from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField, EmailField
from wtforms.validators import DataRequired, Length, Email
from nihonshoku.utils.forms import strip
from nihonshoku.utils.validators import validate_username


class LoginForm(FlaskForm):
    """用户登录表单"""
    username = StringField('ユーザー名', filters=[strip], validators=[
        DataRequired(message="ユーザー名を入力してください")
    ])
    password = PasswordField('パスワード', validators=[
        DataRequired(message="パスワードを入力してください")
    ])
    remember = BooleanField('ログイン状態を保持', default=True)


class RegisterForm(FlaskForm):
    """用户注册表单（isAdmin 不从请求中读取）"""
    username = StringField('ユーザー名', filters=[strip], validators=[
        DataRequired(message="ユーザー名を入力してください"),
        Length(min=2, max=64, message="ユーザー名は2〜64文字で入力してください"),
        validate_username
    ])
    email = EmailField('メールアドレス', filters=[strip], validators=[
        DataRequired(message="メールアドレスを入力してください"),
        Email(message="メールアドレスの形式が正しくありません")
    ])
    password = PasswordField('パスワード', validators=[
        DataRequired(message="パスワードを入力してください"),
        Length(min=6, message="パスワードは6文字以上で入力してください")
    ])
