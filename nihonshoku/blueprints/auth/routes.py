from flask import jsonify, current_app, session
from flask_login import login_user, logout_user, current_user
from flask_wtf.csrf import generate_csrf
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from nihonshoku.extensions import db
from nihonshoku.models import User
from nihonshoku.blueprints.auth import auth_bp
from nihonshoku.blueprints.auth.forms import LoginForm, RegisterForm
from nihonshoku.exceptions import ValidationError, Unauthorized, PermissionDenied
from nihonshoku.utils.forms import json_body, load_form

INVALID_CREDENTIALS = 'ユーザー名またはパスワードが正しくありません'


def _authenticate(form):
    """校验用户名和密码，失败抛出 401"""
    user = User.query.filter_by(username=form.username.data).first()
    if user is None or not user.verify_password(form.password.data):
        current_app.logger.info('Login failed for %r', form.username.data)
        raise Unauthorized(INVALID_CREDENTIALS)
    # verify_password 可能升级了旧版密码哈希
    if db.session.is_modified(user):
        db.session.commit()
        current_app.logger.info('Upgraded legacy password hash for user %s', user.id)
    return user


def _check_available(form):
    """用户名 / 邮箱已被占用时给出对应的提示"""
    if User.query.filter_by(username=form.username.data).first():
        raise ValidationError('このユーザー名は既に使用されています')
    if User.query.filter(func.lower(User.email) == form.email.data.lower()).first():
        raise ValidationError('このメールアドレスは既に登録されています')


def _start_session(user, remember=True):
    """登录状态保存在服务端会话里；不保持登录时关闭浏览器即失效"""
    login_user(user)
    session.permanent = bool(remember)


@auth_bp.route('/register', methods=['POST'])
def register():
    """注册普通用户并直接登录"""
    form = load_form(RegisterForm, json_body())
    _check_available(form)

    user = User(
        username=form.username.data,
        email=form.email.data,
        password=form.password.data,  # Setter 会自动 Hash
    )
    try:
        user.save()
    except IntegrityError:
        # 同时提交的注册请求
        db.session.rollback()
        raise ValidationError('このユーザー名またはメールアドレスは既に登録されています')

    _start_session(user)
    current_app.logger.info('User %s registered', user.username)
    return jsonify(user.to_dict()), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """普通登录"""
    form = load_form(LoginForm, json_body())
    user = _authenticate(form)

    _start_session(user, remember=form.remember.data)
    current_app.logger.info('User %s logged in', user.username)
    return jsonify(user.to_dict())


@auth_bp.route('/admin/login', methods=['POST'])
def admin_login():
    """管理后台登录，非管理员返回 403"""
    form = load_form(LoginForm, json_body())
    user = _authenticate(form)

    if not user.is_admin:
        current_app.logger.warning('Non-admin user %s tried the admin login', user.username)
        raise PermissionDenied()

    _start_session(user, remember=form.remember.data)
    current_app.logger.info('Admin %s logged in', user.username)
    return jsonify(user.to_dict())


@auth_bp.route('/logout', methods=['POST'])
def logout():
    if current_user.is_authenticated:
        current_app.logger.info('User %s logged out', current_user.username)
    logout_user()
    # 清空后服务端会话记录被删除，旧 Cookie 不再有效
    session.clear()
    return jsonify({'success': True})


@auth_bp.route('/user')
def user():
    """当前登录用户"""
    if not current_user.is_authenticated:
        raise Unauthorized()
    return jsonify(current_user.to_dict())


@auth_bp.route('/csrf-token')
def csrf_token():
    """SPA 获取 CSRF 令牌，之后通过 X-CSRFToken 头提交"""
    return jsonify({'csrfToken': generate_csrf()})
