"""
权限控制工具
只有一个维度：User.is_admin，没有角色层级
"""
from functools import wraps
from flask_login import current_user
from nihonshoku.exceptions import Unauthorized, PermissionDenied


def is_admin():
    """检查当前用户是否是管理员"""
    return bool(current_user.is_authenticated and current_user.is_admin)


def admin_required(f):
    """
    管理员权限装饰器
    未登录返回 401，已登录但不是管理员返回 403
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            raise Unauthorized()
        if not current_user.is_admin:
            raise PermissionDenied()
        return f(*args, **kwargs)
    return decorated_function
