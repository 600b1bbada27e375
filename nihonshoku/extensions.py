from flask import jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_caching import Cache
from flask_session import Session
from flask_wtf.csrf import CSRFProtect

# 初始化扩展对象 (暂不绑定 app)
db = SQLAlchemy()
migrate = Migrate()
cache = Cache()
login_manager = LoginManager()
csrf = CSRFProtect()
# 服务端会话，Cookie 里只保存会话 ID
sess = Session()

login_manager.session_protection = 'basic'


@login_manager.user_loader
def load_user(user_id):
    """Flask-Login 用户加载回调"""
    from nihonshoku.models import User
    return db.session.get(User, int(user_id))


@login_manager.unauthorized_handler
def unauthorized():
    """API 模式下不跳转登录页，直接返回 401"""
    return jsonify({
        'success': False,
        'code': 401,
        'message': 'ログインが必要です',
    }), 401
