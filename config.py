import os
from datetime import timedelta
from dotenv import load_dotenv

# 加载 .env 环境变量
load_dotenv()
basedir = os.path.abspath(os.path.dirname(__file__))


def _database_url(default_name):
    """读取 DATABASE_URL，兼容 Heroku/Neon 风格的 postgres:// 前缀"""
    url = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', default_name)
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


class Config:
    """基础配置类"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or os.environ.get('SESSION_SECRET') or 'hard-to-guess-string'

    # 数据库配置
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # 会话配置 (服务端存储，有效期 1 周)
    SESSION_TYPE = 'sqlalchemy'
    SESSION_SQLALCHEMY_TABLE = 'sessions'
    SESSION_PERMANENT = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)

    # 封面图以 base64 形式提交，放宽请求体上限
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024

    # CSRF: SPA 通过 X-CSRFToken 头提交令牌
    WTF_CSRF_HEADERS = ['X-CSRFToken', 'X-CSRF-Token']
    WTF_CSRF_TIME_LIMIT = None

    # 缓存配置 (开发环境单进程使用 SimpleCache；生产环境见 ProductionConfig)
    CACHE_TYPE = os.environ.get('CACHE_TYPE', 'SimpleCache')
    CACHE_DEFAULT_TIMEOUT = 60

    # 首次启动时创建的管理员
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME', 'admin')
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL', 'admin@nihonshoku.co.uk')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')

    @staticmethod
    def init_app(app):
        # 确保 SQLite 实例目录存在
        os.makedirs(os.path.join(basedir, 'instance'), exist_ok=True)


class DevelopmentConfig(Config):
    """开发环境配置"""
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = _database_url('nihonshoku.db')


class ProductionConfig(Config):
    """生产环境配置"""
    DEBUG = False

    SQLALCHEMY_DATABASE_URI = _database_url('nihonshoku_prod.db')

    # Serverless 部署：固定的小连接池
    if SQLALCHEMY_DATABASE_URI.startswith('postgresql'):
        SQLALCHEMY_ENGINE_OPTIONS = {
            'pool_size': 1,
            'max_overflow': 0,
            'pool_pre_ping': True,
            'connect_args': {'connect_timeout': 5},
        }

    # 多个 worker / Serverless 实例之间进程内缓存无法一起失效，只有共享的 Redis 才启用缓存
    CACHE_REDIS_URL = os.environ.get('CACHE_REDIS_URL') or os.environ.get('REDIS_URL')
    CACHE_TYPE = 'RedisCache' if CACHE_REDIS_URL else 'NullCache'

    # 安全设置
    SESSION_COOKIE_SECURE = True

    @classmethod
    def init_app(cls, app):
        Config.init_app(app)
        # 反向代理后面运行时信任一层 X-Forwarded-* 头
        from werkzeug.middleware.proxy_fix import ProxyFix
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    WTF_CSRF_ENABLED = False
    CACHE_TYPE = 'NullCache'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
