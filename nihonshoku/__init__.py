import logging
import os
import colorlog
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from config import config
from nihonshoku.extensions import db, migrate, login_manager, cache, csrf, sess
from nihonshoku.exceptions import NihonshokuException

# 导入 commands 模块，用于注册 CLI 命令
from nihonshoku import commands


def create_app(config_name='default'):
    """日本食 API 应用工厂函数"""
    app = Flask(__name__)

    # 1. 加载配置
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)
    app.json.ensure_ascii = False

    # 2. 初始化扩展
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    cache.init_app(app)
    csrf.init_app(app)
    # 会话存放在同一个数据库的 sessions 表
    app.config['SESSION_SQLALCHEMY'] = db
    sess.init_app(app)

    # 3. 配置日志
    configure_logging(app)

    # 4. 注册蓝图 (Blueprints)
    register_blueprints(app)

    # 5. 注册全局错误处理
    register_error_handlers(app)

    # 6. 注册 CLI 命令
    register_commands(app)

    # 7. 生产环境自动初始化数据库
    auto_init_database(app)

    return app


def auto_init_database(app):
    """生产环境首次启动时建表，并按环境变量创建管理员"""
    if app.testing:
        return
    flask_env = os.environ.get('FLASK_ENV', '')
    if flask_env != 'production' and not os.environ.get('DATABASE_URL'):
        return

    with app.app_context():
        try:
            from nihonshoku.models import User
            from sqlalchemy import inspect

            tables = inspect(db.engine).get_table_names()
            if 'users' not in tables:
                app.logger.info('First boot: creating database tables')
                db.create_all()

            password = app.config.get('ADMIN_PASSWORD')
            if password and not User.query.filter_by(is_admin=True).first():
                admin = User(
                    username=app.config['ADMIN_USERNAME'],
                    email=app.config['ADMIN_EMAIL'],
                    password=password,
                    is_admin=True,
                )
                db.session.add(admin)
                db.session.commit()
                app.logger.info('Admin user %s created', admin.username)
        except Exception:
            db.session.rollback()
            app.logger.exception('Database initialisation failed')


def register_blueprints(app):
    """注册所有业务模块蓝图，统一挂在 /api 下"""
    # 认证蓝图
    from nihonshoku.blueprints.auth import auth_bp
    app.register_blueprint(auth_bp, url_prefix='/api')

    # 文章蓝图
    from nihonshoku.blueprints.articles import articles_bp
    app.register_blueprint(articles_bp, url_prefix='/api')

    # 餐厅名录蓝图
    from nihonshoku.blueprints.restaurants import restaurants_bp
    app.register_blueprint(restaurants_bp, url_prefix='/api')

    # 收藏蓝图
    from nihonshoku.blueprints.bookmarks import bookmarks_bp
    app.register_blueprint(bookmarks_bp, url_prefix='/api')

    # 新闻通讯蓝图
    from nihonshoku.blueprints.newsletter import newsletter_bp
    app.register_blueprint(newsletter_bp, url_prefix='/api')


def register_error_handlers(app):
    """所有错误都以 JSON 返回"""
    @app.errorhandler(NihonshokuException)
    def handle_domain_error(e):
        return jsonify(e.to_dict()), e.code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({
            'success': False,
            'code': e.code,
            'message': e.description,
        }), e.code

    @app.errorhandler(Exception)
    def internal_server_error(e):
        db.session.rollback()
        app.logger.exception('Unhandled error: %s', e)
        return jsonify({
            'success': False,
            'code': 500,
            'message': 'サーバーエラーが発生しました',
        }), 500


def register_commands(app):
    """注册 Flask CLI 命令"""
    app.cli.add_command(commands.forge)
    app.cli.add_command(commands.status)
    app.cli.add_command(commands.create_admin)
    app.cli.add_command(commands.fix_schema)


def configure_logging(app):
    """开发环境使用彩色控制台日志，生产环境输出普通格式"""
    if app.testing:
        return

    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)

    if app.debug:
        formatter = colorlog.ColoredFormatter(
            "%(log_color)s[%(asctime)s] %(levelname)-8s%(reset)s %(blue)s%(message)s",
            datefmt="%H:%M:%S",
            reset=True,
            log_colors={
                'DEBUG':    'cyan',
                'INFO':     'green',
                'WARNING':  'yellow',
                'ERROR':    'red',
                'CRITICAL': 'red,bg_white',
            },
            style='%'
        )
    else:
        formatter = logging.Formatter("[%(asctime)s] %(levelname)s in %(module)s: %(message)s")

    handler.setFormatter(formatter)
    app.logger.addHandler(handler)
    app.logger.setLevel(logging.INFO)
