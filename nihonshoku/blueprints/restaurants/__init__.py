from flask import Blueprint

# 注意：url_prefix 在 nihonshoku/__init__.py 注册时设置，这里不重复设置
restaurants_bp = Blueprint('restaurants', __name__)

from . import routes
