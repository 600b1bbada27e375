# 按照依赖顺序导入
from .base import BaseModel
from .auth import User
from .directory import Restaurant
from .content import Article, ArticleRestaurant, Bookmark
from .newsletter import Newsletter
