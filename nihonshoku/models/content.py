import json
import logging
from nihonshoku.extensions import db
from .base import BaseModel, isoformat, utcnow

logger = logging.getLogger(__name__)


class Article(BaseModel):
    """编辑文章：评测 / 榜单 / 随笔"""
    __tablename__ = 'articles'

    TYPE_REVIEW = 'review'
    TYPE_LIST = 'list'
    TYPE_ESSAY = 'essay'
    TYPES = (TYPE_REVIEW, TYPE_LIST, TYPE_ESSAY)

    title = db.Column(db.Text, nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    # TipTap 生成的 JSON 文档，服务端只做序列化存储
    content = db.Column(db.Text, nullable=False)
    excerpt = db.Column(db.Text, nullable=False)
    cover_image = db.Column(db.Text, nullable=False)  # URL 或 base64 data URI
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    published = db.Column(db.Boolean, default=False, nullable=False, index=True)
    type = db.Column(db.String(16), nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    author = db.relationship('User')
    restaurant_links = db.relationship(
        'ArticleRestaurant', backref='article',
        order_by='ArticleRestaurant.order',
        cascade='all, delete-orphan',
    )
    bookmarks = db.relationship(
        'Bookmark', backref='article',
        cascade='all, delete-orphan',
    )

    # 模型属性 -> 请求字段
    FIELDS = {
        'title': 'title',
        'slug': 'slug',
        'excerpt': 'excerpt',
        'cover_image': 'coverImage',
        'published': 'published',
        'type': 'type',
    }

    def parsed_content(self):
        """把存储的字符串还原为 JSON 结构"""
        if self.content is None:
            return None
        try:
            return json.loads(self.content)
        except ValueError:
            logger.warning('Article %s has non-JSON content, returning raw text', self.id)
            return self.content

    def to_dict(self, with_restaurants=True):
        data = {
            'id': self.id,
            'title': self.title,
            'slug': self.slug,
            'content': self.parsed_content(),
            'excerpt': self.excerpt,
            'coverImage': self.cover_image,
            'authorId': self.author_id,
            'published': self.published,
            'type': self.type,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
            'author': self.author.to_dict() if self.author else None,
        }
        if with_restaurants:
            data['restaurants'] = [link.to_dict() for link in
                                   sorted(self.restaurant_links, key=lambda l: l.order)]
        return data

    def __repr__(self):
        return f'<Article {self.slug}>'


class ArticleRestaurant(db.Model):
    """文章 <-> 餐厅 关联（带排序与每篇文章单独的介绍）"""
    __tablename__ = 'article_restaurants'
    __table_args__ = (
        db.UniqueConstraint('article_id', 'restaurant_id', name='uq_article_restaurant'),
    )

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    article_id = db.Column(db.Integer, db.ForeignKey('articles.id', ondelete='CASCADE'),
                           nullable=False, index=True)
    restaurant_id = db.Column(db.Integer, db.ForeignKey('restaurants.id'), nullable=False)
    order = db.Column(db.Integer, nullable=False, default=0)
    description = db.Column(db.Text)

    restaurant = db.relationship('Restaurant')

    def to_dict(self):
        """餐厅字段 + 关联上的 order / description，与前端的 SelectedRestaurant 对应"""
        data = self.restaurant.to_dict() if self.restaurant else {'id': self.restaurant_id}
        data['restaurantId'] = self.restaurant_id
        data['order'] = self.order
        data['description'] = self.description or ''
        return data


class Bookmark(BaseModel):
    """用户收藏的文章"""
    __tablename__ = 'bookmarks'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'article_id', name='uq_bookmark_user_article'),
    )

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    article_id = db.Column(db.Integer, db.ForeignKey('articles.id', ondelete='CASCADE'), nullable=False)

    user = db.relationship('User', backref=db.backref('bookmarks', lazy='dynamic'))

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'articleId': self.article_id,
            'createdAt': isoformat(self.created_at),
            'article': self.article.to_dict(with_restaurants=False) if self.article else None,
        }
