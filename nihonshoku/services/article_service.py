"""文章服务：内容序列化、餐厅关联整体替换、slug 冲突处理"""
import json
from flask import current_app
from sqlalchemy.exc import IntegrityError
from nihonshoku.extensions import db
from nihonshoku.exceptions import ValidationError, DuplicateSlugError
from nihonshoku.models import Article, ArticleRestaurant, Restaurant
from nihonshoku.models.base import utcnow


def dump_content(content):
    """富文本内容统一以字符串存储；已经是字符串则原样保存"""
    if isinstance(content, str):
        return content
    return json.dumps(content, ensure_ascii=False)


class ArticleService:
    """文章服务"""

    @staticmethod
    def normalize_restaurants(items):
        """
        整理前端提交的餐厅列表
        :param items: [{'id' 或 'restaurantId': 1, 'order': 0, 'description': '...'}, ...]
        :return: [(restaurant_id, order, description), ...]，保持提交顺序
        """
        if items is None:
            return []
        if not isinstance(items, list):
            raise ValidationError('restaurants は配列で指定してください')

        entries = []
        seen = set()
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                item = {'restaurantId': item}
            try:
                restaurant_id = int(item.get('restaurantId', item.get('id')))
                order = int(item.get('order', index))
            except (TypeError, ValueError):
                raise ValidationError('レストランの指定が正しくありません')
            if restaurant_id in seen:
                raise ValidationError('同じレストランが複数回指定されています')
            seen.add(restaurant_id)

            description = item.get('description') or ''
            if not isinstance(description, str):
                raise ValidationError('レストランの説明は文字列で入力してください')
            entries.append((restaurant_id, order, description))

        if seen:
            found = {r.id for r in Restaurant.query.filter(Restaurant.id.in_(seen)).all()}
            missing = sorted(seen - found)
            if missing:
                raise ValidationError('存在しないレストランが含まれています',
                                      payload={'restaurantIds': missing})
        return entries

    @staticmethod
    def save(data, author=None, article=None, restaurants=None):
        """
        创建或更新文章，并在同一事务里替换餐厅关联
        :param data: 已通过表单验证的字段（请求字段名）；更新时只包含本次提交的字段
        :param author: 新建文章时的作者
        :param article: 要更新的文章，None 表示新建
        :param restaurants: normalize_restaurants 的结果；None 表示不改动关联
        """
        is_new = article is None
        article_type = data.get('type') or (article.type if article else None)
        if article_type == Article.TYPE_REVIEW:
            # 未提交 restaurants 时按现有关联计算（例如把榜单改成评测）
            if restaurants is not None:
                linked = len(restaurants)
            else:
                linked = len(article.restaurant_links) if article else 0
            if linked > 1:
                raise ValidationError('レビュー記事に紐付けられるレストランは1件までです')

        if is_new:
            article = Article(author_id=author.id)

        article.update_from(data, Article.FIELDS)
        if 'content' in data:
            article.content = dump_content(data['content'])
        if not is_new:
            article.updated_at = utcnow()

        try:
            db.session.add(article)
            db.session.flush()

            if restaurants is not None:
                db.session.expire(article, ['restaurant_links'])
                ArticleRestaurant.query.filter_by(article_id=article.id).delete()
                db.session.add_all([
                    ArticleRestaurant(
                        article_id=article.id,
                        restaurant_id=restaurant_id,
                        order=order,
                        description=description,
                    )
                    for restaurant_id, order, description in restaurants
                ])
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            if 'slug' in str(e.orig).lower():
                raise DuplicateSlugError(data.get('slug'))
            raise
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info('Article %s %s (%d restaurants)', article.slug,
                                'created' if is_new else 'updated',
                                len(article.restaurant_links))
        return article

    @staticmethod
    def delete(article):
        """删除文章，关联行和收藏随 ORM 级联删除"""
        slug = article.slug
        try:
            db.session.delete(article)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        current_app.logger.info('Article %s deleted', slug)
