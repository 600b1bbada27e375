from flask import request, jsonify
from flask_login import current_user
from nihonshoku.extensions import db
from nihonshoku.blueprints.articles import articles_bp
from nihonshoku.blueprints.articles.forms import ArticleForm
from nihonshoku.exceptions import NotFound
from nihonshoku.models import Article
from nihonshoku.services.article_service import ArticleService
from nihonshoku.utils.forms import json_body, load_form
from nihonshoku.utils.permissions import admin_required, is_admin


def _visible_articles():
    """管理员能看到草稿，其他人只看已发布文章"""
    query = Article.query
    if not is_admin():
        query = query.filter_by(published=True)
    return query


def _get_article_or_404(article_id):
    article = db.session.get(Article, article_id)
    if article is None:
        raise NotFound('記事が見つかりません')
    return article


@articles_bp.route('/articles')
def list_articles():
    """文章列表（最新在前），可按 type 筛选"""
    query = _visible_articles()

    article_type = request.args.get('type', '', type=str)
    if article_type:
        query = query.filter_by(type=article_type)

    articles = query.order_by(Article.created_at.desc(), Article.id.desc()).all()
    return jsonify([a.to_dict() for a in articles])


@articles_bp.route('/articles/<slug>')
def get_article(slug):
    """按 slug 获取文章详情"""
    article = _visible_articles().filter_by(slug=slug).first()
    if article is None:
        raise NotFound('記事が見つかりません')
    return jsonify(article.to_dict())


@articles_bp.route('/articles/id/<int:article_id>')
def get_article_by_id(article_id):
    """按 ID 获取文章（管理后台编辑页使用）"""
    article = _visible_articles().filter_by(id=article_id).first()
    if article is None:
        raise NotFound('記事が見つかりません')
    return jsonify(article.to_dict())


@articles_bp.route('/articles', methods=['POST'])
@admin_required
def create_article():
    """新建文章"""
    payload = json_body()
    form = load_form(ArticleForm, payload)
    restaurants = ArticleService.normalize_restaurants(payload.get('restaurants'))

    article = ArticleService.save(form.data, author=current_user, restaurants=restaurants)
    return jsonify(article.to_dict()), 201


@articles_bp.route('/articles/<int:article_id>', methods=['PATCH'])
@admin_required
def update_article(article_id):
    """
    部分更新文章
    未提交的字段保留原值；提交了 restaurants 时整体替换餐厅关联
    """
    article = _get_article_or_404(article_id)
    payload = json_body()

    current = {
        'title': article.title,
        'slug': article.slug,
        'excerpt': article.excerpt,
        'coverImage': article.cover_image,
        'type': article.type,
        'published': article.published,
    }
    # 旧数据的正文可能不是 JSON，未提交正文时不做校验
    skip = () if 'content' in payload else ('content',)
    form = load_form(ArticleForm, {**current, **payload}, skip=skip)
    changed = {name: value for name, value in form.data.items() if name in payload}

    restaurants = None
    if 'restaurants' in payload:
        restaurants = ArticleService.normalize_restaurants(payload['restaurants'])

    article = ArticleService.save(changed, article=article, restaurants=restaurants)
    return jsonify(article.to_dict())


@articles_bp.route('/articles/<int:article_id>', methods=['DELETE'])
@admin_required
def delete_article(article_id):
    """删除文章"""
    article = _get_article_or_404(article_id)
    ArticleService.delete(article)
    return jsonify({'success': True, 'id': article_id})
