from flask import jsonify
from flask_login import login_required, current_user
from sqlalchemy.exc import IntegrityError
from nihonshoku.extensions import db
from nihonshoku.blueprints.bookmarks import bookmarks_bp
from nihonshoku.exceptions import ValidationError
from nihonshoku.models import Article, Bookmark
from nihonshoku.utils.forms import json_body


@bookmarks_bp.route('/bookmarks')
@login_required
def list_bookmarks():
    """当前用户的收藏（含文章）"""
    bookmarks = Bookmark.query.filter_by(user_id=current_user.id) \
        .order_by(Bookmark.created_at.desc(), Bookmark.id.desc()).all()
    return jsonify([b.to_dict() for b in bookmarks])


@bookmarks_bp.route('/bookmarks', methods=['POST'])
@login_required
def add_bookmark():
    """收藏文章；重复收藏直接返回已有记录"""
    payload = json_body()
    try:
        article_id = int(payload.get('articleId'))
    except (TypeError, ValueError):
        raise ValidationError('articleId を指定してください')

    if db.session.get(Article, article_id) is None:
        raise ValidationError('記事が見つかりません', payload={'articleId': article_id})

    # 直接插入，由唯一约束判断是否已收藏，并发请求也只会留下一行
    bookmark = Bookmark(user_id=current_user.id, article_id=article_id)
    try:
        bookmark.save()
    except IntegrityError:
        db.session.rollback()
        existing = Bookmark.query.filter_by(user_id=current_user.id, article_id=article_id).first()
        if existing is None:
            raise
        return jsonify(existing.to_dict())
    return jsonify(bookmark.to_dict()), 201


@bookmarks_bp.route('/bookmarks/<int:article_id>', methods=['DELETE'])
@login_required
def remove_bookmark(article_id):
    """取消收藏；不存在的收藏视为成功"""
    deleted = Bookmark.query.filter_by(user_id=current_user.id, article_id=article_id).delete()
    db.session.commit()
    return jsonify({'success': True, 'deleted': deleted})
