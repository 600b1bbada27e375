from flask import jsonify, current_app
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from nihonshoku.extensions import db
from nihonshoku.blueprints.newsletter import newsletter_bp
from nihonshoku.blueprints.newsletter.forms import NewsletterForm
from nihonshoku.exceptions import AlreadySubscribedError
from nihonshoku.models import Newsletter
from nihonshoku.utils.forms import json_body, load_form
from nihonshoku.utils.permissions import admin_required


@newsletter_bp.route('/newsletter', methods=['POST'])
def subscribe():
    """订阅新闻通讯"""
    form = load_form(NewsletterForm, json_body())
    email = form.email.data.lower()

    if Newsletter.query.filter(func.lower(Newsletter.email) == email).first():
        raise AlreadySubscribedError()

    subscription = Newsletter(email=email)
    try:
        db.session.add(subscription)
        db.session.commit()
    except IntegrityError:
        # 并发提交同一邮箱
        db.session.rollback()
        raise AlreadySubscribedError()

    current_app.logger.info('Newsletter subscription #%s', subscription.id)
    return jsonify(subscription.to_dict()), 201


@newsletter_bp.route('/newsletters')
@admin_required
def list_subscribers():
    """订阅者列表（管理后台）"""
    subscribers = Newsletter.query.order_by(Newsletter.created_at.desc(), Newsletter.id.desc()).all()
    return jsonify([s.to_dict() for s in subscribers])
