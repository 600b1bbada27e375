from flask import request, jsonify, current_app
from nihonshoku.extensions import db, cache
from nihonshoku.blueprints.restaurants import restaurants_bp
from nihonshoku.blueprints.restaurants.forms import RestaurantForm, RestaurantStatusForm
from nihonshoku.exceptions import NotFound
from nihonshoku.models import Restaurant
from nihonshoku.utils.forms import json_body, load_form
from nihonshoku.utils.permissions import admin_required, is_admin

PUBLISHED_CACHE_KEY = 'restaurants:published'


def _get_restaurant_or_404(restaurant_id, include_deleted=True):
    restaurant = db.session.get(Restaurant, restaurant_id)
    if restaurant is None or (restaurant.is_deleted and not include_deleted):
        raise NotFound('レストランが見つかりません')
    return restaurant


def _save(restaurant):
    """提交并让公开列表缓存失效"""
    try:
        db.session.add(restaurant)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    cache.delete(PUBLISHED_CACHE_KEY)
    return restaurant


@restaurants_bp.route('/restaurants')
def list_restaurants():
    """
    餐厅列表
    管理员可看到全部状态（可用 ?status= 筛选），其他人看不到已删除的餐厅
    """
    query = Restaurant.query
    if is_admin():
        status = request.args.get('status', '', type=str)
        if status:
            query = query.filter_by(status=status)
    else:
        query = query.filter(Restaurant.status != Restaurant.STATUS_DELETED)

    restaurants = query.order_by(Restaurant.created_at.desc(), Restaurant.id.desc()).all()
    return jsonify([r.to_dict() for r in restaurants])


@restaurants_bp.route('/restaurants/published')
def list_published_restaurants():
    """已发布的餐厅（地图页使用，结果缓存）"""
    data = cache.get(PUBLISHED_CACHE_KEY)
    if data is None:
        restaurants = Restaurant.query.filter_by(status=Restaurant.STATUS_PUBLISHED) \
            .order_by(Restaurant.name).all()
        data = [r.to_dict() for r in restaurants]
        cache.set(PUBLISHED_CACHE_KEY, data)
    return jsonify(data)


@restaurants_bp.route('/restaurants/<int:restaurant_id>')
def get_restaurant(restaurant_id):
    """餐厅详情"""
    restaurant = _get_restaurant_or_404(restaurant_id, include_deleted=is_admin())
    return jsonify(restaurant.to_dict())


@restaurants_bp.route('/restaurants', methods=['POST'])
@admin_required
def create_restaurant():
    """新建餐厅"""
    form = load_form(RestaurantForm, json_body())

    restaurant = Restaurant()
    restaurant.update_from(form.data, Restaurant.FIELDS)
    _save(restaurant)

    current_app.logger.info('Restaurant %s created (%s)', restaurant.id, restaurant.name)
    return jsonify(restaurant.to_dict()), 201


@restaurants_bp.route('/restaurants/<int:restaurant_id>', methods=['PATCH'])
@admin_required
def update_restaurant(restaurant_id):
    """部分更新餐厅，未提交的字段保留原值"""
    restaurant = _get_restaurant_or_404(restaurant_id)
    payload = json_body()

    form = load_form(RestaurantForm, {**restaurant.to_dict(), **payload})
    changed = {name: value for name, value in form.data.items() if name in payload}
    restaurant.update_from(changed, Restaurant.FIELDS)
    _save(restaurant)

    current_app.logger.info('Restaurant %s updated: %s', restaurant.id, sorted(changed))
    return jsonify(restaurant.to_dict())


@restaurants_bp.route('/restaurants/<int:restaurant_id>/status', methods=['PATCH'])
@admin_required
def update_restaurant_status(restaurant_id):
    """修改发布状态（deleted 即软删除）"""
    restaurant = _get_restaurant_or_404(restaurant_id)
    form = load_form(RestaurantStatusForm, json_body())

    restaurant.status = form.status.data
    _save(restaurant)

    current_app.logger.info('Restaurant %s status -> %s', restaurant.id, restaurant.status)
    return jsonify(restaurant.to_dict())
