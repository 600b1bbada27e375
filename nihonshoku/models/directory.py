from nihonshoku.extensions import db
from .base import BaseModel, isoformat


class Restaurant(BaseModel):
    """餐厅名录"""
    __tablename__ = 'restaurants'

    CUISINE_TYPES = ('washoku', 'sushi', 'ramen', 'izakaya', 'other')
    PRICE_RANGES = ('budget', 'moderate', 'expensive', 'luxury')

    STATUS_PUBLISHED = 'published'
    STATUS_UNPUBLISHED = 'unpublished'
    STATUS_DRAFT = 'draft'
    STATUS_DELETED = 'deleted'  # 软删除

    name = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=False)
    address = db.Column(db.Text, nullable=False)
    # 经纬度按文本存储
    latitude = db.Column(db.Text, nullable=False)
    longitude = db.Column(db.Text, nullable=False)
    cuisine_type = db.Column(db.String(16), nullable=False, default='washoku')
    price_range = db.Column(db.String(16), nullable=False, default='moderate')
    status = db.Column(db.String(16), nullable=False, default=STATUS_DRAFT, index=True)
    website = db.Column(db.Text)
    phone = db.Column(db.Text)

    # 模型属性 -> 请求字段
    FIELDS = {
        'name': 'name',
        'description': 'description',
        'address': 'address',
        'latitude': 'latitude',
        'longitude': 'longitude',
        'cuisine_type': 'cuisine_type',
        'price_range': 'price_range',
        'status': 'status',
        'website': 'website',
        'phone': 'phone',
    }

    @property
    def is_deleted(self):
        return self.status == self.STATUS_DELETED

    def to_dict(self):
        data = {field: getattr(self, field) for field in self.FIELDS}
        data['id'] = self.id
        data['createdAt'] = isoformat(self.created_at)
        return data

    def __repr__(self):
        return f'<Restaurant {self.name}>'
