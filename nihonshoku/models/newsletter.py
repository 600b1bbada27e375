from nihonshoku.extensions import db
from .base import BaseModel, isoformat


class Newsletter(BaseModel):
    """新闻通讯订阅（confirmed 字段暂无确认流程）"""
    __tablename__ = 'newsletters'

    email = db.Column(db.String(255), unique=True, nullable=False)
    confirmed = db.Column(db.Boolean, default=False, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'confirmed': self.confirmed,
            'createdAt': isoformat(self.created_at),
        }
