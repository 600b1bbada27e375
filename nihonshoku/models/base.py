from datetime import datetime, timezone
from nihonshoku.extensions import db


def utcnow():
    """当前 UTC 时间（不带时区，与 DateTime 列一致）"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    return value.isoformat() if value else None


class BaseModel(db.Model):
    """
    模型基类
    包含：ID主键, 创建时间, 保存快捷方法
    """
    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def save(self):
        """保存到数据库"""
        db.session.add(self)
        db.session.commit()

    def update_from(self, data, fields):
        """按白名单字段批量赋值，忽略请求中未出现的字段"""
        for attr, key in fields.items():
            if key in data:
                setattr(self, attr, data[key])
