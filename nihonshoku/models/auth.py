import hashlib
import hmac
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from nihonshoku.extensions import db
from .base import BaseModel, isoformat


def _is_legacy_digest(value):
    """旧版本使用无盐 SHA-256 十六进制摘要存储密码"""
    if not value or len(value) != 64:
        return False
    try:
        int(value, 16)
    except ValueError:
        return False
    return True


class User(UserMixin, BaseModel):
    """用户"""
    __tablename__ = 'users'

    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    email = db.Column(db.String(128), unique=True, nullable=False, index=True)
    password_hash = db.Column('password', db.Text, nullable=False)
    is_admin = db.Column(db.Boolean, default=False, nullable=False)

    @property
    def password(self):
        raise AttributeError('パスワードは読み取りできません')

    @password.setter
    def password(self, password):
        self.password_hash = generate_password_hash(password)

    def verify_password(self, password):
        """
        校验密码。
        旧数据的 SHA-256 摘要校验成功后会升级为加盐哈希（需调用方提交会话）。
        """
        if _is_legacy_digest(self.password_hash):
            digest = hashlib.sha256(password.encode('utf-8')).hexdigest()
            if not hmac.compare_digest(digest, self.password_hash):
                return False
            self.password = password
            return True
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'isAdmin': self.is_admin,
            'createdAt': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<User {self.username}>'
