"""User profile model."""
from datetime import datetime
from studiotrack.extensions import db
from studiotrack.domain.constants import EDITOR
from studiotrack.domain.records import new_id


class User(db.Model):
    __tablename__ = 'profiles'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    email = db.Column(db.String(120), unique=True, nullable=False)
    name = db.Column(db.String(100), nullable=False)
    role = db.Column(db.String(20), default=EDITOR)  # admin, editor, assistant
    avatar = db.Column(db.String(500))
    password_hash = db.Column(db.String(256))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'avatar': self.avatar,
        }
