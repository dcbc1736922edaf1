"""
User Model for Authentication
Family members who sign in to the shopping list API
"""
from datetime import datetime, timezone

from extensions import db
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(UserMixin, db.Model):
    """User account for authentication"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(100), nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=_utcnow, nullable=False)
    last_login = db.Column(db.DateTime)

    # Profile fields collected at signup
    date_of_birth = db.Column(db.Date)
    hobbies = db.Column(db.Text)
    career = db.Column(db.String(100))
    location = db.Column(db.String(100))

    # Login security fields
    failed_login_attempts = db.Column(db.Integer, default=0, nullable=False)
    locked_until = db.Column(db.DateTime)

    # Family membership
    family_id = db.Column(db.Integer, db.ForeignKey('families.id'), nullable=False, index=True)
    # 'admin' | 'member'
    role = db.Column(db.String(20), nullable=False, default='member')

    family = db.relationship('Family', back_populates='members', foreign_keys=[family_id])

    def set_password(self, password):
        """Hash and set the user's password"""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Check if provided password matches the hash"""
        return check_password_hash(self.password_hash, password)

    def update_last_login(self):
        """Update the last login timestamp"""
        self.last_login = _utcnow()
        db.session.commit()

    def is_locked(self):
        """Check if account is locked due to failed login attempts"""
        if self.locked_until and self.locked_until > _utcnow():
            return True
        return False

    def minutes_until_unlock(self):
        if not self.is_locked():
            return 0
        return int((self.locked_until - _utcnow()).total_seconds() / 60) + 1

    def record_failed_login(self):
        """Record a failed login attempt and lock if threshold exceeded"""
        from flask import current_app
        # An expired lockout starts a fresh count
        if self.locked_until and self.locked_until <= _utcnow():
            self.failed_login_attempts = 0
            self.locked_until = None
        self.failed_login_attempts = (self.failed_login_attempts or 0) + 1

        max_attempts = current_app.config.get('MAX_LOGIN_ATTEMPTS', 5)
        lockout_duration = current_app.config.get('LOCKOUT_DURATION')

        if self.failed_login_attempts >= max_attempts and lockout_duration:
            self.locked_until = _utcnow() + lockout_duration

        db.session.commit()

    def reset_failed_logins(self):
        """Reset failed login attempts after successful login"""
        self.failed_login_attempts = 0
        self.locked_until = None
        db.session.commit()

    def to_summary(self):
        """Compact form embedded in shopping items as ``addedBy``."""
        return {
            'id': self.id,
            'fullName': self.full_name,
            'email': self.email,
        }

    def to_dict(self, include_family=True):
        """Public representation. Never includes the password hash."""
        data = {
            'id': self.id,
            'email': self.email,
            'fullName': self.full_name,
            'role': self.role,
            'dateOfBirth': self.date_of_birth.isoformat() if self.date_of_birth else None,
            'hobbies': self.hobbies,
            'career': self.career,
            'location': self.location,
            'familyId': self.family_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
        if include_family:
            data['lastLogin'] = self.last_login.isoformat() if self.last_login else None
            data['family'] = {'id': self.family.id, 'name': self.family.name} if self.family else None
        return data

    def __repr__(self):
        return f'<User {self.email}>'
