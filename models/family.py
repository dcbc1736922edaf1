"""
Family model.
A Family groups users together around a shared weekly shopping list.
"""
from datetime import datetime, timezone
from sqlalchemy.exc import IntegrityError

from extensions import db


class Family(db.Model):
    """Represents a household sharing one shopping list per week."""
    __tablename__ = 'families'

    id = db.Column(db.Integer, primary_key=True)
    # Registration joins an existing family by name, so names are unique
    name = db.Column(db.String(100), unique=True, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None), nullable=False)

    # Relationships
    members = db.relationship('User', back_populates='family', lazy='dynamic')
    shopping_lists = db.relationship('ShoppingList', back_populates='family',
                                     lazy='dynamic', cascade='all, delete-orphan')

    @classmethod
    def find_by_name(cls, name):
        return cls.query.filter_by(name=name).first()

    @classmethod
    def find_or_create(cls, name):
        """Return the family called *name*, creating it if needed (not committed).

        If a concurrent registration creates the same family first, the
        session is rolled back and the winner's row is returned.
        """
        family = cls.find_by_name(name)
        if family is None:
            family = cls(name=name)
            db.session.add(family)
            try:
                db.session.flush()
            except IntegrityError:
                db.session.rollback()
                family = cls.query.filter_by(name=name).one()
        return family

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'memberCount': self.members.count(),
        }

    def __repr__(self):
        return f'<Family {self.name}>'
