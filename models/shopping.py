"""
Weekly shopping list models.

A family owns at most one active (non-archived) ShoppingList per week.  The
week is identified by its Saturday (``week_start``); see
``services.shopping_list_service`` for how that date is computed.
"""
from datetime import datetime, timezone

from extensions import db


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _iso(value):
    return value.isoformat() if value else None


class ShoppingList(db.Model):
    """One family's list for one week."""
    __tablename__ = 'shopping_lists'
    __table_args__ = (
        # At most one active list per family per week; archived lists are kept as history
        db.Index(
            'uq_shopping_lists_family_week_active',
            'family_id', 'week_start',
            unique=True,
            sqlite_where=db.text('is_archived = 0'),
            postgresql_where=db.text('is_archived = false'),
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    family_id = db.Column(db.Integer, db.ForeignKey('families.id'), nullable=False, index=True)
    week_start = db.Column(db.Date, nullable=False, index=True)
    week_end = db.Column(db.Date, nullable=False)
    is_archived = db.Column(db.Boolean, default=False, nullable=False)
    archived_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=_utcnow, nullable=False)

    family = db.relationship('Family', back_populates='shopping_lists')
    items = db.relationship(
        'ShoppingItem',
        back_populates='shopping_list',
        cascade='all, delete-orphan',
        order_by='(ShoppingItem.created_at, ShoppingItem.id)',
    )

    def archive(self):
        """Take the list out of rotation (not committed)."""
        self.is_archived = True
        self.archived_at = _utcnow()

    def to_dict(self, include_items=True):
        data = {
            'id': self.id,
            'familyId': self.family_id,
            'weekStart': _iso(self.week_start),
            'weekEnd': _iso(self.week_end),
            'isArchived': self.is_archived,
            'archivedAt': _iso(self.archived_at),
            'createdAt': _iso(self.created_at),
        }
        if include_items:
            data['items'] = [item.to_dict() for item in self.items]
        return data

    def __repr__(self):
        return f'<ShoppingList family={self.family_id} week={self.week_start}>'


class ShoppingItem(db.Model):
    """A single entry on a weekly list."""
    __tablename__ = 'shopping_items'
    __table_args__ = (
        db.CheckConstraint('quantity >= 1', name='ck_shopping_items_quantity_positive'),
    )

    id = db.Column(db.Integer, primary_key=True)
    shopping_list_id = db.Column(db.Integer, db.ForeignKey('shopping_lists.id'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    quantity = db.Column(db.Integer, default=1, nullable=False)
    category = db.Column(db.String(50), default='Other', nullable=False)
    completed = db.Column(db.Boolean, default=False, nullable=False)
    skipped = db.Column(db.Boolean, default=False, nullable=False)
    added_by_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=_utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    shopping_list = db.relationship('ShoppingList', back_populates='items')
    added_by = db.relationship('User')

    def to_dict(self):
        return {
            'id': self.id,
            'shoppingListId': self.shopping_list_id,
            'name': self.name,
            'quantity': self.quantity,
            'category': self.category,
            'completed': self.completed,
            'skipped': self.skipped,
            'addedById': self.added_by_id,
            'addedBy': self.added_by.to_summary() if self.added_by else None,
            'createdAt': _iso(self.created_at),
            'updatedAt': _iso(self.updated_at),
        }

    def __repr__(self):
        return f'<ShoppingItem {self.name} x{self.quantity}>'
