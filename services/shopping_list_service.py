"""
Shopping List Service
Weekly list rollover: works out the current week window, creates the
family's list for it lazily and returns the same list on every call.

Weeks run Monday to Sunday and are identified by their Saturday.  Any date
from Monday to Saturday maps to the Saturday of that week; a Sunday maps
back to the Saturday before it.
"""
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta, MO, SA
from flask import current_app
from sqlalchemy.exc import IntegrityError

from extensions import db
from models.shopping import ShoppingItem, ShoppingList


WEEK_LENGTH = timedelta(days=7)


class ShoppingListService:
    """Service for the family's current weekly shopping list"""

    @staticmethod
    def week_start_for(target=None):
        """Return the Saturday identifying the week that contains *target*."""
        if target is None:
            target = date.today()
        if isinstance(target, datetime):
            target = target.date()
        monday = target + relativedelta(weekday=MO(-1))
        return monday + relativedelta(weekday=SA)

    @staticmethod
    def week_bounds(target=None):
        """Return ``(week_start, week_end)`` where week_end is the next Saturday."""
        start = ShoppingListService.week_start_for(target)
        return start, start + WEEK_LENGTH

    @staticmethod
    def find_current_list(family_id, today=None):
        """Return the active list for this week, or None if not created yet."""
        week_start = ShoppingListService.week_start_for(today)
        return ShoppingList.query.filter_by(
            family_id=family_id,
            week_start=week_start,
            is_archived=False,
        ).first()

    @staticmethod
    def get_current_list(family_id, today=None):
        """
        Find or create the family's active list for the current week.

        Idempotent: repeated calls within the same week return the same row.
        A concurrent creator that loses the race on the unique index re-reads
        the winner's list.
        """
        shopping_list = ShoppingListService.find_current_list(family_id, today)
        if shopping_list is not None:
            return shopping_list

        week_start, week_end = ShoppingListService.week_bounds(today)
        shopping_list = ShoppingList(
            family_id=family_id,
            week_start=week_start,
            week_end=week_end,
            is_archived=False,
        )
        db.session.add(shopping_list)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            current_app.logger.info(
                f'Shopping list for family {family_id} week {week_start} created concurrently; reusing it'
            )
            return ShoppingListService.find_current_list(family_id, today)

        current_app.logger.info(f'Created shopping list {shopping_list.id} for family {family_id} week {week_start}')
        return shopping_list

    @staticmethod
    def add_item(family_id, name, added_by_id, quantity=None, category=None, today=None):
        """Add an item to the family's current list, creating the list if needed."""
        shopping_list = ShoppingListService.get_current_list(family_id, today)
        item = ShoppingItem(
            shopping_list_id=shopping_list.id,
            name=name,
            quantity=quantity or 1,
            category=category or current_app.config.get('DEFAULT_ITEM_CATEGORY', 'Other'),
            added_by_id=added_by_id,
        )
        db.session.add(item)
        db.session.commit()
        return item

    @staticmethod
    def update_item(item, **changes):
        """Apply the given field changes to *item* and commit."""
        for field in ('completed', 'skipped', 'name', 'quantity', 'category'):
            if field in changes and changes[field] is not None:
                setattr(item, field, changes[field])
        db.session.commit()
        return item

    @staticmethod
    def delete_item(item):
        db.session.delete(item)
        db.session.commit()

    @staticmethod
    def archive_current_list(family_id, today=None):
        """Archive this week's active list. Returns the list, or None if there is none."""
        shopping_list = ShoppingListService.find_current_list(family_id, today)
        if shopping_list is None:
            return None
        shopping_list.archive()
        db.session.commit()
        current_app.logger.info(f'Archived shopping list {shopping_list.id} for family {family_id}')
        return shopping_list

    @staticmethod
    def archive_stale_lists(today=None):
        """
        Archive every active list from a week before the current one.

        Returns the number of lists archived.
        """
        current_week = ShoppingListService.week_start_for(today)
        stale = ShoppingList.query.filter(
            ShoppingList.is_archived.is_(False),
            ShoppingList.week_start < current_week,
        ).all()
        for shopping_list in stale:
            shopping_list.archive()
        db.session.commit()

        if stale:
            current_app.logger.info(f'Archived {len(stale)} stale shopping list(s)')
        return len(stale)

    @staticmethod
    def get_history(family_id, limit=10):
        """Return the family's archived lists, newest week first."""
        return (
            ShoppingList.query
            .filter_by(family_id=family_id, is_archived=True)
            .order_by(ShoppingList.week_start.desc(), ShoppingList.archived_at.desc())
            .limit(limit)
            .all()
        )
