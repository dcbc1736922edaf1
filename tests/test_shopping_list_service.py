"""
Tests for ShoppingListService: the Saturday week window and the
find-or-create current list.
"""
from datetime import date, datetime, timedelta

import pytest

from extensions import db
from models.shopping import ShoppingList
from services.shopping_list_service import ShoppingListService


MONDAY = date(2024, 6, 3)
SATURDAY = date(2024, 6, 8)
SUNDAY = date(2024, 6, 9)
NEXT_MONDAY = date(2024, 6, 10)


# ---------------------------------------------------------------------------
# Week window
# ---------------------------------------------------------------------------

class TestWeekStart:
    @pytest.mark.parametrize('day', [
        date(2024, 6, 3),   # Monday
        date(2024, 6, 5),   # Wednesday
        date(2024, 6, 7),   # Friday
        date(2024, 6, 8),   # Saturday itself
        date(2024, 6, 9),   # Sunday closes the week
    ])
    def test_every_day_of_the_week_maps_to_its_saturday(self, day):
        assert ShoppingListService.week_start_for(day) == SATURDAY

    def test_next_monday_starts_a_new_week(self):
        assert ShoppingListService.week_start_for(NEXT_MONDAY) == date(2024, 6, 15)

    def test_accepts_datetimes_and_drops_the_time(self):
        assert ShoppingListService.week_start_for(datetime(2024, 6, 5, 23, 59)) == SATURDAY

    def test_crosses_year_boundary(self):
        assert ShoppingListService.week_start_for(date(2024, 12, 30)) == date(2025, 1, 4)

    def test_result_is_always_a_saturday(self):
        for offset in range(14):
            day = date(2024, 2, 20) + timedelta(days=offset)
            assert ShoppingListService.week_start_for(day).weekday() == 5

    def test_week_bounds_span_seven_days(self):
        start, end = ShoppingListService.week_bounds(MONDAY)
        assert start == SATURDAY
        assert end == date(2024, 6, 15)


# ---------------------------------------------------------------------------
# Find-or-create
# ---------------------------------------------------------------------------

class TestGetCurrentList:
    def test_creates_list_lazily(self, app, family):
        assert ShoppingListService.find_current_list(family.id, today=MONDAY) is None

        shopping_list = ShoppingListService.get_current_list(family.id, today=MONDAY)

        assert shopping_list.id is not None
        assert shopping_list.week_start == SATURDAY
        assert shopping_list.week_end == date(2024, 6, 15)
        assert shopping_list.is_archived is False

    def test_is_idempotent_within_a_week(self, app, family):
        first = ShoppingListService.get_current_list(family.id, today=MONDAY)
        second = ShoppingListService.get_current_list(family.id, today=SUNDAY)

        assert first.id == second.id
        assert ShoppingList.query.filter_by(family_id=family.id).count() == 1

    def test_new_week_gets_a_new_list(self, app, family):
        this_week = ShoppingListService.get_current_list(family.id, today=MONDAY)
        next_week = ShoppingListService.get_current_list(family.id, today=NEXT_MONDAY)

        assert this_week.id != next_week.id
        assert next_week.week_start == date(2024, 6, 15)

    def test_lists_are_per_family(self, app, family, other_family_user):
        ours = ShoppingListService.get_current_list(family.id, today=MONDAY)
        theirs = ShoppingListService.get_current_list(other_family_user.family_id, today=MONDAY)

        assert ours.id != theirs.id

    def test_concurrent_creation_reuses_existing_list(self, app, family, monkeypatch):
        existing_id = ShoppingListService.get_current_list(family.id, today=MONDAY).id
        real_find = ShoppingListService.find_current_list
        calls = []

        def miss_once(family_id, today=None):
            calls.append(family_id)
            if len(calls) == 1:
                return None  # another request has not committed yet
            return real_find(family_id, today)

        monkeypatch.setattr(ShoppingListService, 'find_current_list', staticmethod(miss_once))

        shopping_list = ShoppingListService.get_current_list(family.id, today=MONDAY)

        assert shopping_list.id == existing_id
        assert ShoppingList.query.filter_by(family_id=family.id).count() == 1


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------

class TestItems:
    def test_add_item_applies_defaults(self, app, family, user):
        item = ShoppingListService.add_item(family.id, name='Milk', added_by_id=user.id, today=MONDAY)

        assert item.quantity == 1
        assert item.category == 'Other'
        assert item.completed is False
        assert item.skipped is False
        assert item.shopping_list.week_start == SATURDAY

    def test_add_item_creates_list_once(self, app, family, user):
        ShoppingListService.add_item(family.id, name='Milk', added_by_id=user.id, today=MONDAY)
        ShoppingListService.add_item(family.id, name='Eggs', added_by_id=user.id, quantity=12,
                                     category='Dairy', today=MONDAY)

        shopping_list = ShoppingListService.get_current_list(family.id, today=MONDAY)
        assert [i.name for i in shopping_list.items] == ['Milk', 'Eggs']
        assert shopping_list.items[1].quantity == 12
        assert ShoppingList.query.filter_by(family_id=family.id).count() == 1

    def test_update_item_ignores_missing_fields(self, app, family, user):
        item = ShoppingListService.add_item(family.id, name='Milk', added_by_id=user.id, today=MONDAY)

        ShoppingListService.update_item(item, completed=True, quantity=None)

        assert item.completed is True
        assert item.quantity == 1

    def test_delete_item(self, app, family, user):
        item = ShoppingListService.add_item(family.id, name='Milk', added_by_id=user.id, today=MONDAY)
        shopping_list = item.shopping_list

        ShoppingListService.delete_item(item)

        db.session.refresh(shopping_list)
        assert shopping_list.items == []


# ---------------------------------------------------------------------------
# Archiving
# ---------------------------------------------------------------------------

class TestArchiving:
    def test_archive_current_list_then_recreate(self, app, family):
        original = ShoppingListService.get_current_list(family.id, today=MONDAY)

        archived = ShoppingListService.archive_current_list(family.id, today=MONDAY)
        assert archived.id == original.id
        assert archived.is_archived is True
        assert archived.archived_at is not None

        fresh = ShoppingListService.get_current_list(family.id, today=MONDAY)
        assert fresh.id != original.id
        assert fresh.week_start == original.week_start

    def test_archive_without_active_list_returns_none(self, app, family):
        assert ShoppingListService.archive_current_list(family.id, today=MONDAY) is None

    def test_archive_stale_lists_keeps_current_week(self, app, family):
        old = ShoppingListService.get_current_list(family.id, today=MONDAY)
        current = ShoppingListService.get_current_list(family.id, today=NEXT_MONDAY)

        count = ShoppingListService.archive_stale_lists(today=NEXT_MONDAY)

        assert count == 1
        assert old.is_archived is True
        assert current.is_archived is False

    def test_history_is_newest_first(self, app, family):
        for day in (MONDAY, NEXT_MONDAY, date(2024, 6, 17)):
            ShoppingListService.get_current_list(family.id, today=day)
            ShoppingListService.archive_current_list(family.id, today=day)

        history = ShoppingListService.get_history(family.id, limit=2)

        assert [sl.week_start for sl in history] == [date(2024, 6, 22), date(2024, 6, 15)]
