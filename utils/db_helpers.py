"""
Database query helpers for family-scoped access.

Every shopping list belongs to a Family, and users may only read or change
data of the family they belong to.  Routes go through these helpers so one
family can never see another family's lists or items.

Usage
-----
In any blueprint route::

    from utils.db_helpers import require_family_access, family_item_or_404

    # 403 unless the current user belongs to family_id
    require_family_access(family_id)

    # Fetch an item safely (404 if missing *or* owned by another family)
    item = family_item_or_404(item_id)
"""

from flask import abort
from flask_login import current_user

from models.shopping import ShoppingItem, ShoppingList


# ---------------------------------------------------------------------------
# Core helpers
# ---------------------------------------------------------------------------

def get_family_id():
    """Return ``current_user.family_id``, or ``None`` if not authenticated."""
    if current_user.is_authenticated:
        return current_user.family_id
    return None


def require_family_access(family_id):
    """Abort with 403 unless the current user is a member of *family_id*."""
    fid = get_family_id()
    if fid is None or fid != family_id:
        abort(403, description='Access denied')


def family_item_get(item_id):
    """Fetch a ShoppingItem by id, scoped to the current family.

    Returns ``None`` if the item does not exist or belongs to another family.
    """
    fid = get_family_id()
    if fid is None:
        return None
    return (
        ShoppingItem.query
        .join(ShoppingList, ShoppingItem.shopping_list_id == ShoppingList.id)
        .filter(ShoppingItem.id == item_id, ShoppingList.family_id == fid)
        .first()
    )


def family_item_or_404(item_id):
    """Like ``family_item_get`` but aborts with 404 if nothing is found."""
    item = family_item_get(item_id)
    if item is None:
        abort(404, description='Item not found')
    return item
