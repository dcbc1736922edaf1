"""Shopping blueprint - the family's weekly shopping list."""
from flask import Blueprint
from flask_login import login_required

shopping_bp = Blueprint('shopping', __name__, url_prefix='/api/shopping')

# Require authentication for all routes in this blueprint
@shopping_bp.before_request
@login_required
def require_login():
    pass

from . import routes  # noqa: E402,F401
