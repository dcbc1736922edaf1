"""Auth blueprint - registration, login and token issuance."""
from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

# Note: no global login_required here because register and login are public.
# /me applies @login_required itself.

from . import routes  # noqa: E402,F401
