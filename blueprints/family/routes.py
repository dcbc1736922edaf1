"""
Family blueprint routes.

  GET  /api/families/<family_id>          – family summary
  GET  /api/families/<family_id>/members  – members of the family

Both require the caller to belong to the family.
"""
from flask import jsonify

from blueprints.family import family_bp
from extensions import db
from models.family import Family
from models.users import User
from utils.db_helpers import require_family_access


@family_bp.route('/<int:family_id>', methods=['GET'])
def get_family(family_id):
    require_family_access(family_id)
    family = db.get_or_404(Family, family_id, description='Family not found')
    return jsonify(family.to_dict())


@family_bp.route('/<int:family_id>/members', methods=['GET'])
def members(family_id):
    require_family_access(family_id)

    family_members = (
        User.query
        .filter_by(family_id=family_id)
        .order_by(User.created_at, User.id)
        .all()
    )
    return jsonify([member.to_dict(include_family=False) for member in family_members])
