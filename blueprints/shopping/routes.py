"""
Shopping blueprint routes.

Family-scoped (caller must belong to <family_id>):
  GET   /api/shopping/<family_id>/current   – find or create this week's list
  POST  /api/shopping/<family_id>/items     – add an item to this week's list
  POST  /api/shopping/<family_id>/archive   – archive this week's list
  GET   /api/shopping/<family_id>/history   – archived lists, newest first

Item-scoped (item must belong to the caller's family):
  PATCH  /api/shopping/items/<item_id>      – update completed/skipped/details
  DELETE /api/shopping/items/<item_id>      – delete an item
"""
from flask import abort, current_app, jsonify, request
from flask_login import current_user

from blueprints.shopping import shopping_bp
from blueprints.shopping.forms import ItemForm, ItemUpdateForm
from models.users import User
from services.shopping_list_service import ShoppingListService
from utils.db_helpers import family_item_or_404, require_family_access
from utils.forms import json_body, load_json_form, validation_error


@shopping_bp.route('/<int:family_id>/current', methods=['GET'])
def current_list(family_id):
    require_family_access(family_id)
    shopping_list = ShoppingListService.get_current_list(family_id)
    return jsonify(shopping_list.to_dict())


@shopping_bp.route('/<int:family_id>/items', methods=['POST'])
def add_item(family_id):
    require_family_access(family_id)

    form = load_json_form(ItemForm)
    if not form.validate():
        return validation_error(form)

    added_by_id = form.added_by_id.data or current_user.id
    if added_by_id != current_user.id:
        added_by = User.query.filter_by(id=added_by_id, family_id=family_id).first()
        if added_by is None:
            abort(400, description='addedById must be a member of this family')

    item = ShoppingListService.add_item(
        family_id,
        name=form.name.data,
        added_by_id=added_by_id,
        quantity=form.quantity.data,
        category=form.category.data,
    )
    return jsonify(item.to_dict()), 201


@shopping_bp.route('/items/<int:item_id>', methods=['PATCH'])
def update_item(item_id):
    item = family_item_or_404(item_id)
    if item.shopping_list.is_archived:
        abort(409, description='Shopping list is archived')

    payload = json_body()
    form = load_json_form(ItemUpdateForm, payload)
    if not form.validate():
        return validation_error(form)

    present = {key for key, value in payload.items() if value is not None}
    item = ShoppingListService.update_item(item, **form.changes(present))
    return jsonify(item.to_dict())


@shopping_bp.route('/items/<int:item_id>', methods=['DELETE'])
def delete_item(item_id):
    item = family_item_or_404(item_id)
    if item.shopping_list.is_archived:
        abort(409, description='Shopping list is archived')

    ShoppingListService.delete_item(item)
    return jsonify({'message': 'Item deleted successfully'})


@shopping_bp.route('/<int:family_id>/archive', methods=['POST'])
def archive_current(family_id):
    require_family_access(family_id)

    shopping_list = ShoppingListService.archive_current_list(family_id)
    if shopping_list is None:
        abort(404, description='No active shopping list for this week')
    return jsonify(shopping_list.to_dict())


@shopping_bp.route('/<int:family_id>/history', methods=['GET'])
def history(family_id):
    require_family_access(family_id)

    max_limit = current_app.config.get('HISTORY_MAX_LIMIT', 52)
    limit = request.args.get('limit', 10, type=int)
    limit = max(1, min(limit, max_limit))

    lists = ShoppingListService.get_history(family_id, limit=limit)
    return jsonify([shopping_list.to_dict() for shopping_list in lists])
