"""
Helpers for validating JSON request bodies with Flask-WTF forms.

The browser client posts camelCase JSON (``fullName``, ``addedById``); forms
declare snake_case fields.  ``load_json_form`` bridges the two and hands the
form a MultiDict so WTForms runs its normal coercion (dates, integers).
"""
import re

from flask import abort, jsonify, request
from werkzeug.datastructures import MultiDict

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def to_snake_case(key):
    return _CAMEL_BOUNDARY.sub('_', key).lower()


def json_body():
    """Return the request's JSON object, aborting with 400 if it is not one."""
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        abort(400, description='Request body must be a JSON object')
    return {to_snake_case(key): value for key, value in payload.items()}


def load_json_form(form_class, payload=None):
    """Build *form_class* from the JSON body (or *payload*) with CSRF disabled.

    Null values are treated as absent.  Booleans are rendered the way
    WTForms' BooleanField expects them.
    """
    if payload is None:
        payload = json_body()

    formdata = MultiDict()
    for key, value in payload.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = 'true' if value else 'false'
        elif isinstance(value, (list, tuple)):
            value = ', '.join(str(v) for v in value)
        formdata.add(key, str(value))

    return form_class(formdata=formdata, meta={'csrf': False})


def validation_error(form):
    """400 response listing the form's field errors."""
    details = {field: messages for field, messages in form.errors.items()}
    first = next(iter(details.values()))[0] if details else 'Invalid request'
    return jsonify({'error': first, 'details': details}), 400
