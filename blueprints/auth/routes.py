"""
Authentication Routes
Registration, login and current-user lookup with security features
"""
from flask import current_app, jsonify
from flask_login import current_user, login_required
from sqlalchemy.exc import IntegrityError
from . import auth_bp
from .forms import LoginForm, RegisterForm
from extensions import db, limiter
from models.family import Family
from models.users import User
from services.token_service import TokenService
from utils.forms import load_json_form, validation_error


def _auth_rate_limit():
    return current_app.config.get('AUTH_RATE_LIMIT', '10 per minute')


def _email_taken(email):
    return User.query.filter_by(email=email).first() is not None


@auth_bp.route('/register', methods=['POST'])
@limiter.limit(_auth_rate_limit)
def register():
    """Create a user, joining (or founding) the named family"""
    form = load_json_form(RegisterForm)
    if not form.validate():
        return validation_error(form)

    if _email_taken(form.email.data):
        return jsonify({'error': 'User already exists'}), 400

    family = Family.find_or_create(form.family_name.data)

    user = User(
        email=form.email.data,
        full_name=form.full_name.data,
        date_of_birth=form.date_of_birth.data,
        hobbies=form.hobbies.data or None,
        career=form.career.data or None,
        location=form.location.data or None,
        family_id=family.id,
        role='member',
    )
    user.set_password(form.password.data)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # Another registration claimed this email after the check above
        db.session.rollback()
        current_app.logger.warning(f'Concurrent registration for {form.email.data} rejected')
        return jsonify({'error': 'User already exists'}), 400

    current_app.logger.info(f'Registered user {user.id} in family {family.id} ({family.name})')

    return jsonify({
        'message': 'User created successfully',
        'user': user.to_dict(),
        'token': TokenService.issue(user),
    }), 201


@auth_bp.route('/login', methods=['POST'])
@limiter.limit(_auth_rate_limit)
def login():
    """Exchange email and password for a bearer token"""
    form = load_json_form(LoginForm)
    if not form.validate():
        return validation_error(form)

    user = User.query.filter_by(email=form.email.data).first()

    if user is None:
        # Same message as a wrong password to prevent user enumeration
        return jsonify({'error': 'Invalid credentials'}), 400

    # Check if account is locked
    if user.is_locked():
        minutes_left = user.minutes_until_unlock()
        return jsonify({
            'error': f'Account temporarily locked due to multiple failed login attempts. '
                     f'Try again in {minutes_left} minutes.'
        }), 423

    # Check if user is active
    if not user.is_active:
        return jsonify({'error': 'This account has been deactivated'}), 403

    if not user.check_password(form.password.data):
        user.record_failed_login()
        if user.is_locked():
            current_app.logger.warning(f'User {user.id} locked out after {user.failed_login_attempts} failed logins')
        else:
            current_app.logger.info(f'Failed login for user {user.id}')
        return jsonify({'error': 'Invalid credentials'}), 400

    user.reset_failed_logins()
    user.update_last_login()

    return jsonify({
        'message': 'Login successful',
        'user': user.to_dict(),
        'token': TokenService.issue(user),
    })


@auth_bp.route('/me', methods=['GET'])
@login_required
def me():
    """Return the user the bearer token belongs to"""
    return jsonify({'user': current_user.to_dict()})
