"""
Authentication Forms
Validation for the JSON register and login bodies
"""
from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, DateField
from wtforms.validators import DataRequired, Email, Length, Optional, ValidationError
import re


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _normalise_email(value):
    return value.strip().lower() if isinstance(value, str) else value


class LoginForm(FlaskForm):
    """Login body: email and password"""
    email = StringField('Email', filters=[_normalise_email], validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email address')
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])


class RegisterForm(FlaskForm):
    """Registration body: the new member, their profile and the family to join"""
    email = StringField('Email', filters=[_normalise_email], validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email address')
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])
    full_name = StringField('Full Name', filters=[_strip], validators=[
        DataRequired(message='Full name is required'),
        Length(min=2, max=100, message='Full name must be between 2 and 100 characters')
    ])
    family_name = StringField('Family Name', filters=[_strip], validators=[
        DataRequired(message='Family name is required'),
        Length(min=2, max=100, message='Family name must be between 2 and 100 characters')
    ])
    date_of_birth = DateField('Date of Birth', validators=[Optional()],
                              format=['%Y-%m-%d', '%Y-%m-%dT%H:%M:%S.%fZ', '%Y-%m-%dT%H:%M:%SZ'])
    hobbies = StringField('Hobbies', filters=[_strip], validators=[Optional(), Length(max=1000)])
    career = StringField('Career', filters=[_strip], validators=[Optional(), Length(max=100)])
    location = StringField('Location', filters=[_strip], validators=[Optional(), Length(max=100)])

    def validate_password(self, field):
        is_valid, error_msg = validate_password_strength(field.data or '')
        if not is_valid:
            raise ValidationError(error_msg)


def validate_password_strength(password):
    """
    Validate password meets security requirements
    Returns: (is_valid, error_message)
    """
    from flask import current_app

    min_length = current_app.config.get('PASSWORD_MIN_LENGTH', 8)
    require_uppercase = current_app.config.get('PASSWORD_REQUIRE_UPPERCASE', False)
    require_lowercase = current_app.config.get('PASSWORD_REQUIRE_LOWERCASE', True)
    require_digit = current_app.config.get('PASSWORD_REQUIRE_DIGIT', True)
    require_special = current_app.config.get('PASSWORD_REQUIRE_SPECIAL', False)

    errors = []

    if len(password) < min_length:
        errors.append(f"at least {min_length} characters")

    if require_uppercase and not re.search(r'[A-Z]', password):
        errors.append("an uppercase letter")

    if require_lowercase and not re.search(r'[a-z]', password):
        errors.append("a lowercase letter")

    if require_digit and not re.search(r'\d', password):
        errors.append("a number")

    if require_special and not re.search(r'[!@#$%^&*(),.?":{}|<>]', password):
        errors.append("a special character (!@#$%^&*(),.?\":{}|<>)")

    if errors:
        return False, f"Password must contain {', '.join(errors)}"

    return True, None
