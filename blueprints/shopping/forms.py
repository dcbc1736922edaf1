"""
Shopping Forms
Validation for item create and update bodies
"""
from flask_wtf import FlaskForm
from wtforms import BooleanField, IntegerField, StringField
from wtforms.validators import DataRequired, Length, NumberRange, Optional, ValidationError


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class ItemForm(FlaskForm):
    """New item on the current week's list"""
    name = StringField('Name', filters=[_strip], validators=[
        DataRequired(message='Item name is required'),
        Length(max=200, message='Item name must be at most 200 characters')
    ])
    quantity = IntegerField('Quantity', validators=[
        Optional(),
        NumberRange(min=1, message='Quantity must be at least 1')
    ])
    category = StringField('Category', filters=[_strip], validators=[
        Optional(),
        Length(max=50, message='Category must be at most 50 characters')
    ])
    added_by_id = IntegerField('Added By', validators=[Optional()])


class ItemUpdateForm(FlaskForm):
    """Partial item update; only the fields present in the body are applied"""
    name = StringField('Name', filters=[_strip], validators=[
        Length(max=200, message='Item name must be between 1 and 200 characters')
    ])
    quantity = IntegerField('Quantity', validators=[
        Optional(),
        NumberRange(min=1, message='Quantity must be at least 1')
    ])
    category = StringField('Category', filters=[_strip], validators=[
        Optional(),
        Length(max=50, message='Category must be at most 50 characters')
    ])
    completed = BooleanField('Completed')
    skipped = BooleanField('Skipped')

    UPDATABLE = ('name', 'quantity', 'category', 'completed', 'skipped')

    def validate_name(self, field):
        # Absent is fine; sent but blank is not
        if field.raw_data and not field.data:
            raise ValidationError('Item name cannot be empty')

    def changes(self, present_keys):
        """Return the validated values for the keys the client actually sent."""
        changes = {}
        for field in self.UPDATABLE:
            if field not in present_keys:
                continue
            value = getattr(self, field).data
            if field == 'category' and not value:
                continue
            changes[field] = value
        return changes
