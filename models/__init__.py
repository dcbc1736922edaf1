# Models package - Import all models for Flask-SQLAlchemy

from models.family import Family
from models.shopping import ShoppingItem, ShoppingList
from models.users import User

__all__ = [
    'Family',
    'ShoppingItem',
    'ShoppingList',
    'User',
]
