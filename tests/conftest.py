"""
Shared pytest fixtures for the FamList backend test suite.

All tests run against an in-memory SQLite database (TestingConfig).
A single app context is pushed for the whole session so that SQLAlchemy
objects remain attached throughout.  After each test, clean_db wipes all
rows so tests are fully independent.
"""
import pytest
from flask import g

from app import create_app
from extensions import db as _db


# ---------------------------------------------------------------------------
# Application / database lifecycle
# ---------------------------------------------------------------------------

@pytest.fixture(scope='session')
def app():
    """Create a test Flask application with an in-memory SQLite database."""
    application = create_app('testing')
    ctx = application.app_context()
    ctx.push()
    _db.create_all()
    yield application
    _db.session.remove()
    _db.drop_all()
    ctx.pop()


@pytest.fixture(autouse=True)
def clean_db(app):
    """Wipe every table after each test so tests never share state."""
    yield
    _db.session.rollback()
    for table in reversed(_db.metadata.sorted_tables):
        _db.session.execute(table.delete())
    _db.session.commit()
    _db.session.expunge_all()


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------

class ApiClient:
    """Thin wrapper over the Flask test client that signs requests as *user*."""

    def __init__(self, client):
        self.client = client

    def request(self, method, url, user=None, token=None, json=None, headers=None):
        from services.token_service import TokenService

        # Flask-Login caches current_user on g, which outlives a single
        # request while the session-wide app context stays pushed.
        g.pop('_login_user', None)

        headers = dict(headers or {})
        if user is not None:
            token = TokenService.issue(user)
        if token is not None:
            headers['Authorization'] = f'Bearer {token}'
        return self.client.open(url, method=method, json=json, headers=headers)

    def get(self, url, **kwargs):
        return self.request('GET', url, **kwargs)

    def post(self, url, **kwargs):
        return self.request('POST', url, **kwargs)

    def patch(self, url, **kwargs):
        return self.request('PATCH', url, **kwargs)

    def delete(self, url, **kwargs):
        return self.request('DELETE', url, **kwargs)


@pytest.fixture
def api(app):
    return ApiClient(app.test_client())


# ---------------------------------------------------------------------------
# Common model helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def family(app):
    from models.family import Family
    f = Family(name='Test Family')
    _db.session.add(f)
    _db.session.commit()
    return f


@pytest.fixture
def user(app, family):
    from models.users import User
    u = User(
        email='member@example.com',
        full_name='Member User',
        family_id=family.id,
        role='member',
    )
    u.set_password('TestPass1!')
    _db.session.add(u)
    _db.session.commit()
    return u


@pytest.fixture
def other_family_user(app):
    """A user in a second, unrelated family."""
    from models.family import Family
    from models.users import User
    f = Family(name='Other Family')
    _db.session.add(f)
    _db.session.commit()
    u = User(
        email='outsider@example.com',
        full_name='Outside User',
        family_id=f.id,
    )
    u.set_password('TestPass1!')
    _db.session.add(u)
    _db.session.commit()
    return u
