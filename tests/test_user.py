"""
Tests for the User model: password hashing, serialisation, and login lockout.
"""
from datetime import date, datetime, timedelta, timezone

from extensions import db


# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------

class TestPasswordHashing:
    def test_correct_password_accepted(self, app, user):
        assert user.check_password('TestPass1!') is True

    def test_wrong_password_rejected(self, app, user):
        assert user.check_password('WrongPass99!') is False

    def test_password_is_hashed(self, app, user):
        assert user.password_hash != 'TestPass1!', \
            "password_hash must store a hash, not the plain-text password"


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------

class TestToDict:
    def test_never_exposes_password_hash(self, app, user):
        data = user.to_dict()
        assert 'password' not in data
        assert 'passwordHash' not in data
        assert 'password_hash' not in data

    def test_includes_family_summary(self, app, user, family):
        data = user.to_dict()
        assert data['familyId'] == family.id
        assert data['family'] == {'id': family.id, 'name': 'Test Family'}
        assert data['fullName'] == 'Member User'

    def test_member_listing_form_omits_family(self, app, user):
        user.date_of_birth = date(1990, 5, 17)
        db.session.commit()

        data = user.to_dict(include_family=False)
        assert 'family' not in data
        assert data['dateOfBirth'] == '1990-05-17'

    def test_summary_is_what_items_embed(self, app, user):
        assert user.to_summary() == {
            'id': user.id,
            'fullName': 'Member User',
            'email': 'member@example.com',
        }


# ---------------------------------------------------------------------------
# Login lockout
# ---------------------------------------------------------------------------

class TestLoginLockout:
    def test_account_not_locked_initially(self, app, user):
        assert user.is_locked() is False

    def test_lockout_applied_after_max_attempts(self, app, user):
        max_attempts = app.config['MAX_LOGIN_ATTEMPTS']
        for _ in range(max_attempts):
            user.record_failed_login()

        assert user.is_locked() is True
        assert user.locked_until is not None
        assert user.minutes_until_unlock() > 0

    def test_failed_attempts_below_threshold_do_not_lock(self, app, user):
        max_attempts = app.config['MAX_LOGIN_ATTEMPTS']
        for _ in range(max_attempts - 1):
            user.record_failed_login()

        assert user.is_locked() is False

    def test_reset_clears_lockout(self, app, user):
        max_attempts = app.config['MAX_LOGIN_ATTEMPTS']
        for _ in range(max_attempts):
            user.record_failed_login()

        assert user.is_locked() is True

        user.reset_failed_logins()

        assert user.is_locked() is False
        assert user.failed_login_attempts == 0
        assert user.locked_until is None

    def test_expired_lockout_is_not_locked(self, app, user):
        """A locked_until timestamp in the past should not count as locked."""
        user.locked_until = datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(minutes=1)
        db.session.commit()

        assert user.is_locked() is False
        assert user.minutes_until_unlock() == 0

    def test_failure_after_expired_lockout_starts_fresh_count(self, app, user):
        max_attempts = app.config['MAX_LOGIN_ATTEMPTS']
        for _ in range(max_attempts):
            user.record_failed_login()
        user.locked_until = datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(seconds=1)
        db.session.commit()

        user.record_failed_login()

        assert user.failed_login_attempts == 1
        assert user.locked_until is None
        assert user.is_locked() is False
