"""Tests for the login lock checker in security.bruteforce."""

from datetime import datetime, timedelta
from types import SimpleNamespace

from sqlalchemy.exc import SQLAlchemyError

from config import AuthSettings
from models import db
from models.login_attempt import LoginAttempt
from security import bruteforce
from security.bruteforce import is_locked, lock_minutes

NOW = datetime(2026, 3, 1, 12, 0, 0)
SETTINGS = AuthSettings(jwt_secret="x", failed_login_limit=3, lock_time_seconds=120)


def _attempt(user, status, seconds_ago):
    db.session.add(LoginAttempt(
        user_id=user.id,
        status=status,
        date_and_time=NOW - timedelta(seconds=seconds_ago),
        brand_id=user.brand_id,
    ))
    db.session.commit()


def test_no_attempts_is_not_locked(system_user) -> None:
    assert is_locked(system_user.id, SETTINGS, now=NOW) is False


def test_fewer_attempts_than_limit_is_not_locked(system_user) -> None:
    """Two recent failures with a limit of three never lock."""
    _attempt(system_user, "Failed", 10)
    _attempt(system_user, "Failed", 5)
    assert is_locked(system_user.id, SETTINGS, now=NOW) is False


def test_limit_recent_failures_locks(system_user) -> None:
    for seconds_ago in (30, 20, 10):
        _attempt(system_user, "Failed", seconds_ago)
    assert is_locked(system_user.id, SETTINGS, now=NOW) is True


def test_lock_expires_after_window(system_user) -> None:
    """The same failures stop counting once they are older than the lock time."""
    for seconds_ago in (30, 20, 10):
        _attempt(system_user, "Failed", seconds_ago)
    later = NOW + timedelta(seconds=121)
    assert is_locked(system_user.id, SETTINGS, now=later) is False


def test_success_within_last_attempts_unlocks(system_user) -> None:
    _attempt(system_user, "Failed", 40)
    _attempt(system_user, "Failed", 30)
    _attempt(system_user, "Successful", 20)
    _attempt(system_user, "Failed", 10)
    assert is_locked(system_user.id, SETTINGS, now=NOW) is False


def test_only_latest_attempts_are_considered(system_user) -> None:
    """Older successes outside the last N attempts do not prevent a lock."""
    _attempt(system_user, "Successful", 60)
    for seconds_ago in (30, 20, 10):
        _attempt(system_user, "Failed", seconds_ago)
    assert is_locked(system_user.id, SETTINGS, now=NOW) is True


def test_one_failure_outside_window_does_not_lock(system_user) -> None:
    _attempt(system_user, "Failed", 300)
    _attempt(system_user, "Failed", 20)
    _attempt(system_user, "Failed", 10)
    assert is_locked(system_user.id, SETTINGS, now=NOW) is False


def test_attempts_of_other_users_are_ignored(system_user, brand_user) -> None:
    for seconds_ago in (30, 20, 10):
        _attempt(brand_user, "Failed", seconds_ago)
    assert is_locked(system_user.id, SETTINGS, now=NOW) is False
    assert is_locked(brand_user.id, SETTINGS, now=NOW) is True


def test_custom_limit(system_user) -> None:
    strict = AuthSettings(jwt_secret="x", failed_login_limit=1, lock_time_seconds=120)
    _attempt(system_user, "Failed", 10)
    assert is_locked(system_user.id, strict, now=NOW) is True


class _BrokenQuery:
    def filter_by(self, **kwargs):
        raise SQLAlchemyError("attempts table unavailable")


def test_lookup_failure_fails_open(system_user, monkeypatch) -> None:
    """A broken attempts lookup reports unlocked rather than blocking logins."""
    monkeypatch.setattr(bruteforce, "LoginAttempt", SimpleNamespace(query=_BrokenQuery()))
    assert is_locked(system_user.id, SETTINGS, now=NOW) is False


def test_lock_minutes_rounds_up() -> None:
    assert lock_minutes(SETTINGS) == 2
    assert lock_minutes(AuthSettings(jwt_secret="x", lock_time_seconds=90)) == 2
    assert lock_minutes(AuthSettings(jwt_secret="x", lock_time_seconds=600)) == 10
