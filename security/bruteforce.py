import math
from datetime import datetime, timedelta

from flask import request, current_app

from models import db
from models.login_attempt import LoginAttempt


def client_ips() -> tuple[str, str]:
    """
    Returns (remote_ip, proxy_ip)
    """
    remote_ip = request.remote_addr or "unknown"
    proxy_ip = request.headers.get("X-Forwarded-For") or "unknown"
    return remote_ip, proxy_ip


def is_locked(user_id: int, settings, now: datetime = None) -> bool:
    """
    True when the user's last FAILED_LOGIN_LIMIT attempts all failed
    within the last LOCK_TIME_IN_SECONDS.
    """
    limit = settings.failed_login_limit
    try:
        recent = (
            LoginAttempt.query
            .filter_by(user_id=user_id)
            .order_by(LoginAttempt.date_and_time.desc(), LoginAttempt.id.desc())
            .limit(limit)
            .all()
        )
        if len(recent) < limit:
            return False

        now = now or datetime.utcnow()
        cutoff = now - timedelta(seconds=settings.lock_time_seconds)
        failures = sum(
            1 for row in recent
            if row.status == "Failed" and row.date_and_time > cutoff
        )
        return failures >= limit
    except Exception:
        # fail open: a broken attempts table must not block every login
        current_app.logger.exception("Error checking login lock for user %s", user_id)
        db.session.rollback()
        return False


def lock_minutes(settings) -> int:
    return math.ceil(settings.lock_time_seconds / 60)


def record_attempt(user, succeeded: bool) -> LoginAttempt:
    remote_ip, proxy_ip = client_ips()
    row = LoginAttempt(
        user_id=user.id,
        status="Successful" if succeeded else "Failed",
        date_and_time=datetime.utcnow(),
        brand_id=user.brand_id,
        remote_ip=remote_ip[:45],
        proxy_ip=proxy_ip[:45],
    )
    db.session.add(row)
    db.session.commit()
    return row
