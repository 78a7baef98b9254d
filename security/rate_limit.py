from datetime import datetime, timedelta
from functools import wraps

from flask import current_app, g, jsonify

from models import db
from models.rate_limit_bucket import RateLimitBucket
from security.bruteforce import client_ips
from utils.audit import log_system_access


def _hit(bucket_key: str, max_requests: int, window_seconds: int) -> tuple[bool, int]:
    """
    Counts one request against a fixed window.
    Returns (allowed, retry_after_seconds).
    """
    now = datetime.utcnow()

    row = RateLimitBucket.query.filter_by(bucket_key=bucket_key).first()
    if not row:
        row = RateLimitBucket(bucket_key=bucket_key, window_start=now, count=0)
        db.session.add(row)

    window_end = row.window_start + timedelta(seconds=window_seconds)

    # Reset window if expired
    if now >= window_end:
        row.window_start = now
        row.count = 0
        window_end = row.window_start + timedelta(seconds=window_seconds)

    row.count += 1
    db.session.commit()

    if row.count > max_requests:
        retry_after = int((window_end - now).total_seconds())
        return False, max(retry_after, 1)

    return True, 0


def check_and_increment_login_rate() -> tuple[bool, int]:
    """Per-IP limit shared by the brand and system login endpoints."""
    remote_ip, _ = client_ips()
    return _hit(
        f"login:{remote_ip}"[:128],
        int(current_app.config.get("AUTH_RATE_MAX_REQUESTS", 5)),
        int(current_app.config.get("AUTH_RATE_WINDOW_SECONDS", 300)),
    )


def limit_system_api(fn):
    """
    Per-user request budget for system endpoints. Goes under
    @require_system_user so g.user is set.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        user = getattr(g, "user", None)
        if user is None:
            return jsonify(error="Authentication required"), 401

        allowed, retry_after = _hit(
            f"system:{user.id}",
            int(current_app.config.get("SYSTEM_API_RATE_MAX_REQUESTS", 100)),
            int(current_app.config.get("SYSTEM_API_RATE_WINDOW_SECONDS", 60)),
        )
        if not allowed:
            log_system_access("RATE_LIMIT_EXCEEDED", {"retry_after": retry_after})
            return jsonify(error="System API rate limit exceeded", resetIn=f"{retry_after} seconds"), 429

        return fn(*args, **kwargs)
    return wrapper
