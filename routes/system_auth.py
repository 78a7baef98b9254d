import time
from datetime import datetime

from flask import Blueprint, jsonify, current_app, g
from sqlalchemy import or_

from models import db
from models.user import User
from security.bruteforce import client_ips, is_locked, lock_minutes, record_attempt
from security.password import verify_password, waste_password_check
from security.rate_limit import check_and_increment_login_rate
from security.rbac import require_system_api_enabled, require_system_user
from security.tokens import get_auth_settings, issue_system_token
from utils.audit import log_auth_attempt, log_system_access
from utils.emailer import send_admin_failed_login_alert
from utils.errors import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    InternalError,
    LockoutError,
    RateLimitError,
    ValidationError,
    json_body,
)

system_auth_bp = Blueprint("system_auth", __name__, url_prefix="/system")
system_auth_bp.before_request(require_system_api_enabled)


def _find_system_user(identifier: str):
    return (
        User.query
        .filter(or_(User.email_address == identifier, User.username == identifier))
        .filter(User.is_system_user.is_(True), User.brand_id.is_(None))
        .first()
    )


def _authenticate(identifier: str, password: str) -> User:
    """
    Walks a system login through lookup, lock check and password check.
    Unknown user and wrong password raise the same AuthenticationError.
    """
    settings = get_auth_settings()

    user = _find_system_user(identifier)
    if user is None:
        waste_password_check(password)
        log_auth_attempt(False, identifier, "System user not found")
        raise AuthenticationError("Invalid credentials")

    if not user.is_valid_system_user():
        log_auth_attempt(False, identifier, "Invalid system user configuration")
        raise AuthorizationError("Invalid system user configuration")

    if is_locked(user.id, settings):
        remote_ip, proxy_ip = client_ips()
        send_admin_failed_login_alert(user.display_name(), remote_ip, proxy_ip, user.brand_id)
        log_auth_attempt(False, identifier, "Account locked")
        raise LockoutError(lock_minutes(settings))

    if not verify_password(password, user):
        record_attempt(user, succeeded=False)
        log_auth_attempt(False, identifier, "Invalid password")
        raise AuthenticationError("Invalid credentials")

    return user


@system_auth_bp.post("/login")
def system_login():
    started = time.monotonic()

    allowed, retry_after = check_and_increment_login_rate()
    if not allowed:
        log_auth_attempt(False, "unknown", "Login rate limit exceeded")
        raise RateLimitError("Too many login attempts. Please wait before trying again.", retry_after_seconds=retry_after)

    data = json_body()
    identifier = data.get("email")
    password = data.get("password")

    try:
        if not isinstance(identifier, str) or not identifier.strip() or not isinstance(password, str) or not password:
            log_auth_attempt(False, identifier if isinstance(identifier, str) and identifier else "unknown", "Missing credentials")
            raise ValidationError("Email and password are required")
        identifier = identifier.strip()

        user = _authenticate(identifier, password)

        record_attempt(user, succeeded=True)
        user.last_logged_in = datetime.utcnow()
        db.session.commit()

        settings = get_auth_settings()
        token = issue_system_token(user, settings)
    except ApiError:
        raise
    except Exception as exc:
        current_app.logger.exception("System login error")
        db.session.rollback()
        log_auth_attempt(False, identifier if isinstance(identifier, str) else "unknown", str(exc))
        raise InternalError() from exc

    log_auth_attempt(True, identifier)
    log_system_access("SYSTEM_LOGIN", {"user_id": user.id, "duration_ms": int((time.monotonic() - started) * 1000)})

    return jsonify(
        message="System login successful",
        token=token,
        expiresIn=settings.system_token_expiry,
        user=user.to_system_dict(),
    ), 200


@system_auth_bp.get("/check-auth")
@require_system_user
def system_check_auth():
    user = g.user
    if not user.is_system_user or user.brand_id is not None:
        log_system_access("INVALID_SYSTEM_AUTH_CHECK")
        return jsonify(error="Not a valid system user"), 403

    log_system_access("SYSTEM_AUTH_CHECK")
    return jsonify(user=user.to_system_dict()), 200


@system_auth_bp.post("/refresh")
@require_system_user
def refresh_system_token():
    user = g.user
    if not user.is_system_user or user.brand_id is not None:
        return jsonify(error="Not a valid system user"), 403

    settings = get_auth_settings()
    token = issue_system_token(user, settings)

    log_system_access("SYSTEM_TOKEN_REFRESH", {"user_id": user.id})
    return jsonify(
        message="Token refreshed successfully",
        token=token,
        expiresIn=settings.system_token_expiry,
    ), 200


@system_auth_bp.post("/logout")
@require_system_user
def system_logout():
    log_system_access("SYSTEM_LOGOUT", {"user_id": g.user.id})
    return jsonify(message="System logout successful"), 200
