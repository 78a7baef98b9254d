from functools import wraps
from flask import g, jsonify, request

from models import db
from models.user import User
from security.tokens import (
    SYSTEM_ISSUER,
    SYSTEM_SCOPE,
    TokenError,
    TokenExpired,
    bearer_token,
    decode_token,
    get_auth_settings,
)
from utils.audit import log_auth_attempt, log_system_access


def require_admin(message: str = "Admin access required"):
    """
    Usage: @require_admin()
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            user = getattr(g, "user", None)
            if user is None:
                return jsonify(error="Authentication required"), 401
            if not user.is_admin:
                return jsonify(error=message), 403
            return fn(*args, **kwargs)
        return wrapper
    return decorator


def _authenticate_system_request():
    """
    Returns (user, None) or (None, error_response).
    """
    token = bearer_token(request)
    if not token:
        log_auth_attempt(False, "unknown", "No token provided")
        return None, (jsonify(error="System access token required"), 401)

    try:
        claims = decode_token(token, SYSTEM_ISSUER)
    except TokenExpired:
        log_auth_attempt(False, "unknown", "Token expired")
        return None, (jsonify(error="System token expired"), 401)
    except TokenError as exc:
        log_auth_attempt(False, "unknown", str(exc))
        return None, (jsonify(error="Invalid system token"), 403)

    email = claims.get("email") or "unknown"
    if claims.get("isSystemUser") is not True or claims.get("scope") != SYSTEM_SCOPE:
        log_auth_attempt(False, email, "Invalid token scope")
        return None, (jsonify(error="System user token required"), 403)

    user_id = claims.get("userId")
    user = db.session.get(User, user_id) if user_id is not None else None
    if user is None:
        log_auth_attempt(False, email, "User not found")
        return None, (jsonify(error="Invalid token: user not found"), 401)

    if not user.is_system_user:
        log_auth_attempt(False, user.email_address, "User is not a system user")
        return None, (jsonify(error="User is not authorized as system user"), 403)

    if user.brand_id is not None:
        log_auth_attempt(False, user.email_address, "System user has non-NULL brand_id")
        return None, (jsonify(error="Invalid system user configuration"), 403)

    if not user.is_valid_system_user():
        log_auth_attempt(False, user.email_address, "System user validation failed")
        return None, (jsonify(error="System user validation failed"), 403)

    remote_ip = request.remote_addr or "unknown"
    if not get_auth_settings().ip_allowed(remote_ip):
        log_auth_attempt(False, user.email_address, f"IP not whitelisted: {remote_ip}")
        return None, (jsonify(error="Access denied: IP not whitelisted"), 403)

    log_auth_attempt(True, user.email_address)
    return user, None


def require_system_user(fn):
    """
    Bearer-token guard for cross-brand endpoints. Re-reads the user so
    a demoted or re-branded account loses access immediately.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        user, failure = _authenticate_system_request()
        if failure:
            return failure
        g.user = user
        return fn(*args, **kwargs)
    return wrapper



def require_system_api_enabled():
    """
    before_request hook for every /system blueprint. In production the
    system API stays off until ENABLE_SYSTEM_API is set.
    """
    if not get_auth_settings().system_api_available:
        return jsonify(error="System API is disabled. Set ENABLE_SYSTEM_API=true to enable."), 503
    return None
