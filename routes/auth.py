from datetime import datetime

from flask import Blueprint, jsonify, current_app, g
from sqlalchemy import or_

from models import db
from models.user import User
from security.bruteforce import client_ips, is_locked, lock_minutes, record_attempt
from security.password import verify_password, set_password, waste_password_check
from security.password_policy import validate_password
from security.rate_limit import check_and_increment_login_rate
from security.tokens import get_auth_settings, issue_user_token
from utils.audit import log_event
from utils.auth_context import login_required
from utils.emailer import send_email, send_admin_failed_login_alert
from utils.errors import json_body, text_field
from utils.generators import generate_secure_token


auth_bp = Blueprint("auth", __name__, url_prefix="/auth")

DEFAULT_BRAND_ID = 1


def _brand_id_from(data) -> int | None:
    raw = data.get("brand_id", DEFAULT_BRAND_ID)
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def _find_brand_user(identifier: str, brand_id: int):
    return (
        User.query
        .filter(or_(User.username == identifier, User.email_address == identifier))
        .filter(User.brand_id == brand_id, User.is_system_user.is_(False))
        .first()
    )


@auth_bp.post("/login")
def login():
    allowed, retry_after = check_and_increment_login_rate()
    if not allowed:
        log_event("LOGIN_RATE_LIMIT", metadata={"retry_after": retry_after})
        return jsonify(error="Too many login attempts. Please wait before trying again.", retry_after_seconds=retry_after), 429

    data = json_body()
    username = text_field(data, "username")
    password = text_field(data, "password", strip=False)

    if not username or not password:
        return jsonify(error="Username and password are required"), 400

    brand_id = _brand_id_from(data)
    if brand_id is None:
        return jsonify(error="Invalid brand"), 400

    user = _find_brand_user(username, brand_id)
    if not user:
        waste_password_check(password)
        log_event("LOGIN_FAIL", metadata={"username": username, "brand_id": brand_id, "reason": "no_user"})
        return jsonify(error="Invalid credentials"), 401

    if not user.has_password():
        return jsonify(error="Profile setup required"), 403

    settings = get_auth_settings()
    if is_locked(user.id, settings):
        remote_ip, proxy_ip = client_ips()
        send_admin_failed_login_alert(user.display_name(), remote_ip, proxy_ip, user.brand_id)
        log_event("LOGIN_LOCKED", user_id=user.id)
        minutes = lock_minutes(settings)
        return jsonify(
            error=f"Account temporarily locked due to too many failed logins. Please try again in {minutes} minutes.",
            retry_after_minutes=minutes,
        ), 423

    if not verify_password(password, user):
        record_attempt(user, succeeded=False)
        log_event("LOGIN_FAIL", user_id=user.id, metadata={"reason": "password"})
        return jsonify(error="Invalid credentials"), 401

    record_attempt(user, succeeded=True)
    user.last_logged_in = datetime.utcnow()
    db.session.commit()

    token = issue_user_token(user, settings)
    log_event("LOGIN_SUCCESS", user_id=user.id)
    return jsonify(message="Login successful", token=token, user=user.to_dict()), 200


@auth_bp.post("/logout")
def logout():
    # tokens are stateless; the client drops it
    user = getattr(g, "user", None)
    if user is not None:
        log_event("LOGOUT", user_id=user.id)
    return jsonify(message="Logout successful"), 200


@auth_bp.get("/me")
@login_required
def me():
    return jsonify(user=g.user.to_dict()), 200


@auth_bp.post("/forgot-password")
def forgot_password():
    data = json_body()
    email = text_field(data, "email_address")
    brand_id = _brand_id_from(data)
    if not email or brand_id is None:
        return jsonify(error="Email address is required"), 400

    user = User.query.filter_by(email_address=email, brand_id=brand_id, is_system_user=False).first()
    if user:
        user.reset_hash = generate_secure_token()
        db.session.commit()

        link = f"{current_app.config.get('FRONTEND_URL', '').rstrip('/')}/reset-password?code={user.reset_hash}"
        send_email(
            user.email_address,
            "Here's the link to reset your password.",
            f"Use this link to reset your password:\n\n{link}\n\nIf you didn't ask for this, ignore this email.",
            brand_id=user.brand_id,
        )
        log_event("PASSWORD_RESET_REQUESTED", user_id=user.id)

    # same answer whether or not the address exists
    return jsonify(message="If the address is registered, a reset link has been sent."), 200


@auth_bp.post("/reset-password")
def reset_password():
    data = json_body()
    code = text_field(data, "code")
    new_password = text_field(data, "new_password", strip=False)

    if not code or not new_password:
        return jsonify(error="Reset code and new password are required"), 400

    valid, errors = validate_password(new_password)
    if not valid:
        return jsonify(error="Password does not meet policy", details=errors), 400

    user = User.query.filter_by(reset_hash=code).first()
    if not user:
        return jsonify(error="Invalid or expired reset code"), 404

    set_password(user, new_password)
    user.reset_hash = None
    db.session.commit()

    log_event("PASSWORD_RESET", user_id=user.id)
    return jsonify(message="Password reset successfully"), 200
