from flask import Blueprint, jsonify, g

from models import db
from security.password import verify_password, set_password
from security.password_policy import validate_password
from utils.audit import log_event
from utils.auth_context import login_required
from utils.errors import json_body, text_field

profile_bp = Blueprint("profile", __name__, url_prefix="/profile")


@profile_bp.get("")
@login_required
def get_profile():
    user = g.user
    return jsonify(
        id=user.id,
        username=user.username,
        email_address=user.email_address,
        first_name=user.first_name,
        last_name=user.last_name,
        is_admin=bool(user.is_admin),
        last_login=user.last_logged_in.isoformat() if user.last_logged_in else None,
    ), 200


@profile_bp.put("")
@login_required
def update_profile():
    data = json_body()
    first_name = data.get("first_name")
    last_name = data.get("last_name")

    for field, value in (("first_name", first_name), ("last_name", last_name)):
        if value is not None and (not isinstance(value, str) or len(value.strip()) > 45):
            return jsonify(errors={field: f"Invalid {field}"}), 400

    g.user.first_name = (first_name or "").strip() or None
    g.user.last_name = (last_name or "").strip() or None
    db.session.commit()

    log_event("PROFILE_UPDATE", user_id=g.user.id)
    return jsonify(message="Profile updated successfully"), 200


@profile_bp.post("/change-password")
@login_required
def change_password():
    data = json_body()
    current_password = text_field(data, "current_password", strip=False)
    new_password = text_field(data, "new_password", strip=False)

    if not current_password or not new_password:
        return jsonify(error="Current password and new password are required"), 400

    valid, errors = validate_password(new_password)
    if not valid:
        return jsonify(error=errors[0], details=errors), 400

    if not verify_password(current_password, g.user):
        return jsonify(error="Current password is incorrect"), 400

    set_password(g.user, new_password)
    db.session.commit()

    log_event("PASSWORD_CHANGED", user_id=g.user.id)
    return jsonify(message="Password changed successfully"), 200
