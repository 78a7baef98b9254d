import re

from flask import Blueprint, jsonify

from models import db
from models.artist import ArtistAccess
from models.user import User
from security.password import set_password
from security.password_policy import validate_password
from security.tokens import issue_user_token
from utils.audit import log_event
from utils.errors import json_body, text_field

invite_bp = Blueprint("invite", __name__, url_prefix="/invite")

_USERNAME_RE = re.compile(r"^[A-Za-z0-9_]+$")


def _access_for(invite_hash):
    if not invite_hash:
        return None
    return ArtistAccess.query.filter_by(invite_hash=invite_hash).first()


def _accept(access: ArtistAccess) -> None:
    access.status = "Accepted"
    access.invite_hash = None


@invite_bp.post("/process")
def process_invite():
    data = json_body()
    invite_hash = text_field(data, "invite_hash")
    if not invite_hash:
        return jsonify(error="Invite hash is required"), 400

    access = _access_for(invite_hash)
    if not access:
        return jsonify(error="Invalid invite hash"), 404

    user = access.user
    if not user:
        return jsonify(error="User not found"), 404

    if not user.has_password():
        return jsonify(action="redirect_to_setup"), 200

    _accept(access)
    db.session.commit()
    log_event("INVITE_ACCEPTED", user_id=user.id, entity="artist", entity_id=access.artist_id)

    return jsonify(
        action="redirect_to_artist",
        token=issue_user_token(user),
        user=user.to_dict(),
        artist_id=access.artist_id,
    ), 200


@invite_bp.get("/<invite_hash>")
def get_invite_data(invite_hash: str):
    access = _access_for(invite_hash)
    if not access:
        return jsonify(error="Invalid invite hash"), 404

    user = access.user
    if not user:
        return jsonify(error="User not found"), 404

    return jsonify(
        user={
            "id": user.id,
            "username": user.username or "",
            "email_address": user.email_address,
            "first_name": user.first_name or "",
            "last_name": user.last_name or "",
            "is_admin": bool(user.is_admin),
            "brand_id": user.brand_id,
        },
        artist_access_id=f"{access.artist_id}_{access.user_id}",
    ), 200


@invite_bp.post("/setup")
def setup_user_profile():
    data = json_body()
    username = text_field(data, "username")
    first_name = text_field(data, "first_name")
    last_name = text_field(data, "last_name")
    password = text_field(data, "password", strip=False)
    invite_hash = text_field(data, "invite_hash")

    if not first_name or not last_name or not password or not invite_hash:
        return jsonify(error="First name, last name, password, and invite hash are required"), 400

    access = _access_for(invite_hash)
    if not access:
        return jsonify(error="Invalid invite hash"), 404

    user = access.user
    if not user:
        return jsonify(error="User not found"), 404

    if username:
        if not _USERNAME_RE.match(username):
            return jsonify(errors={
                "username": "Only alphanumeric characters [A-Z, a-z, 0-9] and underscores are allowed"
            }), 400

        taken = (
            User.query
            .filter(User.username == username, User.brand_id == user.brand_id, User.id != user.id)
            .first()
        )
        if taken:
            return jsonify(errors={
                "username": "Sorry, this username is already in use. Please choose another"
            }), 400

    valid, errors = validate_password(password)
    if not valid:
        return jsonify(errors={"password": errors[0]}), 400

    user.username = username or user.username
    user.first_name = first_name
    user.last_name = last_name
    set_password(user, password)
    _accept(access)
    db.session.commit()

    log_event("PROFILE_SETUP", user_id=user.id, entity="artist", entity_id=access.artist_id)
    return jsonify(
        message="Profile setup successful",
        token=issue_user_token(user),
        user=user.to_dict(),
    ), 200
