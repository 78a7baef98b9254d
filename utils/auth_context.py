from functools import wraps
from flask import g, jsonify, request
from security.tokens import USER_ISSUER, TokenError, bearer_token, decode_token
from models import db
from models.user import User

def load_current_user():
    g.user = None
    g.token_claims = None

    token = bearer_token(request)
    if not token:
        return
    try:
        claims = decode_token(token, USER_ISSUER)
    except TokenError:
        return

    user_id = claims.get("userId")
    user = db.session.get(User, user_id) if user_id is not None else None
    if user is None or user.is_system_user:
        return
    g.token_claims = claims
    g.user = user

def login_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if getattr(g, "user", None) is None:
            return jsonify(error="Authentication required"), 401
        return fn(*args, **kwargs)
    return wrapper
