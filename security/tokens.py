from datetime import datetime, timedelta, timezone

from flask import current_app
from jose import ExpiredSignatureError, JWTError, jwt

from config import AuthSettings

USER_ISSUER = "label-dashboard"
SYSTEM_ISSUER = "system-auth"
SYSTEM_SCOPE = "system"


class TokenError(Exception):
    pass


class TokenExpired(TokenError):
    pass


def get_auth_settings() -> AuthSettings:
    return current_app.extensions["auth_settings"]


def _encode(claims: dict, issuer: str, lifetime_seconds: int, settings: AuthSettings) -> str:
    now = datetime.now(timezone.utc)
    payload = dict(claims)
    payload["iss"] = issuer
    payload["iat"] = now
    payload["exp"] = now + timedelta(seconds=lifetime_seconds)
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def issue_user_token(user, settings: AuthSettings = None) -> str:
    settings = settings or get_auth_settings()
    claims = {
        "userId": user.id,
        "username": user.username,
        "email": user.email_address,
        "brandId": user.brand_id,
    }
    return _encode(claims, USER_ISSUER, settings.user_token_seconds, settings)


def issue_system_token(user, settings: AuthSettings = None) -> str:
    """
    System tokens carry an explicit null brand and the system scope,
    and are shorter-lived than regular tokens.
    """
    settings = settings or get_auth_settings()
    claims = {
        "userId": user.id,
        "username": user.display_name(),
        "email": user.email_address,
        "isSystemUser": True,
        "brandId": None,
        "scope": SYSTEM_SCOPE,
    }
    return _encode(claims, SYSTEM_ISSUER, settings.system_token_seconds, settings)


def decode_token(token: str, issuer: str, settings: AuthSettings = None) -> dict:
    settings = settings or get_auth_settings()
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=issuer,
            options={"require_exp": True},
        )
    except ExpiredSignatureError as exc:
        raise TokenExpired("Token expired") from exc
    except JWTError as exc:
        raise TokenError(f"Invalid token: {exc}") from exc


def bearer_token(request) -> str | None:
    header = request.headers.get("Authorization") or ""
    parts = header.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    if not token or token in ("null", "undefined"):
        return None
    return token
