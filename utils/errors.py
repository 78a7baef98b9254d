from flask import jsonify, request


class ApiError(Exception):
    """An error that maps directly onto a JSON response."""

    status_code = 400
    default_message = "Bad request"

    def __init__(self, message: str = None, **extra):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.extra = extra

    def to_response(self):
        return jsonify(error=self.message, **self.extra), self.status_code


class ValidationError(ApiError):
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(ApiError):
    status_code = 401
    default_message = "Invalid credentials"


class AuthorizationError(ApiError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Not found"


class LockoutError(ApiError):
    status_code = 423
    default_message = "Account temporarily locked"

    def __init__(self, lock_minutes: int):
        super().__init__(
            "Account temporarily locked due to too many failed logins. "
            f"Please try again in {lock_minutes} minutes.",
            retry_after_minutes=lock_minutes,
        )


class InternalError(ApiError):
    status_code = 500
    default_message = "Internal server error"


class RateLimitError(ApiError):
    status_code = 429
    default_message = "Too many requests"


def json_body() -> dict:
    """
    The request's JSON object, or {} when no JSON was sent.
    Arrays and scalars at the top level are rejected.
    """
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def text_field(data: dict, key: str, strip: bool = True) -> str:
    """A string field from a JSON body, "" when missing or null."""
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string")
    return value.strip() if strip else value
