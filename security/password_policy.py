import re
from typing import List, Tuple

from flask import current_app

_DEFAULTS = {
    "PASSWORD_MIN_LEN": 6,
    "PASSWORD_MAX_LEN": 128,
    "PASSWORD_REQUIRE_UPPER": False,
    "PASSWORD_REQUIRE_LOWER": False,
    "PASSWORD_REQUIRE_DIGIT": False,
    "PASSWORD_REQUIRE_SYMBOL": False,
}

# optional character-class rules, all off unless the deployment turns them on
_CLASS_RULES = (
    ("PASSWORD_REQUIRE_UPPER", re.compile(r"[A-Z]"), "uppercase letter"),
    ("PASSWORD_REQUIRE_LOWER", re.compile(r"[a-z]"), "lowercase letter"),
    ("PASSWORD_REQUIRE_DIGIT", re.compile(r"\d"), "number"),
    ("PASSWORD_REQUIRE_SYMBOL", re.compile(r"[^A-Za-z0-9]"), "symbol"),
)


def _cfg(name: str):
    try:
        return current_app.config.get(name, _DEFAULTS[name])
    except RuntimeError:
        # outside an app context (CLI helpers, unit tests)
        return _DEFAULTS[name]


def validate_password(pw: str) -> Tuple[bool, List[str]]:
    """
    Returns (ok, errors). Invite setup, reset and change-password all
    go through here before a new bcrypt hash is stored.
    """
    if not isinstance(pw, str):
        return False, ["Password must be a string"]

    errors: List[str] = []
    min_len = int(_cfg("PASSWORD_MIN_LEN"))
    max_len = int(_cfg("PASSWORD_MAX_LEN"))

    if len(pw) < min_len:
        errors.append(f"Password must be at least {min_len} characters long")
    elif len(pw) > max_len:
        errors.append(f"Password must be at most {max_len} characters long")

    for key, pattern, label in _CLASS_RULES:
        if _cfg(key) and not pattern.search(pw):
            errors.append(f"Password must include at least 1 {label}")

    return not errors, errors
