import hashlib
import hmac

import bcrypt


def hash_password(plain_password: str) -> str:
    if not isinstance(plain_password, str) or len(plain_password) == 0:
        raise ValueError("Password must be a non-empty string")

    # bcrypt expects bytes
    salt = bcrypt.gensalt(rounds=12)
    hashed = bcrypt.hashpw(plain_password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def _legacy_md5(plain_password: str) -> str:
    # Accounts created before bcrypt only have this digest. Never store new ones.
    return hashlib.md5(plain_password.encode("utf-8")).hexdigest()


def _check_bcrypt(plain_password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            password_hash.encode("utf-8")
        )
    except ValueError:
        # malformed stored hash
        return False


_DUMMY_HASH = None


def waste_password_check(plain_password) -> None:
    """
    Runs one bcrypt comparison against a throwaway hash so a login for
    an unknown account takes as long as a wrong password.
    """
    global _DUMMY_HASH
    if _DUMMY_HASH is None:
        _DUMMY_HASH = hash_password("not-a-real-password")
    candidate = plain_password if isinstance(plain_password, str) and plain_password else "-"
    _check_bcrypt(candidate, _DUMMY_HASH)


def verify_password(plain_password: str, user) -> bool:
    """
    Checks a plaintext password against whatever the user has stored:
    the bcrypt hash when present, otherwise the legacy MD5 digest.
    """
    if not isinstance(plain_password, str) or not plain_password or user is None:
        return False

    if user.password_hash:
        return _check_bcrypt(plain_password, user.password_hash)

    if user.password_md5:
        return hmac.compare_digest(_legacy_md5(plain_password), user.password_md5.strip().lower())

    return False


def set_password(user, plain_password: str) -> None:
    user.password_hash = hash_password(plain_password)
    user.password_md5 = None
