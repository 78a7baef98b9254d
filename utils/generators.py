import secrets


def generate_secure_token() -> str:
    """512 bits of randomness, URL-safe, for password reset codes."""
    return secrets.token_urlsafe(64)
