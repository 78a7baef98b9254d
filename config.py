import os
import re
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent
load_dotenv(BASE_DIR / ".env", override=False)


class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")
    JWT_SECRET = os.getenv("JWT_SECRET")
    JWT_ALGORITHM = "HS256"

    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + str(BASE_DIR / "label_dashboard.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # "production" turns on the system API gate and IP whitelist
    APP_ENV = os.getenv("APP_ENV", "development")

    # Token lifetimes ("24h", "30m", or plain seconds)
    USER_TOKEN_EXPIRY = os.getenv("USER_TOKEN_EXPIRY", "24h")
    SYSTEM_TOKEN_EXPIRY = os.getenv("SYSTEM_TOKEN_EXPIRY", "1h")

    # Login lock
    FAILED_LOGIN_LIMIT = int(os.getenv("FAILED_LOGIN_LIMIT", "3"))
    LOCK_TIME_IN_SECONDS = int(os.getenv("LOCK_TIME_IN_SECONDS", "120"))

    # Login rate limit (per client IP, fixed window)
    AUTH_RATE_MAX_REQUESTS = int(os.getenv("AUTH_RATE_MAX_REQUESTS", "5"))
    AUTH_RATE_WINDOW_SECONDS = int(os.getenv("AUTH_RATE_WINDOW_SECONDS", "300"))

    # System API
    ENABLE_SYSTEM_API = os.getenv("ENABLE_SYSTEM_API", "false").lower() == "true"
    SYSTEM_API_ALLOWED_IPS = os.getenv("SYSTEM_API_ALLOWED_IPS", "")
    SYSTEM_API_RATE_MAX_REQUESTS = int(os.getenv("SYSTEM_API_RATE_MAX_REQUESTS", "100"))
    SYSTEM_API_RATE_WINDOW_SECONDS = int(os.getenv("SYSTEM_API_RATE_WINDOW_SECONDS", "60"))

    # Password policy
    PASSWORD_MIN_LEN = int(os.getenv("PASSWORD_MIN_LEN", "6"))

    # Fallback branding when a domain has no brand
    DEFAULT_BRAND_NAME = "Label Dashboard"
    DEFAULT_BRAND_LOGO = "assets/img/default-logo.png"
    DEFAULT_BRAND_COLOR = "#667eea"
    DEFAULT_BRAND_FAVICON = "assets/img/default.ico"

    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:4200")

    # Email (SMTP)
    SMTP_HOST = os.getenv("SMTP_HOST")
    SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USERNAME = os.getenv("SMTP_USERNAME")
    SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")
    SMTP_FROM_EMAIL = os.getenv("SMTP_FROM_EMAIL")
    SMTP_USE_TLS = os.getenv("SMTP_USE_TLS", "true").lower() == "true"
    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")

    # Frontend host (SSL certificate management over SSH)
    FRONTEND_IP = os.getenv("FRONTEND_IP")
    SSH_USER = os.getenv("SSH_USER", "bitnami")
    SSH_KEY_PATH = os.getenv("SSH_KEY_PATH")
    SSH_TIMEOUT_SECONDS = int(os.getenv("SSH_TIMEOUT_SECONDS", "120"))
    SSL_REMOVE_TIMEOUT_SECONDS = int(os.getenv("SSL_REMOVE_TIMEOUT_SECONDS", "300"))
    SSL_WRAPPER_PATH = os.getenv("SSL_WRAPPER_PATH", "/tmp/ssl-renew-wrapper.sh")
    REMOVE_SSL_SCRIPT_PATH = os.getenv("REMOVE_SSL_SCRIPT_PATH", "/home/bitnami/remove-ssl-domain.sh")

    # Basic app settings
    DEBUG = False


_EXPIRY_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_expiry(value) -> int:
    """Convert an expiry like "1h", "30m" or 3600 into seconds."""
    if isinstance(value, int) and not isinstance(value, bool):
        seconds = value
    else:
        match = _EXPIRY_RE.match(str(value or ""))
        if not match:
            raise ValueError(f"Invalid token expiry: {value!r}")
        seconds = int(match.group(1)) * _UNIT_SECONDS[match.group(2)]
    if seconds <= 0:
        raise ValueError(f"Token expiry must be positive: {value!r}")
    return seconds


def _split_ips(raw) -> tuple:
    if not raw:
        return ()
    if isinstance(raw, str):
        raw = raw.split(",")
    return tuple(ip.strip() for ip in raw if ip and ip.strip())


@dataclass(frozen=True)
class AuthSettings:
    """Authentication settings, built once per app from its config."""

    jwt_secret: str
    jwt_algorithm: str = "HS256"
    failed_login_limit: int = 3
    lock_time_seconds: int = 120
    system_token_expiry: str = "1h"
    user_token_expiry: str = "24h"
    production: bool = False
    system_api_enabled: bool = False
    system_api_allowed_ips: tuple = ()

    def __post_init__(self):
        if not self.jwt_secret:
            raise RuntimeError("JWT_SECRET environment variable is required")
        if self.failed_login_limit < 1:
            raise ValueError("FAILED_LOGIN_LIMIT must be at least 1")
        if self.lock_time_seconds < 0:
            raise ValueError("LOCK_TIME_IN_SECONDS must not be negative")
        parse_expiry(self.system_token_expiry)
        parse_expiry(self.user_token_expiry)

    @property
    def system_api_available(self) -> bool:
        # outside production the system API is always on
        return self.system_api_enabled or not self.production

    def ip_allowed(self, ip: str) -> bool:
        if not self.production or not self.system_api_allowed_ips:
            return True
        return ip in self.system_api_allowed_ips

    @property
    def system_token_seconds(self) -> int:
        return parse_expiry(self.system_token_expiry)

    @property
    def user_token_seconds(self) -> int:
        return parse_expiry(self.user_token_expiry)

    @classmethod
    def from_mapping(cls, config) -> "AuthSettings":
        return cls(
            jwt_secret=config.get("JWT_SECRET") or "",
            jwt_algorithm=config.get("JWT_ALGORITHM", "HS256"),
            failed_login_limit=int(config.get("FAILED_LOGIN_LIMIT", 3)),
            lock_time_seconds=int(config.get("LOCK_TIME_IN_SECONDS", 120)),
            system_token_expiry=str(config.get("SYSTEM_TOKEN_EXPIRY", "1h")),
            user_token_expiry=str(config.get("USER_TOKEN_EXPIRY", "24h")),
            production=str(config.get("APP_ENV", "development")).lower() == "production",
            system_api_enabled=bool(config.get("ENABLE_SYSTEM_API", False)),
            system_api_allowed_ips=_split_ips(config.get("SYSTEM_API_ALLOWED_IPS")),
        )
