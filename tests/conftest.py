"""Pytest configuration and fixtures for the label dashboard API.

Every test gets a fresh in-memory SQLite database and an app built with
create_app(). Users are created directly through the models; tokens are
minted with the same helpers the handlers use.
"""

import hashlib

import pytest

from app import create_app
from config import Config
from models import db
from models.brand import Brand
from models.user import User
from security.password import set_password
from security.tokens import issue_system_token, issue_user_token

TEST_JWT_SECRET = "test-jwt-secret"
SYSTEM_PASSWORD = "SystemPass123"
BRAND_PASSWORD = "BrandPass123"


class ConfigForTests(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET = TEST_JWT_SECRET
    FAILED_LOGIN_LIMIT = 3
    LOCK_TIME_IN_SECONDS = 120
    AUTH_RATE_MAX_REQUESTS = 1000
    ADMIN_EMAIL = None
    SMTP_HOST = None
    FRONTEND_IP = None
    SSH_KEY_PATH = None


@pytest.fixture
def app():
    """App with its context pushed and an empty schema."""
    app = create_app(ConfigForTests)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def brand(app):
    row = Brand(id=1, brand_name="Melt Records", logo_url="https://cdn.example.com/melt.png", brand_color="#112233")
    db.session.add(row)
    db.session.commit()
    return row


@pytest.fixture
def other_brand(app):
    row = Brand(id=2, brand_name="Other Label")
    db.session.add(row)
    db.session.commit()
    return row


def make_user(password=None, md5_password=None, **fields) -> User:
    """Creates and commits a user. md5_password stores a legacy digest instead of bcrypt."""
    fields.setdefault("email_address", "user@example.com")
    user = User(**fields)
    if password:
        set_password(user, password)
    if md5_password:
        user.password_md5 = hashlib.md5(md5_password.encode("utf-8")).hexdigest()
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def system_user(app):
    return make_user(
        password=SYSTEM_PASSWORD,
        email_address="ops@example.com",
        username="ops",
        first_name="Ops",
        last_name="Bot",
        is_system_user=True,
        brand_id=None,
    )


@pytest.fixture
def brand_user(brand):
    return make_user(
        password=BRAND_PASSWORD,
        email_address="artist@example.com",
        username="artist",
        first_name="Ann",
        last_name="Artist",
        brand_id=brand.id,
    )


@pytest.fixture
def admin_user(brand):
    return make_user(
        md5_password=BRAND_PASSWORD,
        email_address="admin@example.com",
        username="admin",
        is_admin=True,
        brand_id=brand.id,
    )


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def system_headers(system_user):
    return bearer(issue_system_token(system_user))


@pytest.fixture
def user_headers(brand_user):
    return bearer(issue_user_token(brand_user))


@pytest.fixture
def admin_headers(admin_user):
    return bearer(issue_user_token(admin_user))
