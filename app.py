import logging
import sys

import click
from flask import Flask, jsonify
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import Config, AuthSettings
from models import db
from routes import ALL_BLUEPRINTS
from utils.auth_context import load_current_user
from utils.errors import ApiError


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    app.logger.handlers = [handler]
    app.logger.setLevel(level)


def create_app(config_object=Config, **overrides):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.config.update(overrides)

    configure_logging(app)

    # Refuse to start without a signing secret
    app.extensions["auth_settings"] = AuthSettings.from_mapping(app.config)

    # Register routes
    for bp in ALL_BLUEPRINTS:
        app.register_blueprint(bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    @app.before_request
    def _load_user():
        load_current_user()

    @app.errorhandler(ApiError)
    def _api_error(exc):
        return exc.to_response()

    @app.errorhandler(Exception)
    def _unexpected_error(exc):
        if isinstance(exc, HTTPException):
            return exc
        app.logger.exception("Unhandled error")
        db.session.rollback()
        return jsonify(error="Internal server error"), 500

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        return resp

    register_cli(app)

    return app

#-------------------------
from models.user import User
from security.password import set_password
from security.password_policy import validate_password

def register_cli(app):
    @app.cli.command("create-system-user")
    @click.argument("email")
    @click.option("--username", default=None, help="Optional login name.")
    @click.password_option()
    def create_system_user(email, username, password):
        """Create a brand-less system user for cross-brand jobs."""
        email = email.strip()
        if User.query.filter_by(email_address=email, is_system_user=True).first():
            click.echo("System user already exists")
            return

        valid, errors = validate_password(password)
        if not valid:
            raise click.ClickException("; ".join(errors))

        user = User(email_address=email, username=username, is_system_user=True, brand_id=None)
        set_password(user, password)
        db.session.add(user)
        db.session.commit()
        click.echo(f"System user {email} created")

    @app.cli.command("make-admin")
    @click.argument("email")
    @click.option("--brand-id", type=int, required=True)
    def make_admin(email, brand_id):
        """Grant admin rights to a brand user."""
        user = User.query.filter_by(email_address=email.strip(), brand_id=brand_id).first()
        if not user:
            click.echo("User not found")
            return

        user.is_admin = True
        db.session.commit()
        click.echo(f"{user.email_address} is now an admin of brand {brand_id}")

#-------------------------




if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=3000)
