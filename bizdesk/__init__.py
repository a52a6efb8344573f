"""
BizDesk — Application package.

Uses the *application factory* pattern so the app can be created with
different configurations (development, testing, production).
"""

import logging
import os
from datetime import datetime, timedelta

import cloudinary
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import config_by_name

logger = logging.getLogger(__name__)


def create_app(config_name: str | None = None, config_overrides: dict | None = None) -> Flask:
    """Build and return a fully configured Flask application."""
    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.config.update(config_overrides or {})

    _configure_logging(app)

    # -- Cloudinary --------------------------------------------------------
    cloudinary.config(
        cloud_name=app.config["CLOUDINARY_CLOUD_NAME"],
        api_key=app.config["CLOUDINARY_API_KEY"],
        api_secret=app.config["CLOUDINARY_API_SECRET"],
        secure=True,
    )

    # -- Extensions --------------------------------------------------------
    from bizdesk.extensions import init_db, login_manager, mail

    init_db(app)
    login_manager.init_app(app)
    mail.init_app(app)

    # -- Blueprints --------------------------------------------------------
    from bizdesk.api import api_bp

    app.register_blueprint(api_bp)

    _register_error_handlers(app)

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    # -- Database bootstrap ------------------------------------------------
    with app.app_context():
        _seed_admin(app)
        _seed_test_user(app)

    return app


def _configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("bizdesk").setLevel(level)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        logger.exception("Unhandled error")
        return jsonify({"error": "Something went wrong!"}), 500


def _seed_admin(app: Flask) -> None:
    """Create the console admin account if none exists."""
    from bizdesk.models import Admin

    email = (app.config.get("ADMIN_EMAIL") or "").lower()
    password = app.config.get("ADMIN_PASSWORD")
    if not email or not password:
        return

    if not Admin.objects(email=email).first():
        admin = Admin(email=email, role="SUPER_ADMIN")
        admin.set_password(password)
        admin.save()
        logger.info("Default admin created: %s", email)


def _seed_test_user(app: Flask) -> None:
    """Create the optional demo tenant configured through TEST_USER_*."""
    from bizdesk.models import User

    email = (app.config.get("TEST_USER_EMAIL") or "").lower()
    password = app.config.get("TEST_USER_PASSWORD")
    if not email or not password:
        return

    if not User.objects(email=email).first():
        user = User(
            email=email,
            first_name=app.config["TEST_USER_FIRSTNAME"],
            last_name=app.config["TEST_USER_LASTNAME"],
            company=app.config.get("TEST_USER_COMPANY") or None,
            status="ACTIVE",
            plan="PREMIUM",
            trial_ends_at=datetime.utcnow() + timedelta(days=app.config["TRIAL_PERIOD_DAYS"]),
        )
        user.set_password(password)
        user.save()
        logger.info("Test user created: %s", email)
