"""
Application configuration.

Environment-based config classes following the 12-factor app methodology.
Sensitive values are read exclusively from environment variables.
"""

import os


class Config:
    """Base configuration shared by all environments."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-me")
    TOKEN_MAX_AGE = int(os.environ.get("TOKEN_MAX_AGE", 7 * 24 * 3600))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # MongoDB
    MONGODB_URI = os.environ.get(
        "MONGODB_URI", "mongodb://localhost:27017/bizdesk"
    )
    MONGO_CLIENT_CLASS = None

    # Accounts
    TRIAL_PERIOD_DAYS = int(os.environ.get("TRIAL_PERIOD_DAYS", 14))
    APP_URL = os.environ.get("APP_URL", "http://localhost:5173")
    ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "")
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "")
    TEST_USER_EMAIL = os.environ.get("TEST_USER_EMAIL", "")
    TEST_USER_PASSWORD = os.environ.get("TEST_USER_PASSWORD", "")
    TEST_USER_FIRSTNAME = os.environ.get("TEST_USER_FIRSTNAME", "Demo")
    TEST_USER_LASTNAME = os.environ.get("TEST_USER_LASTNAME", "User")
    TEST_USER_COMPANY = os.environ.get("TEST_USER_COMPANY", "")

    # Outgoing mail (Flask-Mail)
    MAIL_SERVER = os.environ.get("EMAIL_HOST", "localhost")
    MAIL_PORT = int(os.environ.get("EMAIL_PORT", 587))
    MAIL_USE_SSL = os.environ.get("EMAIL_SECURE", "false").lower() == "true"
    MAIL_USE_TLS = not MAIL_USE_SSL
    MAIL_USERNAME = os.environ.get("EMAIL_USER")
    MAIL_PASSWORD = os.environ.get("EMAIL_PASS")
    MAIL_DEFAULT_SENDER = os.environ.get("EMAIL_USER", "no-reply@bizdesk.local")

    # Stripe
    STRIPE_SECRET_KEY = os.environ.get("STRIPE_SECRET_KEY", "")
    STRIPE_WEBHOOK_SECRET = os.environ.get("STRIPE_WEBHOOK_SECRET", "")

    # Language model (OpenAI-compatible endpoint)
    OPENROUTER_BASE_URL = os.environ.get(
        "OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1"
    )
    OPENROUTER_API_KEY = os.environ.get("OPENROUTER_API_KEY", "")
    AI_MODEL = os.environ.get("AI_MODEL", "anthropic/claude-3.5-sonnet")

    # File uploads
    ALLOWED_RECEIPT_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp", "pdf"}
    MAX_CONTENT_LENGTH = 8 * 1024 * 1024  # 8 MB upload limit

    # Cloudinary (receipt storage)
    CLOUDINARY_CLOUD_NAME = os.environ.get("CLOUDINARY_CLOUD_NAME", "")
    CLOUDINARY_API_KEY = os.environ.get("CLOUDINARY_API_KEY", "")
    CLOUDINARY_API_SECRET = os.environ.get("CLOUDINARY_API_SECRET", "")


class DevelopmentConfig(Config):
    """Local development — debug on."""

    DEBUG = True
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class ProductionConfig(Config):
    """Production — expects MONGODB_URI and SECRET_KEY in env."""

    DEBUG = False


class TestingConfig(Config):
    """Automated tests — separate test database, no outgoing mail."""

    TESTING = True
    SECRET_KEY = "testing-secret"
    MONGODB_URI = "mongodb://localhost:27017/bizdesk_test"
    MAIL_SUPPRESS_SEND = True
    MAIL_DEFAULT_SENDER = "no-reply@example.com"
    TRIAL_PERIOD_DAYS = 14
    ADMIN_EMAIL = "admin@example.com"
    ADMIN_PASSWORD = "admin-pass"
    TEST_USER_EMAIL = ""
    STRIPE_SECRET_KEY = "sk_test_dummy"
    STRIPE_WEBHOOK_SECRET = "whsec_dummy"
    OPENROUTER_API_KEY = "test-key"


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
