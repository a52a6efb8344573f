"""
Flask extension instances.

Extensions are instantiated here (without an app) and bound to the
application inside the factory function ``create_app``.
"""

import logging

import mongoengine
from flask_login import LoginManager
from flask_mail import Mail

logger = logging.getLogger(__name__)


def init_db(app):
    """Connect MongoEngine to the MongoDB instance configured in the app."""
    mongodb_uri = app.config.get(
        "MONGODB_URI", "mongodb://localhost:27017/bizdesk"
    )
    options = {}
    client_class = app.config.get("MONGO_CLIENT_CLASS")
    if client_class is not None:
        options["mongo_client_class"] = client_class
    mongoengine.connect(host=mongodb_uri, **options)
    logger.info("Connected to MongoDB")


login_manager = LoginManager()
mail = Mail()
