"""
Outgoing email — account notifications sent through Flask-Mail.
"""

import logging

from flask import current_app
from flask_mail import Message

from bizdesk.extensions import mail
from bizdesk.models import User

logger = logging.getLogger(__name__)


def send_welcome_email(user: User, password: str) -> None:
    """Mail the login credentials of a freshly created account."""
    msg = Message(
        subject="Welcome to BizDesk - Your Account is Ready",
        recipients=[user.email],
        html=(
            "<h2>Welcome to BizDesk!</h2>"
            f"<p>Hello {user.first_name},</p>"
            "<p>Your business management account has been created successfully.</p>"
            "<p><strong>Login Details:</strong></p>"
            f"<p>Email: {user.email}</p>"
            f"<p>Password: {password}</p>"
            f"<p>Plan: {user.plan}</p>"
            f"<p><strong>Login URL:</strong> {current_app.config['APP_URL']}</p>"
            "<p>Please change your password after first login.</p>"
            "<p>Best regards,<br>BizDesk Team</p>"
        ),
    )
    mail.send(msg)
    logger.info("Welcome email sent to %s", user.email)
