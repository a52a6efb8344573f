"""
API authentication — token generation and verification.

Tokens are signed with the app's SECRET_KEY using itsdangerous
(bundled with Flask) and expire after ``TOKEN_MAX_AGE`` seconds.
Flask-Login's request loader resolves them to a tenant or an admin.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from functools import wraps
from typing import Union

from bson import ObjectId
from flask import current_app, jsonify, request
from flask_login import current_user as login_user_proxy
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from bizdesk.extensions import login_manager
from bizdesk.models import Admin, User
from bizdesk.api import api_bp, parse_body
from bizdesk.api.payloads import LoginPayload, RegisterPayload
from bizdesk.api.schemas import serialize_admin, serialize_user

logger = logging.getLogger(__name__)

Account = Union[User, Admin]


def _get_serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt="api-token")


def generate_token(account: Account) -> str:
    """Create a signed token encoding the account id and kind."""
    s = _get_serializer()
    return s.dumps({"uid": str(account.id), "admin": bool(account.is_admin)})


def verify_token(token: str) -> Account | None:
    """Return the User or Admin for a valid token, or None."""
    s = _get_serializer()
    try:
        data = s.loads(token, max_age=current_app.config["TOKEN_MAX_AGE"])
    except (BadSignature, SignatureExpired):
        return None
    uid = data.get("uid")
    if not ObjectId.is_valid(uid):
        return None
    model = Admin if data.get("admin") else User
    return model.objects(id=uid).first()


@login_manager.request_loader
def load_account_from_request(req):
    auth_header = req.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    return verify_token(auth_header[7:])


# ---------------------------------------------------------------------------
# Decorators — require a valid Bearer token
# ---------------------------------------------------------------------------
def _authenticated_account() -> Account | None:
    account = login_user_proxy._get_current_object()
    if account is None or not account.is_authenticated:
        return None
    return account


def token_required(f):
    """Decorator that enforces a tenant ``Authorization: Bearer <token>`` header."""

    @wraps(f)
    def decorated(*args, **kwargs):
        if not request.headers.get("Authorization", "").startswith("Bearer "):
            return jsonify({"error": "Access token required"}), 401

        account = _authenticated_account()
        if account is None:
            return jsonify({"error": "Invalid or expired token"}), 401
        if account.is_admin:
            return jsonify({"error": "Tenant account required"}), 403
        if not account.is_active:
            return jsonify({"error": "Account suspended or expired"}), 401

        # Inject the authenticated user into kwargs
        kwargs["current_user"] = account
        return f(*args, **kwargs)

    return decorated


def admin_token_required(f):
    """Like token_required, but for admin console accounts."""

    @wraps(f)
    def decorated(*args, **kwargs):
        if not request.headers.get("Authorization", "").startswith("Bearer "):
            return jsonify({"error": "Access token required"}), 401

        account = _authenticated_account()
        if account is None:
            return jsonify({"error": "Invalid or expired token"}), 401
        if not account.is_admin:
            return jsonify({"error": "Admin access required"}), 403

        kwargs["current_user"] = account
        return f(*args, **kwargs)

    return decorated


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
@api_bp.route("/auth/register", methods=["POST"])
def api_register():
    """Open a trial account and return a token for it."""
    payload = parse_body(RegisterPayload)

    if User.objects(email=payload.email.lower()).first():
        return jsonify({"error": "User already exists"}), 400

    user = User(
        email=payload.email.lower(),
        first_name=payload.first_name,
        last_name=payload.last_name,
        company=payload.company or None,
        phone=payload.phone or None,
        country=payload.country or None,
        status="TRIAL",
        trial_ends_at=datetime.utcnow()
        + timedelta(days=current_app.config["TRIAL_PERIOD_DAYS"]),
    )
    user.set_password(payload.password)
    user.save()
    logger.info("Trial account registered: %s", user.email)

    return jsonify({"token": generate_token(user), "user": serialize_user(user)}), 201


@api_bp.route("/auth/login", methods=["POST"])
def api_login():
    """
    Authenticate and receive a Bearer token.

    JSON body: { "email": "...", "password": "..." }
    """
    payload = parse_body(LoginPayload)

    user = User.objects(email=payload.email.lower()).first()
    if not user or not user.check_password(payload.password):
        return jsonify({"error": "Invalid credentials"}), 401

    if not user.is_active:
        return jsonify({"error": "Account suspended or expired"}), 401

    return jsonify({"token": generate_token(user), "user": serialize_user(user)}), 200


@api_bp.route("/auth/me")
@token_required
def api_me(current_user: User):
    """Return the profile of the currently authenticated user."""
    return jsonify(serialize_user(current_user))


@api_bp.route("/admin/login", methods=["POST"])
def api_admin_login():
    payload = parse_body(LoginPayload)

    admin = Admin.objects(email=payload.email.lower()).first()
    if not admin or not admin.check_password(payload.password):
        return jsonify({"error": "Invalid credentials"}), 401

    return jsonify({"token": generate_token(admin), "admin": serialize_admin(admin)}), 200
