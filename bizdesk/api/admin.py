"""
API — Admin console: tenant account management and analytics.
"""

import logging
from collections import Counter
from datetime import datetime, timedelta

from bson import ObjectId
from flask import jsonify

from bizdesk.models import Admin, Payment, User
from bizdesk.api import api_bp, parse_body
from bizdesk.api.auth import admin_token_required
from bizdesk.api.payloads import AdminUserCreate, AdminUserUpdate
from bizdesk.api.schemas import serialize_user
from bizdesk.services.mail_service import send_welcome_email
from bizdesk.utils.helpers import to_datetime

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "temp123"


def paid_until_for_plan(plan: str, now: datetime) -> datetime | None:
    """FREE has no paid period, VIP is lifetime (100 years), others one year."""
    if plan == "FREE":
        return None
    if plan == "VIP":
        return now + timedelta(days=365 * 100)
    return now + timedelta(days=365)


# --------------------------------------------------------------------------
# Users
# --------------------------------------------------------------------------
@api_bp.route("/admin/users", methods=["GET"])
@admin_token_required
def admin_list_users(current_user: Admin):
    users = User.objects().order_by("-created_at")
    return jsonify([serialize_user(u) for u in users])


@api_bp.route("/admin/users", methods=["POST"])
@admin_token_required
def admin_create_user(current_user: Admin):
    """Create an active account and mail its credentials."""
    payload = parse_body(AdminUserCreate)
    email = payload.email.lower()

    if User.objects(email=email).first():
        return jsonify({"error": "User already exists"}), 400

    password = payload.password or DEFAULT_PASSWORD
    user = User(
        email=email,
        first_name=payload.first_name,
        last_name=payload.last_name,
        company=payload.company or None,
        plan=payload.plan,
        status="ACTIVE",
        paid_until=paid_until_for_plan(payload.plan, datetime.utcnow()),
    )
    user.set_password(password)
    user.save()
    logger.info("Admin %s created account %s (%s)", current_user.email, email, payload.plan)

    try:
        send_welcome_email(user, password)
    except Exception:
        logger.exception("Welcome email to %s failed", email)
        return jsonify({
            "message": "User created but the welcome email could not be sent",
            "user": serialize_user(user),
        }), 201

    return jsonify({
        "message": "User created and email sent successfully",
        "user": serialize_user(user),
    }), 201


@api_bp.route("/admin/users/<user_id>", methods=["PUT", "PATCH"])
@admin_token_required
def admin_update_user(current_user: Admin, user_id):
    user = User.objects(id=user_id).first() if ObjectId.is_valid(user_id) else None
    if not user:
        return jsonify({"error": "User not found"}), 404

    payload = parse_body(AdminUserUpdate)
    if payload.status:
        user.status = payload.status
    if payload.plan:
        user.plan = payload.plan
    if payload.paid_until:
        user.paid_until = to_datetime(payload.paid_until)

    user.save()
    return jsonify(serialize_user(user))


# --------------------------------------------------------------------------
# Analytics
# --------------------------------------------------------------------------
@api_bp.route("/admin/analytics", methods=["GET"])
@admin_token_required
def admin_analytics(current_user: Admin):
    users = list(User.objects().only("plan", "status"))
    payments = list(Payment.objects(status="COMPLETED").only("amount"))
    return jsonify({
        "total_users": len(users),
        "users_by_plan": dict(Counter(u.plan for u in users)),
        "users_by_status": dict(Counter(u.status for u in users)),
        "total_payments": len(payments),
        "total_revenue": sum(p.amount for p in payments),
    })
