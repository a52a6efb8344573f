"""
Subscription billing — Stripe payment intents and webhook handling.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta

import stripe
from bson import ObjectId
from flask import current_app

from bizdesk.models import Payment, User

logger = logging.getLogger(__name__)

SUBSCRIPTION_DAYS = 365


def create_payment_intent(user: User, plan: str, amount: float) -> str:
    """Create a USD PaymentIntent for *amount* and return its client secret."""
    intent = stripe.PaymentIntent.create(
        api_key=current_app.config["STRIPE_SECRET_KEY"],
        amount=int(round(amount * 100)),
        currency="usd",
        metadata={"user_id": str(user.id), "plan": plan},
    )
    logger.info("Payment intent %s created for user %s (%s)", intent["id"], user.id, plan)
    return intent["client_secret"]


def construct_event(payload: bytes, signature: str) -> dict:
    """Verify a webhook payload and return the event as plain dicts.

    Raises ``ValueError`` or ``stripe.SignatureVerificationError``.
    """
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8")
    stripe.WebhookSignature.verify_header(
        payload, signature, current_app.config["STRIPE_WEBHOOK_SECRET"]
    )
    return json.loads(payload)


def handle_event(event: dict) -> None:
    """Apply a verified Stripe event. Only ``payment_intent.succeeded`` matters."""
    if event["type"] != "payment_intent.succeeded":
        logger.debug("Ignoring Stripe event %s", event["type"])
        return

    intent = event["data"]["object"]
    metadata = intent.get("metadata") or {}
    user_id = metadata.get("user_id")
    user = User.objects(id=user_id).first() if ObjectId.is_valid(user_id) else None
    if user is None:
        logger.warning("Payment %s references unknown user %s", intent["id"], user_id)
        return

    plan = metadata.get("plan") or user.plan
    user.plan = plan
    user.status = "ACTIVE"
    user.paid_until = datetime.utcnow() + timedelta(days=SUBSCRIPTION_DAYS)
    user.save()

    if Payment.objects(stripe_payment_id=intent["id"]).first() is None:
        Payment(
            user_id=user.id,
            stripe_payment_id=intent["id"],
            amount=intent["amount"] / 100,
            currency=intent["currency"],
            status="COMPLETED",
            plan=plan,
        ).save()
    logger.info("Subscription %s activated for user %s", plan, user.id)
