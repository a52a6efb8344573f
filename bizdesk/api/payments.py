"""
API — Subscription payments through Stripe.
"""

import logging

import stripe
from flask import jsonify, request

from bizdesk.models import User
from bizdesk.api import api_bp, parse_body
from bizdesk.api.auth import token_required
from bizdesk.api.payloads import PaymentIntentPayload
from bizdesk.services.billing_service import (
    construct_event,
    create_payment_intent,
    handle_event,
)

logger = logging.getLogger(__name__)


@api_bp.route("/payments/create-intent", methods=["POST"])
@token_required
def payments_create_intent(current_user: User):
    """JSON body: { "plan": "PREMIUM", "amount": 29.0 }"""
    payload = parse_body(PaymentIntentPayload)

    try:
        client_secret = create_payment_intent(current_user, payload.plan, payload.amount)
    except stripe.StripeError as e:
        logger.error("Stripe rejected payment intent for %s: %s", current_user.id, e)
        return jsonify({"error": "Payment provider request failed"}), 502

    return jsonify({"client_secret": client_secret})


@api_bp.route("/payments/webhook", methods=["POST"])
def payments_webhook():
    """Stripe webhook; the raw body is needed for signature verification."""
    signature = request.headers.get("Stripe-Signature", "")

    try:
        event = construct_event(request.get_data(), signature)
    except (ValueError, stripe.SignatureVerificationError) as e:
        logger.warning("Rejected Stripe webhook: %s", e)
        return jsonify({"error": str(e)}), 400

    handle_event(event)
    return jsonify({"received": True})
