"""
API — Quote CRUD and conversion into invoices.
"""

import logging
from datetime import datetime, timedelta

from flask import jsonify, request

from bizdesk.models import Client, Invoice, LineItem, Quote, User
from bizdesk.api import api_bp, parse_body
from bizdesk.api.auth import token_required
from bizdesk.api.invoices import clients_by_id, line_dicts
from bizdesk.api.payloads import QuoteConvert, QuoteCreate, QuoteUpdate
from bizdesk.api.schemas import serialize_invoice, serialize_quote
from bizdesk.services.document_service import (
    INVOICE_PREFIX,
    QUOTE_PREFIX,
    build_line_items,
    generate_document_number,
)
from bizdesk.utils.helpers import get_owned, to_datetime

logger = logging.getLogger(__name__)

DEFAULT_PAYMENT_DAYS = 30
CONVERTIBLE_STATUSES = ("SENT", "ACCEPTED")


@api_bp.route("/quotes", methods=["GET"])
@token_required
def list_quotes(current_user: User):
    """Optional query param: status."""
    query = Quote.objects(user_id=current_user.id)
    status = request.args.get("status")
    if status:
        query = query.filter(status=status.upper())

    quotes = list(query.order_by("-created_at"))
    clients = clients_by_id(quotes)
    return jsonify([serialize_quote(q, clients.get(q.client_id)) for q in quotes])


@api_bp.route("/quotes/<quote_id>", methods=["GET"])
@token_required
def get_quote(current_user: User, quote_id):
    quote = get_owned(Quote, quote_id, current_user)
    if not quote:
        return jsonify({"error": "Quote not found"}), 404

    client = Client.objects(id=quote.client_id).first()
    return jsonify(serialize_quote(quote, client, include_items=True))


@api_bp.route("/quotes", methods=["POST"])
@token_required
def create_quote(current_user: User):
    payload = parse_body(QuoteCreate)

    client = get_owned(Client, payload.client_id, current_user)
    if not client:
        return jsonify({"error": "Client not found"}), 404

    try:
        lines = line_dicts(payload.items, current_user)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    items, totals = build_line_items(lines)
    quote = Quote(
        quote_number=generate_document_number(Quote, QUOTE_PREFIX),
        user_id=current_user.id,
        client_id=client.id,
        issue_date=to_datetime(payload.issue_date) or datetime.utcnow(),
        valid_until=to_datetime(payload.valid_until),
        currency=payload.currency.upper(),
        notes=payload.notes,
        terms=payload.terms,
        items=items,
        **totals.as_dict(),
    )
    quote.save()
    logger.info("Quote %s created for user %s", quote.quote_number, current_user.id)

    return jsonify(serialize_quote(quote, client, include_items=True)), 201


@api_bp.route("/quotes/<quote_id>", methods=["PUT", "PATCH"])
@token_required
def update_quote(current_user: User, quote_id):
    quote = get_owned(Quote, quote_id, current_user)
    if not quote:
        return jsonify({"error": "Quote not found"}), 404

    if quote.status == "ACCEPTED":
        return jsonify({"error": "Cannot edit an accepted quote"}), 400

    payload = parse_body(QuoteUpdate)
    changes = payload.model_dump(exclude_unset=True)

    if changes.get("client_id"):
        client = get_owned(Client, payload.client_id, current_user)
        if not client:
            return jsonify({"error": "Client not found"}), 404
        quote.client_id = client.id
    if payload.issue_date:
        quote.issue_date = to_datetime(payload.issue_date)
    if payload.valid_until:
        quote.valid_until = to_datetime(payload.valid_until)
    if payload.currency:
        quote.currency = payload.currency.upper()
    if "notes" in changes:
        quote.notes = payload.notes
    if "terms" in changes:
        quote.terms = payload.terms
    if payload.status:
        quote.status = payload.status

    if payload.items is not None:
        try:
            lines = line_dicts(payload.items, current_user)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        items, totals = build_line_items(lines)
        quote.items = items
        quote.subtotal = totals.subtotal
        quote.tax_amount = totals.tax_amount
        quote.total_amount = totals.total_amount

    quote.save()
    client = Client.objects(id=quote.client_id).first()
    return jsonify(serialize_quote(quote, client, include_items=True))


@api_bp.route("/quotes/<quote_id>", methods=["DELETE"])
@token_required
def delete_quote(current_user: User, quote_id):
    quote = get_owned(Quote, quote_id, current_user)
    if not quote:
        return jsonify({"error": "Quote not found"}), 404

    quote.delete()
    return jsonify({"message": "Quote deleted successfully"}), 200


# --------------------------------------------------------------------------
# Convert quote → invoice
# --------------------------------------------------------------------------
@api_bp.route("/quotes/<quote_id>/convert", methods=["POST"])
@token_required
def convert_quote(current_user: User, quote_id):
    """Copy an accepted or sent quote into a new invoice."""
    quote = get_owned(Quote, quote_id, current_user)
    if not quote:
        return jsonify({"error": "Quote not found"}), 404

    if quote.status not in CONVERTIBLE_STATUSES:
        return jsonify({"error": f"Cannot convert a {quote.status.lower()} quote"}), 400
    if Invoice.objects(quote_id=quote.id).first():
        return jsonify({"error": "Quote has already been converted"}), 400

    payload = parse_body(QuoteConvert)
    now = datetime.utcnow()
    due_date = to_datetime(payload.due_date) or now + timedelta(days=DEFAULT_PAYMENT_DAYS)

    invoice = Invoice(
        invoice_number=generate_document_number(Invoice, INVOICE_PREFIX),
        user_id=current_user.id,
        client_id=quote.client_id,
        issue_date=now,
        due_date=due_date,
        subtotal=quote.subtotal,
        tax_amount=quote.tax_amount,
        total_amount=quote.total_amount,
        currency=quote.currency,
        notes=quote.notes,
        terms=quote.terms,
        quote_id=quote.id,
        items=[LineItem(**item.to_mongo().to_dict()) for item in quote.items],
    )
    invoice.save()

    quote.status = "ACCEPTED"
    quote.save()
    logger.info("Quote %s converted to invoice %s", quote.quote_number, invoice.invoice_number)

    client = Client.objects(id=invoice.client_id).first()
    return jsonify({
        "quote": serialize_quote(quote, client),
        "invoice": serialize_invoice(invoice, client, include_items=True),
    }), 201
