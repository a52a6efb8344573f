"""
API — Invoice CRUD.
"""

import logging
from datetime import datetime

from flask import jsonify, request

from bizdesk.models import Client, Invoice, Product, User
from bizdesk.api import api_bp, parse_body
from bizdesk.api.auth import token_required
from bizdesk.api.payloads import InvoiceCreate, InvoiceUpdate
from bizdesk.api.schemas import serialize_invoice
from bizdesk.services.document_service import (
    INVOICE_PREFIX,
    build_line_items,
    generate_document_number,
)
from bizdesk.utils.helpers import get_owned, to_datetime

logger = logging.getLogger(__name__)


def clients_by_id(docs) -> dict:
    """Fetch the clients referenced by *docs* in one query."""
    ids = {d.client_id for d in docs}
    if not ids:
        return {}
    return {c.id: c for c in Client.objects(id__in=list(ids))}


def line_dicts(items_payload, user: User) -> list[dict]:
    """Validated line payloads as plain dicts.

    A ``product_id`` must name one of *user*'s products; anything else
    raises ``ValueError``.
    """
    lines = [item.model_dump() for item in items_payload]
    for line in lines:
        if line["product_id"] and not get_owned(Product, line["product_id"], user):
            raise ValueError(f"Product {line['product_id']!r} not found")
    return lines


# --------------------------------------------------------------------------
# List invoices
# --------------------------------------------------------------------------
@api_bp.route("/invoices", methods=["GET"])
@token_required
def list_invoices(current_user: User):
    """Optional query param: status."""
    query = Invoice.objects(user_id=current_user.id)

    status = request.args.get("status")
    if status:
        query = query.filter(status=status.upper())

    invoices = list(query.order_by("-created_at"))
    clients = clients_by_id(invoices)
    return jsonify([serialize_invoice(i, clients.get(i.client_id)) for i in invoices])


# --------------------------------------------------------------------------
# Get single invoice
# --------------------------------------------------------------------------
@api_bp.route("/invoices/<invoice_id>", methods=["GET"])
@token_required
def get_invoice(current_user: User, invoice_id):
    invoice = get_owned(Invoice, invoice_id, current_user)
    if not invoice:
        return jsonify({"error": "Invoice not found"}), 404

    client = Client.objects(id=invoice.client_id).first()
    return jsonify(serialize_invoice(invoice, client, include_items=True))


# --------------------------------------------------------------------------
# Create invoice
# --------------------------------------------------------------------------
@api_bp.route("/invoices", methods=["POST"])
@token_required
def create_invoice(current_user: User):
    """
    JSON body:
    {
      "client_id": "...",
      "due_date": "2026-03-01",
      "notes": "...",
      "terms": "...",
      "items": [
        { "description": "...", "quantity": 2, "unit_price": 100.0,
          "discount": 10, "tax_rate": 20 }
      ]
    }
    """
    payload = parse_body(InvoiceCreate)

    client = get_owned(Client, payload.client_id, current_user)
    if not client:
        return jsonify({"error": "Client not found"}), 404

    try:
        lines = line_dicts(payload.items, current_user)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    items, totals = build_line_items(lines)
    issue_date = to_datetime(payload.issue_date) or datetime.utcnow()

    invoice = Invoice(
        invoice_number=generate_document_number(Invoice, INVOICE_PREFIX),
        user_id=current_user.id,
        client_id=client.id,
        issue_date=issue_date,
        due_date=to_datetime(payload.due_date),
        currency=payload.currency.upper(),
        notes=payload.notes,
        terms=payload.terms,
        items=items,
        **totals.as_dict(),
    )
    invoice.save()
    logger.info("Invoice %s created for user %s", invoice.invoice_number, current_user.id)

    return jsonify(serialize_invoice(invoice, client, include_items=True)), 201


# --------------------------------------------------------------------------
# Update invoice
# --------------------------------------------------------------------------
@api_bp.route("/invoices/<invoice_id>", methods=["PUT", "PATCH"])
@token_required
def update_invoice(current_user: User, invoice_id):
    invoice = get_owned(Invoice, invoice_id, current_user)
    if not invoice:
        return jsonify({"error": "Invoice not found"}), 404

    if invoice.status == "PAID":
        return jsonify({"error": "Cannot edit a paid invoice"}), 400

    payload = parse_body(InvoiceUpdate)
    changes = payload.model_dump(exclude_unset=True)

    if changes.get("client_id"):
        client = get_owned(Client, payload.client_id, current_user)
        if not client:
            return jsonify({"error": "Client not found"}), 404
        invoice.client_id = client.id
    if payload.issue_date:
        invoice.issue_date = to_datetime(payload.issue_date)
    if payload.due_date:
        invoice.due_date = to_datetime(payload.due_date)
    if payload.currency:
        invoice.currency = payload.currency.upper()
    if "notes" in changes:
        invoice.notes = payload.notes
    if "terms" in changes:
        invoice.terms = payload.terms

    # Replace items if provided
    if payload.items is not None:
        try:
            lines = line_dicts(payload.items, current_user)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        items, totals = build_line_items(lines)
        invoice.items = items
        invoice.subtotal = totals.subtotal
        invoice.tax_amount = totals.tax_amount
        invoice.total_amount = totals.total_amount

    if payload.status:
        invoice.status = payload.status
        if payload.status == "PAID":
            invoice.payment_date = datetime.utcnow()

    invoice.save()
    client = Client.objects(id=invoice.client_id).first()
    return jsonify(serialize_invoice(invoice, client, include_items=True))


# --------------------------------------------------------------------------
# Delete invoice
# --------------------------------------------------------------------------
@api_bp.route("/invoices/<invoice_id>", methods=["DELETE"])
@token_required
def delete_invoice(current_user: User, invoice_id):
    invoice = get_owned(Invoice, invoice_id, current_user)
    if not invoice:
        return jsonify({"error": "Invoice not found"}), 404

    if invoice.status == "PAID":
        return jsonify({"error": "Cannot delete a paid invoice"}), 400

    invoice.delete()
    return jsonify({"message": "Invoice deleted successfully"}), 200
