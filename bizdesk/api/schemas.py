"""
Model serialization helpers for API responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from bizdesk.models import (
    Admin,
    AIGeneratedContent,
    Client,
    Expense,
    Invoice,
    LineItem,
    Product,
    Quote,
    User,
)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def serialize_user(user: User) -> dict:
    """Return a JSON-safe dict for a User (never the password hash)."""
    return {
        "id": str(user.id),
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "company": user.company,
        "phone": user.phone,
        "country": user.country,
        "plan": user.plan,
        "status": user.status,
        "trial_ends_at": _iso(user.trial_ends_at),
        "paid_until": _iso(user.paid_until),
        "created_at": _iso(user.created_at),
    }


def serialize_admin(admin: Admin) -> dict:
    return {"id": str(admin.id), "email": admin.email, "role": admin.role}


def serialize_client(client: Client) -> dict:
    return {
        "id": str(client.id),
        "name": client.name,
        "email": client.email,
        "phone": client.phone,
        "address": client.address,
        "city": client.city,
        "country": client.country,
        "tax_number": client.tax_number,
        "created_at": _iso(client.created_at),
    }


def serialize_product(product: Product) -> dict:
    return {
        "id": str(product.id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "currency": product.currency,
        "sku": product.sku,
        "stock": product.stock,
        "tax_rate": product.tax_rate,
        "created_at": _iso(product.created_at),
    }


def serialize_line_item(item: LineItem) -> dict:
    return {
        "description": item.description,
        "product_id": str(item.product_id) if item.product_id else None,
        "quantity": item.quantity,
        "unit_price": item.unit_price,
        "discount": item.discount,
        "tax_rate": item.tax_rate,
        "total": item.total,
    }


def _serialize_document(doc, client: Optional[Client], include_items: bool) -> dict:
    data = {
        "id": str(doc.id),
        "client_id": str(doc.client_id),
        "client": serialize_client(client) if client else None,
        "issue_date": _iso(doc.issue_date),
        "status": doc.status,
        "subtotal": doc.subtotal,
        "tax_amount": doc.tax_amount,
        "total_amount": doc.total_amount,
        "currency": doc.currency,
        "notes": doc.notes,
        "terms": doc.terms,
        "created_at": _iso(doc.created_at),
    }
    if include_items:
        data["items"] = [serialize_line_item(i) for i in doc.items]
    return data


def serialize_invoice(
    invoice: Invoice,
    client: Optional[Client] = None,
    *,
    include_items: bool = False,
) -> dict:
    """Return a JSON-safe dict for an Invoice."""
    data = _serialize_document(invoice, client, include_items)
    data.update({
        "invoice_number": invoice.invoice_number,
        "due_date": _iso(invoice.due_date),
        "payment_date": _iso(invoice.payment_date),
        "quote_id": str(invoice.quote_id) if invoice.quote_id else None,
    })
    return data


def serialize_quote(
    quote: Quote,
    client: Optional[Client] = None,
    *,
    include_items: bool = False,
) -> dict:
    """Return a JSON-safe dict for a Quote."""
    data = _serialize_document(quote, client, include_items)
    data.update({
        "quote_number": quote.quote_number,
        "valid_until": _iso(quote.valid_until),
    })
    return data


def serialize_expense(expense: Expense) -> dict:
    return {
        "id": str(expense.id),
        "date": _iso(expense.date),
        "description": expense.description,
        "amount": expense.amount,
        "currency": expense.currency,
        "category": expense.category,
        "receipt_url": expense.receipt_url,
        "notes": expense.notes,
        "created_at": _iso(expense.created_at),
    }


def serialize_ai_content(item: AIGeneratedContent) -> dict:
    return {
        "id": str(item.id),
        "type": item.type,
        "prompt": item.prompt,
        "content": item.content,
        "context": (item.metadata or {}).get("context"),
        "created_at": _iso(item.created_at),
    }
