"""
API — Dashboard statistics and reports.
"""

import csv
import io
from collections import defaultdict
from datetime import datetime, timedelta

from flask import Response, jsonify, request

from bizdesk.models import Client, Expense, Invoice, Product, User
from bizdesk.api import api_bp
from bizdesk.api.auth import token_required
from bizdesk.api.invoices import clients_by_id
from bizdesk.api.schemas import serialize_invoice

REVENUE_WINDOW_DAYS = 30
PENDING_STATUSES = ("SENT", "OVERDUE")


@api_bp.route("/dashboard", methods=["GET"])
@token_required
def dashboard(current_user: User):
    """Summary statistics for the authenticated tenant."""
    since = datetime.utcnow() - timedelta(days=REVENUE_WINDOW_DAYS)
    invoices = Invoice.objects(user_id=current_user.id)

    monthly_revenue = invoices.filter(status="PAID", payment_date__gte=since).sum("total_amount")
    pending_payments = invoices.filter(status__in=PENDING_STATUSES).sum("total_amount")

    recent = list(invoices.order_by("-created_at").limit(5))
    clients = clients_by_id(recent)

    return jsonify({
        "stats": {
            "total_clients": Client.objects(user_id=current_user.id).count(),
            "total_products": Product.objects(user_id=current_user.id).count(),
            "total_invoices": invoices.count(),
            "monthly_revenue": monthly_revenue or 0,
            "pending_payments": pending_payments or 0,
            "overdue_invoices": invoices.filter(status="OVERDUE").count(),
        },
        "recent_invoices": [serialize_invoice(i, clients.get(i.client_id)) for i in recent],
    })


@api_bp.route("/reports/summary", methods=["GET"])
@token_required
def report_summary(current_user: User):
    """Monthly revenue and expenses per category for one year."""
    try:
        year = int(request.args.get("year", datetime.utcnow().year))
        start, end = datetime(year, 1, 1), datetime(year + 1, 1, 1)
    except (ValueError, OverflowError):
        return jsonify({"error": "year must be an integer between 1 and 9998"}), 400

    revenue_by_month = [0.0] * 12
    paid = Invoice.objects(
        user_id=current_user.id, status="PAID",
        payment_date__gte=start, payment_date__lt=end,
    )
    for inv in paid:
        revenue_by_month[inv.payment_date.month - 1] += inv.total_amount

    expenses_by_category: dict[str, float] = defaultdict(float)
    expenses_by_month = [0.0] * 12
    for exp in Expense.objects(user_id=current_user.id, date__gte=start, date__lt=end):
        expenses_by_category[exp.category] += exp.amount
        expenses_by_month[exp.date.month - 1] += exp.amount

    return jsonify({
        "year": year,
        "revenue_by_month": revenue_by_month,
        "expenses_by_month": expenses_by_month,
        "expenses_by_category": dict(expenses_by_category),
        "total_revenue": sum(revenue_by_month),
        "total_expenses": sum(expenses_by_month),
    })


@api_bp.route("/reports/invoices.csv", methods=["GET"])
@token_required
def invoices_csv(current_user: User):
    invoices = list(Invoice.objects(user_id=current_user.id).order_by("-created_at"))
    clients = clients_by_id(invoices)

    buf = io.StringIO()
    w = csv.writer(buf)
    w.writerow([
        "Invoice Number", "Client Name", "Issue Date", "Due Date", "Status",
        "Currency", "Subtotal", "Tax Amount", "Total Amount", "Payment Date",
    ])
    for inv in invoices:
        client = clients.get(inv.client_id)
        w.writerow([
            inv.invoice_number,
            client.name if client else "",
            inv.issue_date.strftime("%Y-%m-%d") if inv.issue_date else "",
            inv.due_date.strftime("%Y-%m-%d") if inv.due_date else "",
            inv.status,
            inv.currency,
            f"{inv.subtotal:.2f}",
            f"{inv.tax_amount:.2f}",
            f"{inv.total_amount:.2f}",
            inv.payment_date.strftime("%Y-%m-%d") if inv.payment_date else "",
        ])

    filename = f"invoices_{datetime.utcnow().strftime('%Y%m%d_%H%M%S')}.csv"
    return Response(
        buf.getvalue(),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
