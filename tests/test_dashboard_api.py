"""Tests for dashboard statistics and reports."""
import csv
import io
from datetime import datetime, timedelta

import pytest

from bizdesk.models import Expense, Invoice, Product


@pytest.fixture
def invoices(user, client_record):
    now = datetime.utcnow()

    def make(number, status, total, payment_date=None):
        inv = Invoice(
            invoice_number=number, user_id=user.id, client_id=client_record.id,
            due_date=now + timedelta(days=30), status=status,
            subtotal=total, total_amount=total, payment_date=payment_date,
        )
        inv.save()
        return inv

    return [
        make("INV-T-0001", "PAID", 100.0, now - timedelta(days=3)),
        make("INV-T-0002", "PAID", 50.0, now - timedelta(days=90)),
        make("INV-T-0003", "SENT", 70.0),
        make("INV-T-0004", "OVERDUE", 30.0),
        make("INV-T-0005", "DRAFT", 999.0),
    ]


def test_dashboard(http, auth_headers, user, invoices):
    Product(user_id=user.id, name="Widget", price=1).save()
    data = http.get("/api/dashboard", headers=auth_headers).get_json()

    assert data["stats"] == {
        "total_clients": 1,
        "total_products": 1,
        "total_invoices": 5,
        "monthly_revenue": 100.0,
        "pending_payments": 100.0,
        "overdue_invoices": 1,
    }
    assert len(data["recent_invoices"]) == 5
    assert data["recent_invoices"][0]["client"]["name"] == "Acme Corp"


def test_dashboard_empty(http, auth_headers):
    stats = http.get("/api/dashboard", headers=auth_headers).get_json()["stats"]
    assert stats["monthly_revenue"] == 0
    assert stats["pending_payments"] == 0
    assert stats["total_invoices"] == 0


def test_summary_report(http, auth_headers, user, client_record):
    Invoice(
        invoice_number="INV-2025-0001", user_id=user.id, client_id=client_record.id,
        due_date=datetime(2025, 3, 1), status="PAID", total_amount=120.0,
        payment_date=datetime(2025, 3, 10),
    ).save()
    Expense(user_id=user.id, description="Rent", amount=80, category="Office",
            date=datetime(2025, 3, 1)).save()
    Expense(user_id=user.id, description="Taxi", amount=20, category="Travel",
            date=datetime(2025, 7, 1)).save()
    Expense(user_id=user.id, description="Old", amount=999, category="Travel",
            date=datetime(2024, 7, 1)).save()

    data = http.get("/api/reports/summary?year=2025", headers=auth_headers).get_json()
    assert data["revenue_by_month"][2] == 120.0
    assert data["expenses_by_month"][2] == 80
    assert data["expenses_by_category"] == {"Office": 80, "Travel": 20}
    assert data["total_expenses"] == 100


def test_summary_report_bad_year(http, auth_headers):
    resp = http.get("/api/reports/summary?year=soon", headers=auth_headers)
    assert resp.status_code == 400


@pytest.mark.parametrize("year", ["0", "-5", "9999", "99999999999999999999"])
def test_summary_report_year_out_of_range(http, auth_headers, year):
    resp = http.get(f"/api/reports/summary?year={year}", headers=auth_headers)
    assert resp.status_code == 400
    assert "year" in resp.get_json()["error"]


def test_summary_report_last_supported_year(http, auth_headers):
    resp = http.get("/api/reports/summary?year=9998", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()["total_revenue"] == 0


def test_invoices_csv(http, auth_headers, invoices):
    resp = http.get("/api/reports/invoices.csv", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "attachment; filename=invoices_" in resp.headers["Content-Disposition"]

    rows = list(csv.reader(io.StringIO(resp.get_data(as_text=True))))
    assert rows[0][0] == "Invoice Number"
    assert len(rows) == 6
    numbers = {r[0]: r for r in rows[1:]}
    assert numbers["INV-T-0001"][8] == "100.00"
    assert numbers["INV-T-0001"][1] == "Acme Corp"
