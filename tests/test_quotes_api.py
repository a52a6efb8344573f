"""Tests for quotes and quote-to-invoice conversion."""
import pytest

from bizdesk.models import Invoice, Quote


@pytest.fixture
def quote_body(client_record):
    return {
        "client_id": str(client_record.id),
        "valid_until": "2026-04-30",
        "items": [
            {"description": "Design", "quantity": 1, "unit_price": 50},
            {"description": "Build", "quantity": 3, "unit_price": 10, "tax_rate": 10},
        ],
    }


@pytest.fixture
def created_quote(http, auth_headers, quote_body):
    resp = http.post("/api/quotes", headers=auth_headers, json=quote_body)
    assert resp.status_code == 201
    return resp.get_json()


def test_create_quote(created_quote, current_year):
    assert created_quote["quote_number"] == f"QUO-{current_year}-0001"
    assert created_quote["total_amount"] == 83
    assert created_quote["valid_until"].startswith("2026-04-30")


def test_list_quotes(http, auth_headers, created_quote):
    listed = http.get("/api/quotes", headers=auth_headers).get_json()
    assert [q["quote_number"] for q in listed] == [created_quote["quote_number"]]


def test_update_quote_items(http, auth_headers, created_quote):
    resp = http.put(f"/api/quotes/{created_quote['id']}", headers=auth_headers, json={
        "items": [{"description": "Design", "quantity": 2, "unit_price": 100, "discount": 10, "tax_rate": 20}],
    })
    assert resp.get_json()["total_amount"] == 236


def test_draft_quote_cannot_be_converted(http, auth_headers, created_quote):
    resp = http.post(f"/api/quotes/{created_quote['id']}/convert", headers=auth_headers)
    assert resp.status_code == 400
    assert Invoice.objects.count() == 0


def test_convert_sent_quote(http, auth_headers, created_quote, current_year):
    url = f"/api/quotes/{created_quote['id']}"
    http.put(url, headers=auth_headers, json={"status": "SENT"})

    resp = http.post(f"{url}/convert", headers=auth_headers, json={"due_date": "2026-05-31"})
    assert resp.status_code == 201
    data = resp.get_json()
    assert data["quote"]["status"] == "ACCEPTED"

    invoice = data["invoice"]
    assert invoice["invoice_number"] == f"INV-{current_year}-0001"
    assert invoice["quote_id"] == created_quote["id"]
    assert invoice["total_amount"] == created_quote["total_amount"]
    assert [i["total"] for i in invoice["items"]] == [50, 33]
    assert invoice["due_date"].startswith("2026-05-31")

    again = http.post(f"{url}/convert", headers=auth_headers)
    assert again.status_code == 400

    edit = http.put(url, headers=auth_headers, json={"notes": "changed"})
    assert edit.status_code == 400


def test_delete_quote(http, auth_headers, created_quote):
    resp = http.delete(f"/api/quotes/{created_quote['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert Quote.objects.count() == 0
