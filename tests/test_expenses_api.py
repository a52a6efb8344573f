"""Tests for expenses and receipt uploads."""
import io

import pytest
from cloudinary.exceptions import Error as CloudinaryError

from bizdesk.models import Expense


@pytest.fixture
def expense(user):
    e = Expense(user_id=user.id, description="Train ticket", amount=42.0, category="Travel")
    e.save()
    return e


def test_create_expense(http, auth_headers):
    resp = http.post("/api/expenses", headers=auth_headers, json={
        "date": "2026-02-03", "description": "Laptop", "amount": 1299.99, "category": "Equipment",
    })
    assert resp.status_code == 201
    data = resp.get_json()
    assert data["date"].startswith("2026-02-03")
    assert data["category"] == "Equipment"


def test_create_defaults_date_to_today(http, auth_headers):
    data = http.post("/api/expenses", headers=auth_headers, json={
        "description": "Coffee", "amount": 3,
    }).get_json()
    assert data["date"] is not None
    assert data["category"] == "Other"


def test_list_filters_by_category(http, auth_headers, expense, user):
    Expense(user_id=user.id, description="Paper", amount=5, category="Office").save()
    listed = http.get("/api/expenses?category=Travel", headers=auth_headers).get_json()
    assert [e["description"] for e in listed] == ["Train ticket"]


def test_update_and_delete(http, auth_headers, expense):
    url = f"/api/expenses/{expense.id}"
    resp = http.put(url, headers=auth_headers, json={"description": "Train ticket", "amount": 45})
    assert resp.get_json()["amount"] == 45

    assert http.delete(url, headers=auth_headers).status_code == 200
    assert Expense.objects.count() == 0



def test_partial_patch(http, auth_headers, expense):
    resp = http.patch(f"/api/expenses/{expense.id}", headers=auth_headers, json={"category": "Transport"})
    assert resp.status_code == 200
    expense.reload()
    assert expense.category == "Transport"
    assert expense.amount == 42.0
    assert expense.description == "Train ticket"

class TestReceiptUpload:

    def _post(self, http, headers, expense, filename="receipt.pdf"):
        return http.post(
            f"/api/expenses/{expense.id}/receipt",
            headers=headers,
            data={"file": (io.BytesIO(b"%PDF-1.4"), filename)},
            content_type="multipart/form-data",
        )

    def test_upload_stores_url(self, http, auth_headers, expense, monkeypatch):
        calls = {}

        def fake_upload(file, **options):
            calls.update(options)
            return {"secure_url": "https://res.cloudinary.com/demo/receipt.pdf"}

        monkeypatch.setattr("cloudinary.uploader.upload", fake_upload)
        resp = self._post(http, auth_headers, expense)
        assert resp.status_code == 200
        assert resp.get_json()["receipt_url"] == "https://res.cloudinary.com/demo/receipt.pdf"
        assert calls["folder"] == "bizdesk/receipts"

    def test_rejects_unknown_extension(self, http, auth_headers, expense):
        resp = self._post(http, auth_headers, expense, filename="receipt.exe")
        assert resp.status_code == 400

    def test_requires_file(self, http, auth_headers, expense):
        resp = http.post(f"/api/expenses/{expense.id}/receipt", headers=auth_headers)
        assert resp.status_code == 400

    def test_provider_failure(self, http, auth_headers, expense, monkeypatch):
        def failing_upload(file, **options):
            raise CloudinaryError("quota exceeded")

        monkeypatch.setattr("cloudinary.uploader.upload", failing_upload)
        resp = self._post(http, auth_headers, expense)
        assert resp.status_code == 502
        expense.reload()
        assert expense.receipt_url is None
