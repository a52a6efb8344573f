"""Pytest configuration and fixtures."""
from datetime import datetime

import mongoengine
import mongomock
import pytest
from mongoengine.connection import get_db

from bizdesk import create_app
from bizdesk.api.auth import generate_token
from bizdesk.models import Admin, Client, User


@pytest.fixture
def app():
    """Application bound to an in-memory mongomock database."""
    app = create_app("testing", {"MONGO_CLIENT_CLASS": mongomock.MongoClient})
    yield app
    db = get_db()
    db.client.drop_database(db.name)
    mongoengine.disconnect()


@pytest.fixture
def http(app):
    return app.test_client()


@pytest.fixture
def user(app):
    """An active tenant on the PREMIUM plan."""
    u = User(
        email="owner@example.com",
        first_name="Ada",
        last_name="Owner",
        company="Owner Ltd",
        plan="PREMIUM",
        status="ACTIVE",
    )
    u.set_password("secret123")
    u.save()
    return u


@pytest.fixture
def other_user(app):
    u = User(email="rival@example.com", first_name="Rival", last_name="Tenant")
    u.set_password("secret456")
    u.save()
    return u


@pytest.fixture
def admin(app):
    """The admin seeded by the factory from ADMIN_EMAIL / ADMIN_PASSWORD."""
    return Admin.objects(email="admin@example.com").first()


@pytest.fixture
def auth_headers(app, user):
    with app.app_context():
        return {"Authorization": f"Bearer {generate_token(user)}"}


@pytest.fixture
def admin_headers(app, admin):
    with app.app_context():
        return {"Authorization": f"Bearer {generate_token(admin)}"}


@pytest.fixture
def client_record(user):
    """A client owned by ``user``."""
    c = Client(user_id=user.id, name="Acme Corp", email="billing@acme.example", city="Lisbon")
    c.save()
    return c


@pytest.fixture
def invoice_body(client_record):
    return {
        "client_id": str(client_record.id),
        "due_date": "2026-03-01",
        "notes": "Thanks for your business",
        "items": [
            {"description": "Consulting", "quantity": 2, "unit_price": 100,
             "discount": 10, "tax_rate": 20},
        ],
    }


@pytest.fixture
def current_year():
    return datetime.utcnow().year
