"""
MongoEngine document models.

All collections are defined here. Connect to MongoDB via
``mongoengine.connect()`` in the application factory.
"""

from datetime import datetime

import mongoengine as me
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

PLANS = ("FREE", "ECONOMIC", "PREMIUM", "VIP")
USER_STATUSES = ("ACTIVE", "TRIAL", "SUSPENDED", "EXPIRED")
ADMIN_ROLES = ("SUPER_ADMIN", "ADMIN", "SUPPORT")
INVOICE_STATUSES = ("DRAFT", "SENT", "PAID", "OVERDUE", "CANCELLED")
QUOTE_STATUSES = ("DRAFT", "SENT", "ACCEPTED", "REJECTED", "EXPIRED")


class PasswordMixin:
    """Password hashing helpers shared by tenants and admins."""

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        if self.password_hash:
            return check_password_hash(self.password_hash, password)
        return False


# ---------------------------------------------------------------------------
# User (tenant account)
# ---------------------------------------------------------------------------
class User(PasswordMixin, UserMixin, me.Document):
    """A tenant: owns clients, products, documents and expenses."""

    meta = {"collection": "users", "indexes": ["-created_at"]}

    email = me.EmailField(required=True, unique=True)
    password_hash = me.StringField(max_length=256)
    first_name = me.StringField(required=True, max_length=80)
    last_name = me.StringField(required=True, max_length=80)
    company = me.StringField(max_length=150)
    phone = me.StringField(max_length=30)
    country = me.StringField(max_length=80)
    plan = me.StringField(default="FREE", choices=PLANS)
    status = me.StringField(default="ACTIVE", choices=USER_STATUSES)
    trial_ends_at = me.DateTimeField()
    paid_until = me.DateTimeField()
    created_at = me.DateTimeField(default=datetime.utcnow)
    updated_at = me.DateTimeField(default=datetime.utcnow)

    is_admin = False

    @property
    def is_active(self) -> bool:
        return self.status not in ("SUSPENDED", "EXPIRED")

    def save(self, *args, **kwargs):
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)

    def __repr__(self) -> str:
        return f"<User {self.email}>"


# ---------------------------------------------------------------------------
# Admin (operator account)
# ---------------------------------------------------------------------------
class Admin(PasswordMixin, UserMixin, me.Document):
    """Operator of the admin console."""

    meta = {"collection": "admins"}

    email = me.EmailField(required=True, unique=True)
    password_hash = me.StringField(max_length=256)
    role = me.StringField(default="ADMIN", choices=ADMIN_ROLES)
    created_at = me.DateTimeField(default=datetime.utcnow)

    is_admin = True

    def __repr__(self) -> str:
        return f"<Admin {self.email}>"


# ---------------------------------------------------------------------------
# Client / Product
# ---------------------------------------------------------------------------
class Client(me.Document):
    meta = {"collection": "clients", "indexes": ["user_id"]}

    user_id = me.ObjectIdField(required=True)
    name = me.StringField(required=True, max_length=150)
    email = me.StringField(max_length=120)
    phone = me.StringField(max_length=30)
    address = me.StringField(max_length=255)
    city = me.StringField(max_length=80)
    country = me.StringField(max_length=80)
    tax_number = me.StringField(max_length=50)
    created_at = me.DateTimeField(default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<Client {self.name}>"


class Product(me.Document):
    meta = {"collection": "products", "indexes": ["user_id"]}

    user_id = me.ObjectIdField(required=True)
    name = me.StringField(required=True, max_length=150)
    description = me.StringField()
    price = me.FloatField(required=True, default=0.0)
    currency = me.StringField(default="USD", max_length=3)
    sku = me.StringField(max_length=60)
    stock = me.IntField()
    tax_rate = me.FloatField(default=0.0)
    created_at = me.DateTimeField(default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<Product {self.name}>"


# ---------------------------------------------------------------------------
# LineItem (embedded inside Invoice and Quote)
# ---------------------------------------------------------------------------
class LineItem(me.EmbeddedDocument):
    """A single line on an invoice or quote."""

    description = me.StringField(required=True, max_length=255)
    product_id = me.ObjectIdField()
    quantity = me.FloatField(required=True)
    unit_price = me.FloatField(required=True)
    discount = me.FloatField(default=0.0)
    tax_rate = me.FloatField(default=0.0)
    total = me.FloatField(required=True)

    def __repr__(self) -> str:
        return f"<LineItem {self.description[:30]}>"


# ---------------------------------------------------------------------------
# Invoice / Quote
# ---------------------------------------------------------------------------
class Invoice(me.Document):
    """Client invoice with embedded line items."""

    meta = {
        "collection": "invoices",
        "indexes": ["user_id", "-created_at"],
    }

    invoice_number = me.StringField(required=True, unique=True, max_length=30)
    user_id = me.ObjectIdField(required=True)
    client_id = me.ObjectIdField(required=True)
    issue_date = me.DateTimeField(default=datetime.utcnow)
    due_date = me.DateTimeField(required=True)
    status = me.StringField(default="DRAFT", choices=INVOICE_STATUSES)
    subtotal = me.FloatField(default=0.0)
    tax_amount = me.FloatField(default=0.0)
    total_amount = me.FloatField(default=0.0)
    currency = me.StringField(default="USD", max_length=3)
    notes = me.StringField()
    terms = me.StringField()
    payment_date = me.DateTimeField()
    quote_id = me.ObjectIdField()
    created_at = me.DateTimeField(default=datetime.utcnow)
    updated_at = me.DateTimeField(default=datetime.utcnow)

    items = me.EmbeddedDocumentListField(LineItem)

    def save(self, *args, **kwargs):
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)

    def __repr__(self) -> str:
        return f"<Invoice {self.invoice_number}>"


class Quote(me.Document):
    """Price quote; converts into an invoice once accepted."""

    meta = {
        "collection": "quotes",
        "indexes": ["user_id", "-created_at"],
    }

    quote_number = me.StringField(required=True, unique=True, max_length=30)
    user_id = me.ObjectIdField(required=True)
    client_id = me.ObjectIdField(required=True)
    issue_date = me.DateTimeField(default=datetime.utcnow)
    valid_until = me.DateTimeField(required=True)
    status = me.StringField(default="DRAFT", choices=QUOTE_STATUSES)
    subtotal = me.FloatField(default=0.0)
    tax_amount = me.FloatField(default=0.0)
    total_amount = me.FloatField(default=0.0)
    currency = me.StringField(default="USD", max_length=3)
    notes = me.StringField()
    terms = me.StringField()
    created_at = me.DateTimeField(default=datetime.utcnow)

    items = me.EmbeddedDocumentListField(LineItem)

    def __repr__(self) -> str:
        return f"<Quote {self.quote_number}>"


# ---------------------------------------------------------------------------
# Expense
# ---------------------------------------------------------------------------
class Expense(me.Document):
    meta = {"collection": "expenses", "indexes": ["user_id", "-date"]}

    user_id = me.ObjectIdField(required=True)
    date = me.DateTimeField(default=datetime.utcnow)
    description = me.StringField(required=True, max_length=255)
    amount = me.FloatField(required=True)
    currency = me.StringField(default="USD", max_length=3)
    category = me.StringField(default="Other", max_length=60)
    receipt_url = me.StringField(max_length=500)
    notes = me.StringField()
    created_at = me.DateTimeField(default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<Expense {self.description[:30]}>"


# ---------------------------------------------------------------------------
# AI history / Payments
# ---------------------------------------------------------------------------
class AIGeneratedContent(me.Document):
    meta = {"collection": "ai_contents", "indexes": ["user_id", "-created_at"]}

    user_id = me.ObjectIdField(required=True)
    type = me.StringField(required=True, max_length=40)
    prompt = me.StringField(required=True)
    content = me.StringField()
    metadata = me.DictField()
    created_at = me.DateTimeField(default=datetime.utcnow)


class Payment(me.Document):
    """Subscription payment recorded from a Stripe webhook."""

    meta = {"collection": "payments", "indexes": ["user_id"]}

    user_id = me.ObjectIdField(required=True)
    stripe_payment_id = me.StringField(required=True, unique=True, max_length=100)
    amount = me.FloatField(required=True)
    currency = me.StringField(default="usd", max_length=3)
    status = me.StringField(default="COMPLETED", max_length=20)
    plan = me.StringField(choices=PLANS)
    created_at = me.DateTimeField(default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<Payment {self.stripe_payment_id}>"
