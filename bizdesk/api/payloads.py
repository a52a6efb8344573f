"""
Pydantic v2 schemas for API request bodies.

Bodies are validated here before they reach the services, so totals and
numbering always receive well-typed numbers. Fields accept both
``snake_case`` and ``camelCase`` keys.
"""

from __future__ import annotations

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

Plan = Literal["FREE", "ECONOMIC", "PREMIUM", "VIP"]
UserStatus = Literal["ACTIVE", "TRIAL", "SUSPENDED", "EXPIRED"]
InvoiceStatus = Literal["DRAFT", "SENT", "PAID", "OVERDUE", "CANCELLED"]
QuoteStatus = Literal["DRAFT", "SENT", "ACCEPTED", "REJECTED", "EXPIRED"]


class Payload(BaseModel):
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )


# Auth / accounts
class LoginPayload(Payload):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterPayload(Payload):
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1, max_length=80)
    last_name: str = Field(..., min_length=1, max_length=80)
    company: Optional[str] = Field(default=None, max_length=150)
    phone: Optional[str] = Field(default=None, max_length=30)
    country: Optional[str] = Field(default=None, max_length=80)


class AdminUserCreate(Payload):
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=80)
    last_name: str = Field(..., min_length=1, max_length=80)
    company: Optional[str] = Field(default=None, max_length=150)
    plan: Plan = "FREE"
    password: Optional[str] = None


class AdminUserUpdate(Payload):
    status: Optional[UserStatus] = None
    plan: Optional[Plan] = None
    paid_until: Optional[dt.date] = None


# Clients / products / expenses
class ClientPayload(Payload):
    name: str = Field(..., min_length=1, max_length=150)
    email: Optional[str] = Field(default=None, max_length=120)
    phone: Optional[str] = Field(default=None, max_length=30)
    address: Optional[str] = Field(default=None, max_length=255)
    city: Optional[str] = Field(default=None, max_length=80)
    country: Optional[str] = Field(default=None, max_length=80)
    tax_number: Optional[str] = Field(default=None, max_length=50)


class ClientUpdate(Payload):
    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    email: Optional[str] = Field(default=None, max_length=120)
    phone: Optional[str] = Field(default=None, max_length=30)
    address: Optional[str] = Field(default=None, max_length=255)
    city: Optional[str] = Field(default=None, max_length=80)
    country: Optional[str] = Field(default=None, max_length=80)
    tax_number: Optional[str] = Field(default=None, max_length=50)


class ProductPayload(Payload):
    name: str = Field(..., min_length=1, max_length=150)
    description: Optional[str] = None
    price: float = Field(default=0.0, ge=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    sku: Optional[str] = Field(default=None, max_length=60)
    stock: Optional[int] = None
    tax_rate: float = Field(default=0.0, ge=0)


class ProductUpdate(Payload):
    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    sku: Optional[str] = Field(default=None, max_length=60)
    stock: Optional[int] = None
    tax_rate: Optional[float] = Field(default=None, ge=0)


class ExpensePayload(Payload):
    date: Optional[dt.date] = None
    description: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., ge=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    category: str = Field(default="Other", max_length=60)
    notes: Optional[str] = None


class ExpenseUpdate(Payload):
    date: Optional[dt.date] = None
    description: Optional[str] = Field(default=None, min_length=1, max_length=255)
    amount: Optional[float] = Field(default=None, ge=0)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    category: Optional[str] = Field(default=None, max_length=60)
    notes: Optional[str] = None


# Invoices / quotes
class LineItemPayload(Payload):
    description: str = Field(..., min_length=1, max_length=255)
    product_id: Optional[str] = None
    quantity: float = Field(..., ge=0)
    unit_price: float = Field(..., ge=0)
    discount: float = Field(default=0.0, ge=0, le=100)
    tax_rate: float = Field(default=0.0, ge=0)


class InvoiceCreate(Payload):
    client_id: str
    issue_date: Optional[dt.date] = None
    due_date: dt.date
    currency: str = Field(default="USD", min_length=3, max_length=3)
    notes: Optional[str] = None
    terms: Optional[str] = None
    items: list[LineItemPayload] = Field(..., min_length=1)


class InvoiceUpdate(Payload):
    client_id: Optional[str] = None
    issue_date: Optional[dt.date] = None
    due_date: Optional[dt.date] = None
    status: Optional[InvoiceStatus] = None
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    notes: Optional[str] = None
    terms: Optional[str] = None
    items: Optional[list[LineItemPayload]] = Field(default=None, min_length=1)


class QuoteCreate(Payload):
    client_id: str
    issue_date: Optional[dt.date] = None
    valid_until: dt.date
    currency: str = Field(default="USD", min_length=3, max_length=3)
    notes: Optional[str] = None
    terms: Optional[str] = None
    items: list[LineItemPayload] = Field(..., min_length=1)


class QuoteUpdate(Payload):
    client_id: Optional[str] = None
    issue_date: Optional[dt.date] = None
    valid_until: Optional[dt.date] = None
    status: Optional[QuoteStatus] = None
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    notes: Optional[str] = None
    terms: Optional[str] = None
    items: Optional[list[LineItemPayload]] = Field(default=None, min_length=1)


class QuoteConvert(Payload):
    due_date: Optional[dt.date] = None


# AI / payments
class AIGeneratePayload(Payload):
    type: str = Field(default="general", max_length=40)
    prompt: str = Field(..., min_length=1)
    context: Optional[str] = None


class PaymentIntentPayload(Payload):
    plan: Plan
    amount: float = Field(..., gt=0)
