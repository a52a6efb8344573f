"""
Invoice and quote business logic — totals and number generation.

``compute_totals`` and ``next_number`` are pure; ``generate_document_number``
is the only piece that touches the database.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from bizdesk.models import LineItem

INVOICE_PREFIX = "INV"
QUOTE_PREFIX = "QUO"


@dataclass(frozen=True)
class DocumentTotals:
    subtotal: float = 0
    tax_amount: float = 0
    total_amount: float = 0

    def as_dict(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "tax_amount": self.tax_amount,
            "total_amount": self.total_amount,
        }


def compute_line(line: Mapping[str, Any]) -> tuple[dict, float, float]:
    """Return ``(computed_line, item_subtotal, item_tax)`` for one entry.

    The line must carry ``quantity``, ``unit_price``, ``discount`` and
    ``tax_rate``; any other keys are copied through.
    """
    item_subtotal = line["quantity"] * line["unit_price"]
    item_discount = item_subtotal * line["discount"] / 100
    item_taxable = item_subtotal - item_discount
    item_tax = item_taxable * line["tax_rate"] / 100

    computed = dict(line)
    computed["total"] = item_taxable + item_tax
    return computed, item_subtotal, item_tax


def compute_totals(lines: Iterable[Mapping[str, Any]]) -> tuple[list[dict], DocumentTotals]:
    """Compute per-line totals and the document totals.

    ``subtotal`` accumulates the pre-discount amounts while ``tax_amount`` is
    taxed on the discounted base, so ``total_amount = subtotal + tax_amount``
    does not net out line discounts. Nothing is rounded or validated here.
    """
    computed_lines: list[dict] = []
    subtotal = 0
    tax_amount = 0

    for line in lines:
        computed, item_subtotal, item_tax = compute_line(line)
        subtotal += item_subtotal
        tax_amount += item_tax
        computed_lines.append(computed)

    return computed_lines, DocumentTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        total_amount=subtotal + tax_amount,
    )


def build_line_items(lines: Iterable[Mapping[str, Any]]) -> tuple[list[LineItem], DocumentTotals]:
    """Run ``compute_totals`` and wrap each computed line as a ``LineItem``."""
    computed_lines, totals = compute_totals(lines)
    items = [
        LineItem(
            description=line["description"],
            product_id=line.get("product_id") or None,
            quantity=line["quantity"],
            unit_price=line["unit_price"],
            discount=line["discount"],
            tax_rate=line["tax_rate"],
            total=line["total"],
        )
        for line in computed_lines
    ]
    return items, totals


def next_number(prefix: str, current_count: int, year: int) -> str:
    """Return a number like ``INV-2024-0001``; the sequence widens past 9999."""
    if isinstance(current_count, bool) or not isinstance(current_count, int):
        raise ValueError("current_count must be an integer")
    if current_count < 0:
        raise ValueError("current_count must not be negative")
    return f"{prefix}-{year}-{current_count + 1:04d}"


def generate_document_number(
    document_cls,
    prefix: str,
    target_date: Optional[datetime] = None,
) -> str:
    """Generate the next sequential number for *target_date*'s year.

    *document_cls* is the MongoEngine document holding the numbers
    (``Invoice`` or ``Quote``); its number field is derived from the prefix.
    """
    target_date = target_date or datetime.utcnow()
    field = _number_field(document_cls)
    pattern = f"^{re.escape(prefix)}-{target_date.year}-"
    count = document_cls.objects(**{f"{field}__regex": pattern}).count()
    return next_number(prefix, count, target_date.year)


def _number_field(document_cls) -> str:
    for name in ("invoice_number", "quote_number"):
        if name in document_cls._fields:
            return name
    raise ValueError(f"{document_cls.__name__} has no number field")
