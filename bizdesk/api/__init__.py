"""
RESTful API — JSON endpoints for BizDesk.

All routes are prefixed with ``/api``.
"""

import logging

from flask import Blueprint, jsonify, request
from mongoengine.errors import NotUniqueError, ValidationError as DocumentValidationError
from pydantic import ValidationError

api_bp = Blueprint("api", __name__, url_prefix="/api")

logger = logging.getLogger(__name__)


def parse_body(schema):
    """Validate the JSON body against a pydantic *schema*."""
    data = request.get_json(silent=True) or {}
    return schema.model_validate(data)


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    if location:
        return f"{location}: {first['msg']}"
    return first["msg"]


@api_bp.errorhandler(ValidationError)
def handle_payload_error(error: ValidationError):
    return jsonify({"error": _describe(error)}), 400


@api_bp.errorhandler(DocumentValidationError)
def handle_document_error(error: DocumentValidationError):
    return jsonify({"error": str(error)}), 400


@api_bp.errorhandler(NotUniqueError)
def handle_conflict(error: NotUniqueError):
    logger.warning("Write conflict on %s: %s", request.path, error)
    return jsonify({"error": "Conflicting record, please retry"}), 409


from bizdesk.api import (  # noqa: E402, F401
    auth, admin, clients, products, invoices, quotes, expenses, dashboard, ai, payments,
)
