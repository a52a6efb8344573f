"""
API — Expense tracking and receipt uploads.
"""

import logging
from datetime import datetime

from cloudinary.exceptions import Error as CloudinaryError
from flask import jsonify, request

from bizdesk.models import Expense, User
from bizdesk.api import api_bp, parse_body
from bizdesk.api.auth import token_required
from bizdesk.api.payloads import ExpensePayload, ExpenseUpdate
from bizdesk.api.schemas import serialize_expense
from bizdesk.services.storage_service import allowed_receipt, upload_receipt
from bizdesk.utils.helpers import get_owned, to_datetime

logger = logging.getLogger(__name__)


@api_bp.route("/expenses", methods=["GET"])
@token_required
def list_expenses(current_user: User):
    """Optional query param: category."""
    query = Expense.objects(user_id=current_user.id)
    category = request.args.get("category")
    if category:
        query = query.filter(category=category)
    return jsonify([serialize_expense(e) for e in query.order_by("-date")])


@api_bp.route("/expenses", methods=["POST"])
@token_required
def create_expense(current_user: User):
    payload = parse_body(ExpensePayload)
    data = payload.model_dump()
    data["date"] = to_datetime(payload.date) or datetime.utcnow()
    expense = Expense(user_id=current_user.id, **data)
    expense.save()
    return jsonify(serialize_expense(expense)), 201


@api_bp.route("/expenses/<expense_id>", methods=["PUT", "PATCH"])
@token_required
def update_expense(current_user: User, expense_id):
    expense = get_owned(Expense, expense_id, current_user)
    if not expense:
        return jsonify({"error": "Expense not found"}), 404

    payload = parse_body(ExpenseUpdate)
    changes = payload.model_dump(exclude_unset=True)
    if "date" in changes:
        changes["date"] = to_datetime(payload.date) or expense.date
    for field, value in changes.items():
        setattr(expense, field, value)
    expense.save()
    return jsonify(serialize_expense(expense))


@api_bp.route("/expenses/<expense_id>", methods=["DELETE"])
@token_required
def delete_expense(current_user: User, expense_id):
    expense = get_owned(Expense, expense_id, current_user)
    if not expense:
        return jsonify({"error": "Expense not found"}), 404

    expense.delete()
    return jsonify({"message": "Expense deleted successfully"}), 200


@api_bp.route("/expenses/<expense_id>/receipt", methods=["POST"])
@token_required
def upload_expense_receipt(current_user: User, expense_id):
    expense = get_owned(Expense, expense_id, current_user)
    if not expense:
        return jsonify({"error": "Expense not found"}), 404

    file = request.files.get("file")
    if not file or not file.filename:
        return jsonify({"error": "A receipt file is required"}), 400
    if not allowed_receipt(file.filename):
        return jsonify({"error": "Unsupported file type"}), 400

    try:
        expense.receipt_url = upload_receipt(file, str(expense.id))
    except CloudinaryError as e:
        logger.error("Receipt upload failed for expense %s: %s", expense.id, e)
        return jsonify({"error": f"Error uploading receipt: {e}"}), 502

    expense.save()
    return jsonify(serialize_expense(expense))
