"""
API — Product CRUD (tenant scoped).
"""

from flask import jsonify, request

from bizdesk.models import Product, User
from bizdesk.api import api_bp, parse_body
from bizdesk.api.auth import token_required
from bizdesk.api.payloads import ProductPayload, ProductUpdate
from bizdesk.api.schemas import serialize_product
from bizdesk.utils.helpers import get_owned


@api_bp.route("/products", methods=["GET"])
@token_required
def list_products(current_user: User):
    """Optional query param: q (name contains)."""
    query = Product.objects(user_id=current_user.id)
    search = request.args.get("q")
    if search:
        query = query.filter(name__icontains=search)
    return jsonify([serialize_product(p) for p in query.order_by("-created_at")])


@api_bp.route("/products", methods=["POST"])
@token_required
def create_product(current_user: User):
    payload = parse_body(ProductPayload)
    product = Product(user_id=current_user.id, **payload.model_dump())
    product.save()
    return jsonify(serialize_product(product)), 201


@api_bp.route("/products/<product_id>", methods=["PUT", "PATCH"])
@token_required
def update_product(current_user: User, product_id):
    product = get_owned(Product, product_id, current_user)
    if not product:
        return jsonify({"error": "Product not found"}), 404

    payload = parse_body(ProductUpdate)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(product, field, value)
    product.save()
    return jsonify(serialize_product(product))


@api_bp.route("/products/<product_id>", methods=["DELETE"])
@token_required
def delete_product(current_user: User, product_id):
    product = get_owned(Product, product_id, current_user)
    if not product:
        return jsonify({"error": "Product not found"}), 404

    product.delete()
    return jsonify({"message": "Product deleted successfully"}), 200
