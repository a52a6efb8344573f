"""
API — Client CRUD (tenant scoped).
"""

from flask import jsonify

from bizdesk.models import Client, User
from bizdesk.api import api_bp, parse_body
from bizdesk.api.auth import token_required
from bizdesk.api.payloads import ClientPayload, ClientUpdate
from bizdesk.api.schemas import serialize_client
from bizdesk.utils.helpers import get_owned


@api_bp.route("/clients", methods=["GET"])
@token_required
def list_clients(current_user: User):
    clients = Client.objects(user_id=current_user.id).order_by("-created_at")
    return jsonify([serialize_client(c) for c in clients])


@api_bp.route("/clients", methods=["POST"])
@token_required
def create_client(current_user: User):
    payload = parse_body(ClientPayload)
    client = Client(user_id=current_user.id, **payload.model_dump())
    client.save()
    return jsonify(serialize_client(client)), 201


@api_bp.route("/clients/<client_id>", methods=["PUT", "PATCH"])
@token_required
def update_client(current_user: User, client_id):
    client = get_owned(Client, client_id, current_user)
    if not client:
        return jsonify({"error": "Client not found"}), 404

    payload = parse_body(ClientUpdate)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(client, field, value)
    client.save()
    return jsonify(serialize_client(client))


@api_bp.route("/clients/<client_id>", methods=["DELETE"])
@token_required
def delete_client(current_user: User, client_id):
    client = get_owned(Client, client_id, current_user)
    if not client:
        return jsonify({"error": "Client not found"}), 404

    client.delete()
    return jsonify({"message": "Client deleted successfully"}), 200
