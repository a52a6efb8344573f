"""
API — AI-assisted content generation and history.
"""

import logging

from flask import jsonify
from openai import OpenAIError

from bizdesk.models import AIGeneratedContent, User
from bizdesk.api import api_bp, parse_body
from bizdesk.api.auth import token_required
from bizdesk.api.payloads import AIGeneratePayload
from bizdesk.api.schemas import serialize_ai_content
from bizdesk.services.ai_service import generate_content

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50


@api_bp.route("/ai/generate", methods=["POST"])
@token_required
def ai_generate(current_user: User):
    """
    JSON body: { "type": "email_template", "prompt": "...", "context": "..." }
    """
    payload = parse_body(AIGeneratePayload)

    try:
        content, model = generate_content(payload.type, payload.prompt, payload.context)
    except OpenAIError as e:
        logger.error("AI generation failed for user %s: %s", current_user.id, e)
        return jsonify({"error": "AI provider request failed"}), 502

    record = AIGeneratedContent(
        user_id=current_user.id,
        type=payload.type,
        prompt=payload.prompt,
        content=content,
        metadata={"model": model, "context": payload.context},
    )
    record.save()

    return jsonify({"content": content, "id": str(record.id)})


@api_bp.route("/ai/history", methods=["GET"])
@token_required
def ai_history(current_user: User):
    history = (
        AIGeneratedContent.objects(user_id=current_user.id)
        .order_by("-created_at")
        .limit(HISTORY_LIMIT)
    )
    return jsonify([serialize_ai_content(h) for h in history])
