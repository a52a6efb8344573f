"""
Language-model content generation through an OpenAI-compatible endpoint.
"""

from __future__ import annotations

import logging
from typing import Optional

from flask import current_app
from openai import OpenAI

logger = logging.getLogger(__name__)

SYSTEM_PROMPTS = {
    "invoice_template": (
        "You are an expert business document writer. Generate professional "
        "invoice templates with proper formatting and business terms."
    ),
    "email_template": (
        "You are a professional business communication expert. Generate polite, "
        "clear, and effective email templates for business purposes."
    ),
    "blog_post": (
        "You are a business content writer specializing in entrepreneurship, "
        "finance, and business management topics."
    ),
    "financial_insights": (
        "You are a financial analyst. Provide clear, actionable insights based on "
        "business data and recommend specific actions for improvement."
    ),
}
DEFAULT_SYSTEM_PROMPT = "You are a helpful business assistant."

MAX_TOKENS = 2000
TEMPERATURE = 0.7


def system_prompt_for(content_type: str) -> str:
    return SYSTEM_PROMPTS.get(content_type, DEFAULT_SYSTEM_PROMPT)


def build_user_message(prompt: str, context: Optional[str] = None) -> str:
    if context:
        return f"{prompt}\n\nContext: {context}"
    return prompt


def _get_client() -> OpenAI:
    return OpenAI(
        base_url=current_app.config["OPENROUTER_BASE_URL"],
        api_key=current_app.config["OPENROUTER_API_KEY"],
    )


def generate_content(content_type: str, prompt: str, context: Optional[str] = None) -> tuple[str, str]:
    """Ask the model for content; returns ``(content, model)``.

    Provider errors (``openai.OpenAIError``) propagate to the caller.
    """
    model = current_app.config["AI_MODEL"]
    completion = _get_client().chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": system_prompt_for(content_type)},
            {"role": "user", "content": build_user_message(prompt, context)},
        ],
        max_tokens=MAX_TOKENS,
        temperature=TEMPERATURE,
    )
    content = completion.choices[0].message.content or ""
    logger.info("Generated %s content with %s (%d chars)", content_type, model, len(content))
    return content, model
