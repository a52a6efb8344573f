"""Tests for AI content generation."""
from types import SimpleNamespace

import openai
import pytest

from bizdesk.models import AIGeneratedContent
from bizdesk.services import ai_service


class FakeCompletions:
    def __init__(self, reply="Dear client, ...", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def completions(monkeypatch):
    fake = FakeCompletions()
    client = SimpleNamespace(chat=SimpleNamespace(completions=fake))
    monkeypatch.setattr(ai_service, "_get_client", lambda: client)
    return fake


def test_prompt_helpers():
    assert "financial analyst" in ai_service.system_prompt_for("financial_insights")
    assert ai_service.system_prompt_for("poem") == ai_service.DEFAULT_SYSTEM_PROMPT
    assert ai_service.build_user_message("Hi") == "Hi"
    assert ai_service.build_user_message("Hi", "Q3 data") == "Hi\n\nContext: Q3 data"


def test_generate_stores_history(http, auth_headers, completions, user):
    resp = http.post("/api/ai/generate", headers=auth_headers, json={
        "type": "email_template", "prompt": "Payment reminder", "context": "30 days late",
    })
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["content"] == "Dear client, ..."

    call = completions.calls[0]
    assert call["model"] == "anthropic/claude-3.5-sonnet"
    assert call["max_tokens"] == 2000
    assert call["temperature"] == 0.7
    assert call["messages"][0]["content"] == ai_service.SYSTEM_PROMPTS["email_template"]
    assert call["messages"][1]["content"] == "Payment reminder\n\nContext: 30 days late"

    record = AIGeneratedContent.objects(id=data["id"]).first()
    assert record.user_id == user.id
    assert record.metadata == {"model": "anthropic/claude-3.5-sonnet", "context": "30 days late"}


def test_history(http, auth_headers, completions):
    for prompt in ("first", "second"):
        http.post("/api/ai/generate", headers=auth_headers, json={"type": "blog_post", "prompt": prompt})
    history = http.get("/api/ai/history", headers=auth_headers).get_json()
    assert {h["prompt"] for h in history} == {"first", "second"}


def test_provider_error(http, auth_headers, completions):
    completions.error = openai.OpenAIError("rate limited")
    resp = http.post("/api/ai/generate", headers=auth_headers, json={"prompt": "anything"})
    assert resp.status_code == 502
    assert AIGeneratedContent.objects.count() == 0


def test_prompt_required(http, auth_headers, completions):
    resp = http.post("/api/ai/generate", headers=auth_headers, json={"type": "blog_post"})
    assert resp.status_code == 400
