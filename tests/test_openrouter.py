"""Unit tests for the AI proxy helpers (app.core.openrouter).

The OpenAI client is replaced by a MagicMock; no network calls are made.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest
from openai import APIConnectionError

from app.core import openrouter
from app.core.config import settings
from app.core.exceptions import AIKeyNotConfiguredError, UpstreamServiceError
from app.core.openrouter import OpenRouterService, insert_cursor, resolve_api_key, strip_code_fences


def completion_returning(text):
    message = SimpleNamespace(content=text)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def fake_client():
    client = MagicMock()
    client.chat.completions.create.return_value = completion_returning("ok")
    return client


@pytest.fixture
def service(fake_client):
    return OpenRouterService(api_key="sk-test", client=fake_client)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestHelpers:
    @pytest.mark.unit
    def test_user_key_preferred(self, monkeypatch):
        monkeypatch.setattr(settings, "OPENROUTER_API_KEY", "sk-server")
        assert resolve_api_key("sk-user") == "sk-user"
        assert resolve_api_key(None) == "sk-server"

    @pytest.mark.unit
    def test_missing_key_raises(self, monkeypatch):
        monkeypatch.setattr(settings, "OPENROUTER_API_KEY", None)
        with pytest.raises(AIKeyNotConfiguredError):
            resolve_api_key(None)

    @pytest.mark.unit
    def test_strip_code_fences(self):
        assert strip_code_fences("```python\nprint(1)\n```") == "print(1)"
        assert strip_code_fences("plain text") == "plain text"

    @pytest.mark.unit
    def test_insert_cursor(self):
        assert insert_cursor("abcd", 2) == "ab<CURSOR>cd"
        assert insert_cursor("abcd", None) == "abcd<CURSOR>"
        assert insert_cursor("abcd", 99) == "abcd<CURSOR>"


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class TestOpenRouterService:
    @pytest.mark.unit
    def test_chat_uses_default_model(self, service, fake_client):
        messages = [{"role": "user", "content": "hi"}]
        assert service.chat_completion(messages) == "ok"
        fake_client.chat.completions.create.assert_called_once_with(
            model=settings.DEFAULT_AI_MODEL, messages=messages
        )

    @pytest.mark.unit
    def test_code_completion_sends_cursor_marker(self, service, fake_client):
        fake_client.chat.completions.create.return_value = completion_returning("```js\nreturn 1;\n```")
        assert service.code_completion("function f() {}", "javascript", cursor=14, model="m") == "return 1;"

        kwargs = fake_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "m"
        assert kwargs["messages"][1]["content"] == "function f() {<CURSOR>}"
        assert "javascript" in kwargs["messages"][0]["content"]

    @pytest.mark.unit
    def test_generate_code_includes_context(self, service, fake_client):
        service.generate_code("add a footer", "html", context="<main></main>")
        user_message = fake_client.chat.completions.create.call_args.kwargs["messages"][1]["content"]
        assert "<main></main>" in user_message
        assert user_message.endswith("add a footer")

    @pytest.mark.unit
    def test_empty_choices_is_upstream_error(self, service, fake_client):
        fake_client.chat.completions.create.return_value = SimpleNamespace(choices=[])
        with pytest.raises(UpstreamServiceError):
            service.chat_completion([{"role": "user", "content": "hi"}])

    @pytest.mark.unit
    def test_client_error_is_upstream_error(self, service, fake_client):
        request = httpx.Request("POST", "https://openrouter.ai/api/v1/chat/completions")
        fake_client.chat.completions.create.side_effect = APIConnectionError(request=request)
        with pytest.raises(UpstreamServiceError):
            service.chat_completion([{"role": "user", "content": "hi"}])

    @pytest.mark.unit
    def test_builds_real_client_with_base_url(self, monkeypatch):
        captured = {}

        def fake_openai(**kwargs):
            captured.update(kwargs)
            return MagicMock()

        monkeypatch.setattr(openrouter, "OpenAI", fake_openai)
        OpenRouterService(api_key="sk-abc")
        assert captured == {"base_url": settings.OPENROUTER_BASE_URL, "api_key": "sk-abc"}
