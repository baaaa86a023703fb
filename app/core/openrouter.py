# app/core/openrouter.py
"""
Thin proxy to an OpenAI-compatible chat completions API (OpenRouter by default).

Three entry points back the studio's AI assistant:
    chat_completion  - free-form conversation
    code_completion  - continue code at a cursor position
    generate_code    - produce code from a natural-language prompt
"""
import logging
import re
from typing import Dict, List, Optional

from openai import OpenAI, OpenAIError

from app.core.config import settings
from app.core.exceptions import AIKeyNotConfiguredError, UpstreamServiceError

logger = logging.getLogger(__name__)

CURSOR_MARKER = "<CURSOR>"

COMPLETION_SYSTEM_PROMPT = (
    "You are an expert {language} programmer acting as an inline code completion engine. "
    "The user's code contains the marker {marker} where the cursor is. "
    "Reply with only the code that should be inserted at the cursor. "
    "Do not repeat the surrounding code and do not add explanations."
)

GENERATION_SYSTEM_PROMPT = (
    "You are an expert {language} programmer. "
    "Write complete, working {language} code for the user's request. "
    "Reply with only the code, no explanations."
)

_FENCE_RE = re.compile(r"^\s*```[\w+-]*\s*\n(.*?)\n?```\s*$", re.DOTALL)


def resolve_api_key(user_key: Optional[str] = None) -> str:
    """The caller's own key wins; otherwise fall back to the server key."""
    api_key = user_key or settings.OPENROUTER_API_KEY
    if not api_key:
        raise AIKeyNotConfiguredError()
    return api_key


def strip_code_fences(text: str) -> str:
    """Remove a single surrounding markdown code fence, if present."""
    match = _FENCE_RE.match(text or "")
    return match.group(1) if match else (text or "")


def insert_cursor(code: str, cursor: Optional[int]) -> str:
    if cursor is None:
        return code + CURSOR_MARKER
    cursor = max(0, min(cursor, len(code)))
    return code[:cursor] + CURSOR_MARKER + code[cursor:]


class OpenRouterService:
    """
    Wraps an OpenAI client pointed at the configured base URL.
    A client can be injected for tests.
    """

    def __init__(self, api_key: str, base_url: str = None, client: OpenAI = None):
        self.client = client or OpenAI(
            base_url=base_url or settings.OPENROUTER_BASE_URL,
            api_key=api_key,
        )

    def _complete(self, messages: List[Dict[str, str]], model: Optional[str] = None, **params) -> str:
        model = model or settings.DEFAULT_AI_MODEL
        try:
            completion = self.client.chat.completions.create(model=model, messages=messages, **params)
        except OpenAIError as exc:
            logger.error("Completion request to %s failed: %s", model, exc)
            raise UpstreamServiceError("AI service request failed") from exc

        if not completion.choices:
            raise UpstreamServiceError("No completion choices returned from LLM.")
        content = completion.choices[0].message.content
        return content or ""

    def chat_completion(self, messages: List[Dict[str, str]], model: Optional[str] = None) -> str:
        return self._complete(messages, model)

    def code_completion(self, code: str, language: str, cursor: Optional[int] = None, model: Optional[str] = None) -> str:
        messages = [
            {"role": "system", "content": COMPLETION_SYSTEM_PROMPT.format(language=language, marker=CURSOR_MARKER)},
            {"role": "user", "content": insert_cursor(code, cursor)},
        ]
        return strip_code_fences(self._complete(messages, model, temperature=0.2))

    def generate_code(
        self,
        prompt: str,
        language: Optional[str] = None,
        context: Optional[str] = None,
        model: Optional[str] = None,
    ) -> str:
        language = language or "HTML"
        user_content = prompt
        if context:
            user_content = f"Existing code for context:\n{context}\n\nRequest:\n{prompt}"
        messages = [
            {"role": "system", "content": GENERATION_SYSTEM_PROMPT.format(language=language)},
            {"role": "user", "content": user_content},
        ]
        return strip_code_fences(self._complete(messages, model))
