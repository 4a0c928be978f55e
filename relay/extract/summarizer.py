import logging
from typing import Any, Optional

from openai import OpenAIError

from relay.core.config import Settings
from relay.core.openai_client import build_openai_client
from relay.guardrails.errors import NO_TEXT_PROVIDED, ClientInputError, ProviderError
from relay.prompts.loader import get_system_prompt, get_user_prompt

logger = logging.getLogger(__name__)


class Summarizer:
    """Bullet-point summaries of transcript text via the chat completions API.
    The client is created on first use so the relay starts even without a configured key; every call recomputes (no cache)."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._client: Any = None

    def _get_client(self):
        if self._client is None:
            try:
                self._client = build_openai_client(self.settings)
            except OpenAIError as e:
                raise ProviderError(f"summarization client unavailable: {e}") from e
        return self._client

    def build_messages(self, text: str) -> list[dict]:
        """Return chat messages: versioned system prompt plus the user prompt with <<TRANSCRIPT>> filled in."""
        version = self.settings.prompt_version
        system_prompt = get_system_prompt("summarize", version)
        user_prompt = get_user_prompt("summarize", version).replace("<<TRANSCRIPT>>", text)
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]

    def summarize(self, text: Optional[str]) -> str:
        """Return the model's summary, one point per line, exactly as generated.
        Raises ClientInputError for empty text (no provider call) and ProviderError when the model call fails."""
        if not (text or "").strip():
            raise ClientInputError(NO_TEXT_PROVIDED)

        client = self._get_client()
        try:
            resp = client.chat.completions.create(
                model=self.settings.chat_model,
                messages=self.build_messages(text),
                temperature=0.2,
            )
        except OpenAIError as e:
            raise ProviderError(f"summary generation failed: {e}") from e

        if not resp.choices:
            raise ProviderError("summary generation returned no choices")
        summary = resp.choices[0].message.content
        if summary is None:
            raise ProviderError("summary generation returned no content")

        u = getattr(resp, "usage", None)
        if u is not None:
            logger.info(
                "summary_generated prompt_tokens=%s completion_tokens=%s",
                getattr(u, "prompt_tokens", 0),
                getattr(u, "completion_tokens", 0),
            )
        return summary
