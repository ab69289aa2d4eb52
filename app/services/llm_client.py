"""Thin chat-completion wrapper for JSON-mode evaluation calls."""

from __future__ import annotations

import logging

from openai import AsyncOpenAI, OpenAIError

from app.config.settings import settings
from app.services.openai_client import create_openai_client

logger = logging.getLogger(__name__)


class LlmInvocationError(RuntimeError):
    """Raised when the chat completion call fails."""


class OpenAILlmClient:
    """Invoke chat completion models constrained to JSON-object output."""

    def __init__(
        self,
        *,
        client: AsyncOpenAI | None = None,
        model_id: str | None = None,
    ) -> None:
        self._client = client
        self._model_id = model_id

    async def complete_json(
        self,
        prompt: str,
        *,
        model_id: str | None = None,
        temperature: float | None = None,
    ) -> str:
        """Run a single completion and return the text of the top choice."""

        client = self._client or create_openai_client()
        target_model_id = model_id or self._model_id or settings.openai.completion_model

        request_kwargs: dict[str, object] = {
            "model": target_model_id,
            "messages": [{"role": "user", "content": prompt}],
            "response_format": {"type": "json_object"},
        }
        if temperature is not None:
            request_kwargs["temperature"] = temperature

        try:
            completion = await client.chat.completions.create(**request_kwargs)
        except OpenAIError as exc:
            raise LlmInvocationError(str(exc)) from exc

        if not completion.choices:
            logger.warning("Completion returned no choices model=%s", target_model_id)
            return ""
        return completion.choices[0].message.content or ""


def get_llm_client() -> OpenAILlmClient:
    """Return the process-wide completion client."""
    return _DEFAULT_CLIENT


_DEFAULT_CLIENT = OpenAILlmClient()


__all__ = ["OpenAILlmClient", "LlmInvocationError", "get_llm_client"]
