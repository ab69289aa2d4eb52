"""Shared OpenAI client helpers for service classes."""

from __future__ import annotations

from functools import lru_cache

from openai import AsyncOpenAI

from app.config.settings import settings
from app.services.errors import ConfigurationError

MISSING_API_KEY_MESSAGE = (
    "OpenAI API key is not configured. Please add it to your environment variables."
)


def require_api_key() -> str:
    """Return the configured API key or raise ``ConfigurationError``."""

    if not settings.openai.is_configured:
        raise ConfigurationError(MISSING_API_KEY_MESSAGE)
    return settings.openai.api_key.get_secret_value().strip()


@lru_cache(maxsize=4)
def _cached_client(api_key: str, base_url: str | None, timeout: float) -> AsyncOpenAI:
    # Every request is user-interactive: one attempt per call, no SDK retries.
    client_kwargs: dict[str, object] = {
        "api_key": api_key,
        "timeout": timeout,
        "max_retries": 0,
    }
    if base_url:
        client_kwargs["base_url"] = base_url
    return AsyncOpenAI(**client_kwargs)


def create_openai_client() -> AsyncOpenAI:
    """Instantiate (or reuse) an async client for the configured credentials."""

    return _cached_client(
        require_api_key(),
        settings.openai.base_url,
        settings.openai.timeout_seconds,
    )


__all__ = ["MISSING_API_KEY_MESSAGE", "create_openai_client", "require_api_key"]
