"""Common FastAPI dependencies reused across controllers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from app.services.llm_client import OpenAILlmClient, get_llm_client
from app.services.openai_client import require_api_key
from app.services.speech_tts import SpeechTtsService, get_speech_tts_service
from app.services.transcribe import TranscribeService, get_transcribe_service


async def require_provider_credentials() -> None:
    """Fail fast with ``ConfigurationError`` before any form handling or provider call."""

    require_api_key()


TranscribeServiceDep = Annotated[TranscribeService, Depends(get_transcribe_service)]
LlmClientDep = Annotated[OpenAILlmClient, Depends(get_llm_client)]
SpeechServiceDep = Annotated[SpeechTtsService, Depends(get_speech_tts_service)]
ProviderGuard = Depends(require_provider_credentials)


__all__ = [
    "LlmClientDep",
    "ProviderGuard",
    "SpeechServiceDep",
    "TranscribeServiceDep",
    "require_provider_credentials",
]
