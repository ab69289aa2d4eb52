"""OpenAI text-to-speech service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from openai import AsyncOpenAI, OpenAIError

from app.config.settings import settings
from app.services.openai_client import create_openai_client

logger = logging.getLogger(__name__)

SPEECH_MEDIA_TYPE = "audio/mpeg"


class Voice(str, Enum):
    """Voices accepted by the speech endpoint."""

    ALLOY = "alloy"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"


@dataclass(frozen=True)
class SpeechTtsResult:
    """Synthesised MP3 bytes for a piece of text."""

    audio_bytes: bytes
    media_type: str
    voice: str


class SpeechTtsError(RuntimeError):
    """Raised when speech synthesis fails."""


class SpeechTtsService:
    """Generate spoken audio for coach replies and the TTS endpoint."""

    def __init__(
        self,
        *,
        client: AsyncOpenAI | None = None,
        model: str | None = None,
    ) -> None:
        self._client = client
        self._model = model

    async def synthesize(self, text: str, *, voice: Voice | None = None) -> SpeechTtsResult:
        """Convert text to MP3 speech with the requested voice."""

        cleaned = text.strip()
        if not cleaned:
            raise SpeechTtsError("Cannot synthesize empty text.")

        selected = voice or Voice(settings.speech.default_voice)
        client = self._client or create_openai_client()
        model = self._model or settings.openai.speech_model

        try:
            response = await client.audio.speech.create(
                model=model,
                voice=selected.value,
                input=cleaned,
                response_format="mp3",
            )
            audio_bytes = response.content
        except OpenAIError as exc:
            raise SpeechTtsError(str(exc)) from exc

        if not audio_bytes:
            raise SpeechTtsError("Speech synthesis returned no audio.")

        logger.info(
            "Synthesized %s bytes voice=%s chars=%s",
            len(audio_bytes),
            selected.value,
            len(cleaned),
        )
        return SpeechTtsResult(
            audio_bytes=audio_bytes,
            media_type=SPEECH_MEDIA_TYPE,
            voice=selected.value,
        )


def get_speech_tts_service() -> SpeechTtsService:
    """Return the process-wide speech synthesis service."""
    return _DEFAULT_SERVICE


_DEFAULT_SERVICE = SpeechTtsService()


__all__ = [
    "SPEECH_MEDIA_TYPE",
    "SpeechTtsError",
    "SpeechTtsResult",
    "SpeechTtsService",
    "Voice",
    "get_speech_tts_service",
]
