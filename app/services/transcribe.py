"""OpenAI Whisper transcription helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from app.config.settings import settings
from app.services.openai_client import create_openai_client

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranscriptionResult:
    """Structured transcription outcome returned to the pipeline."""

    transcript: str
    model: str | None = None


class TranscriptionError(RuntimeError):
    """Raised when the provider fails to turn the audio into text."""


class TranscribeService:
    """High-level facade for sending recorded audio to the transcription API."""

    def __init__(
        self,
        *,
        client: AsyncOpenAI | None = None,
        model: str | None = None,
    ) -> None:
        self._client = client
        self._model = model

    async def transcribe(
        self,
        audio_bytes: bytes,
        *,
        content_type: str,
        filename: str,
    ) -> TranscriptionResult:
        """Upload the audio once and return the recognised text."""

        if not audio_bytes:
            raise TranscriptionError("The uploaded audio file is empty.")

        client = self._client or create_openai_client()
        model = self._model or settings.openai.transcription_model

        logger.info(
            "Sending %s bytes (%s) for transcription model=%s",
            len(audio_bytes),
            content_type,
            model,
        )
        try:
            response = await client.audio.transcriptions.create(
                model=model,
                file=(filename, audio_bytes, content_type),
            )
        except OpenAIError as exc:
            raise TranscriptionError(f"Transcription failed: {exc}") from exc

        transcript = (getattr(response, "text", None) or "").strip()
        if not transcript:
            raise TranscriptionError("Transcription returned no text.")

        logger.info("Transcription complete. Length: %s", len(transcript))
        return TranscriptionResult(transcript=transcript, model=model)


def get_transcribe_service() -> TranscribeService:
    """Return the process-wide transcription service."""
    return _DEFAULT_SERVICE


_DEFAULT_SERVICE = TranscribeService()


__all__ = [
    "TranscribeService",
    "TranscriptionError",
    "TranscriptionResult",
    "get_transcribe_service",
]
