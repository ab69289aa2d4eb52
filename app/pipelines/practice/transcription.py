"""Transcription stage (Stage 02) of the practice pipeline."""

from __future__ import annotations

import logging

from app.services.errors import UpstreamError
from app.services.transcribe import TranscribeService, TranscriptionError
from app.telemetry import record_provider_call

from .types import AudioPayload

logger = logging.getLogger("app.services.practice_pipeline")


async def transcribe_audio(service: TranscribeService, payload: AudioPayload) -> str:
    """Delegate to the transcription service and surface request-level errors."""

    try:
        result = await service.transcribe(
            payload.data,
            content_type=payload.content_type,
            filename=payload.filename,
        )
    except TranscriptionError as exc:
        record_provider_call("transcription", "error")
        logger.error("Transcription failed: %s", exc)
        raise UpstreamError(str(exc)) from exc

    record_provider_call("transcription", "ok")
    return result.transcript


__all__ = ["transcribe_audio"]
