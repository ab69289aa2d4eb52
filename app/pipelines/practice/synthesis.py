"""TTS synthesis stage (Stage 06) of the practice pipeline."""

from __future__ import annotations

import asyncio
import base64
import logging

from app.config.settings import settings
from app.services.errors import UpstreamError
from app.services.speech_tts import SpeechTtsError, SpeechTtsResult, SpeechTtsService, Voice
from app.telemetry import record_provider_call

logger = logging.getLogger("app.services.practice_pipeline")


async def synthesize_speech(
    service: SpeechTtsService,
    text: str,
    voice: Voice,
) -> SpeechTtsResult:
    """Primary synthesis for the TTS endpoint; failures end the request."""

    try:
        result = await service.synthesize(text, voice=voice)
    except SpeechTtsError as exc:
        record_provider_call("speech", "error")
        logger.error("Speech synthesis failed voice=%s: %s", voice.value, exc)
        raise UpstreamError(str(exc)) from exc

    record_provider_call("speech", "ok")
    return result


def to_data_url(result: SpeechTtsResult) -> str:
    encoded = base64.b64encode(result.audio_bytes).decode("ascii")
    return f"data:{result.media_type};base64,{encoded}"


async def synthesize_reply_audio(
    service: SpeechTtsService,
    text: str | None,
    *,
    voice: Voice = Voice.ALLOY,
    timeout_seconds: float | None = None,
) -> str | None:
    """Best-effort synthesis of a generated reply.

    Returns a playable data URL, or ``None`` when there is nothing to say, the
    provider fails, or the call exceeds the timeout. Never raises.
    """

    if not text or not text.strip():
        return None

    timeout = timeout_seconds or settings.speech.secondary_timeout_seconds
    try:
        result = await asyncio.wait_for(service.synthesize(text, voice=voice), timeout)
    except asyncio.TimeoutError:
        record_provider_call("speech", "timeout")
        logger.warning("Reply synthesis timed out after %.1fs", timeout)
        return None
    except Exception as exc:
        record_provider_call("speech", "error")
        logger.warning("Reply synthesis failed, continuing without audio: %s", exc)
        return None

    record_provider_call("speech", "ok")
    return to_data_url(result)


__all__ = ["synthesize_reply_audio", "synthesize_speech", "to_data_url"]
