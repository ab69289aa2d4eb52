"""Sequential execution of stages 02-05 for one practice request."""

from __future__ import annotations

import asyncio
import logging

from app.config.settings import settings
from app.domain.models import TaskContext
from app.services.errors import PracticeError, UpstreamError
from app.services.llm_client import OpenAILlmClient
from app.services.response_contract import EvaluationResult
from app.services.transcribe import TranscribeService
from app.telemetry import record_evaluation

from .llm import call_evaluation_llm
from .prompts import build_llm_request
from .transcription import transcribe_audio
from .types import AudioPayload

logger = logging.getLogger("app.services.practice_pipeline")
transcript_logger = logging.getLogger("app.logs.transcript")


async def _evaluate(
    task: TaskContext,
    payload: AudioPayload,
    transcribe_service: TranscribeService,
    llm_client: OpenAILlmClient,
) -> EvaluationResult:
    transcript = await transcribe_audio(transcribe_service, payload)
    transcript_logger.info(
        "learner | task=%s | bytes=%s | text=%s",
        task.kind.value,
        payload.size,
        transcript,
    )

    request = build_llm_request(task, transcript)
    outcome = await call_evaluation_llm(llm_client, request)
    return outcome.result


async def run_evaluation(
    task: TaskContext,
    payload: AudioPayload,
    *,
    transcribe_service: TranscribeService,
    llm_client: OpenAILlmClient,
    timeout_seconds: float | None = None,
) -> EvaluationResult:
    """Transcribe, prompt, complete and parse under one request-level timeout."""

    timeout = timeout_seconds or settings.request_timeout_seconds
    try:
        result = await asyncio.wait_for(
            _evaluate(task, payload, transcribe_service, llm_client),
            timeout,
        )
    except asyncio.TimeoutError as exc:
        record_evaluation(task.kind.value, "timeout")
        logger.error("Evaluation timed out task=%s after %.1fs", task.kind.value, timeout)
        raise UpstreamError(
            f"The AI provider did not respond within {timeout:.0f} seconds"
        ) from exc
    except PracticeError as exc:
        record_evaluation(task.kind.value, type(exc).__name__)
        raise

    record_evaluation(task.kind.value, "ok")
    logger.info(
        "Evaluation complete task=%s overallScore=%s",
        task.kind.value,
        result.overall_score,
    )
    return result


__all__ = ["run_evaluation"]
