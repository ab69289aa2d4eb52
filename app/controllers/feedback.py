"""Debate/speaking coach feedback endpoint.

POST ``/api/feedback`` transcribes the learner's answer to a topic and asks the
model for a rubric-based critique plus a follow-up question.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, File, Form, UploadFile

from app.controllers.dependencies import LlmClientDep, ProviderGuard, TranscribeServiceDep
from app.domain.models import FeedbackTask
from app.pipelines.practice import (
    parse_text_list,
    read_audio_payload,
    require_fields,
    run_evaluation,
)

router = APIRouter(prefix="/api", tags=["practice"], dependencies=[ProviderGuard])

logger = logging.getLogger(__name__)

_AUDIO_FILE_UPLOAD = File(None)
_TOPIC_FORM = Form(None)
_CONTEXT_FORM = Form(None)
_EXCHANGES_FORM = Form(None, alias="previousExchanges")


@router.post("/feedback")
async def coach_feedback(
    transcribe_service: TranscribeServiceDep,
    llm_client: LlmClientDep,
    audio: Optional[UploadFile] = _AUDIO_FILE_UPLOAD,
    topic: Optional[str] = _TOPIC_FORM,
    context: Optional[str] = _CONTEXT_FORM,
    previous_exchanges: Optional[str] = _EXCHANGES_FORM,
) -> dict[str, Any]:
    """Score a spoken argument on clarity, reasoning, vocabulary and persuasiveness."""

    require_fields("Audio file and topic are required", audio, topic)
    exchanges = parse_text_list(previous_exchanges, field_name="previousExchanges")
    payload = await read_audio_payload(audio)

    task = FeedbackTask(
        topic=topic.strip(),
        context=(context or "").strip(),
        previous_exchanges=exchanges,
    )
    logger.info("Feedback request topic=%r exchanges=%s", task.topic, len(exchanges))

    result = await run_evaluation(
        task,
        payload,
        transcribe_service=transcribe_service,
        llm_client=llm_client,
    )
    return result.to_payload()
