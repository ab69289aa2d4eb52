"""Role-play conversation endpoint.

The model answers in character (``aiResponse``) and scores the learner. The
reply is then voiced on a best-effort basis: a synthesis failure or timeout
only drops ``aiResponseAudioUrl`` from the response.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, File, Form, UploadFile

from app.controllers.dependencies import (
    LlmClientDep,
    ProviderGuard,
    SpeechServiceDep,
    TranscribeServiceDep,
)
from app.domain.models import ConversationTask
from app.pipelines.practice import (
    PracticePipeline,
    parse_text_list,
    read_audio_payload,
    require_fields,
    run_evaluation,
    synthesize_reply_audio,
)
from app.services.response_contract import ConversationResult

router = APIRouter(prefix="/api", tags=["practice"], dependencies=[ProviderGuard])

logger = logging.getLogger(__name__)

PIPELINE_STAGES = tuple(PracticePipeline.describe())
"""Ordered pipeline metadata used for quick reference and debugging."""

_AUDIO_FILE_UPLOAD = File(None)
_SCENARIO_FORM = Form(None)
_ROLE_FORM = Form(None)
_EXCHANGES_FORM = Form(None, alias="previousExchanges")


@router.post("/conversation-simulation")
async def simulate_conversation(
    transcribe_service: TranscribeServiceDep,
    llm_client: LlmClientDep,
    speech_service: SpeechServiceDep,
    audio: Optional[UploadFile] = _AUDIO_FILE_UPLOAD,
    scenario: Optional[str] = _SCENARIO_FORM,
    role: Optional[str] = _ROLE_FORM,
    previous_exchanges: Optional[str] = _EXCHANGES_FORM,
) -> dict[str, Any]:
    """Reply in role, score the learner, and attach spoken audio when available."""

    require_fields("Audio file, scenario, and role are required", audio, scenario, role)
    exchanges = parse_text_list(previous_exchanges, field_name="previousExchanges")
    payload = await read_audio_payload(audio)

    task = ConversationTask(
        scenario=scenario.strip(),
        role=role.strip(),
        previous_exchanges=exchanges,
    )
    logger.debug("Conversation stages: %s", [stage.name for stage in PIPELINE_STAGES])

    result = await run_evaluation(
        task,
        payload,
        transcribe_service=transcribe_service,
        llm_client=llm_client,
    )

    if isinstance(result, ConversationResult):
        audio_url = await synthesize_reply_audio(speech_service, result.ai_response)
        result.ai_response_audio_url = audio_url
        if audio_url is None:
            logger.info("Returning conversation result without reply audio")

    return result.to_payload()
