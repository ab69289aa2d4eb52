"""Storytelling evaluation endpoint."""

import logging
from typing import Any, Optional

from fastapi import APIRouter, File, Form, UploadFile

from app.controllers.dependencies import LlmClientDep, ProviderGuard, TranscribeServiceDep
from app.domain.models import StoryTask
from app.pipelines.practice import (
    parse_text_list,
    read_audio_payload,
    require_fields,
    run_evaluation,
)

router = APIRouter(prefix="/api", tags=["practice"], dependencies=[ProviderGuard])

logger = logging.getLogger(__name__)

_AUDIO_FILE_UPLOAD = File(None)
_STORY_PROMPT_FORM = Form(None, alias="storyPrompt")
_CRITERIA_FORM = Form(None)


@router.post("/story-evaluation")
async def evaluate_story(
    transcribe_service: TranscribeServiceDep,
    llm_client: LlmClientDep,
    audio: Optional[UploadFile] = _AUDIO_FILE_UPLOAD,
    story_prompt: Optional[str] = _STORY_PROMPT_FORM,
    criteria: Optional[str] = _CRITERIA_FORM,
) -> dict[str, Any]:
    """Score a told story per criterion; defaults to the five-point narrative rubric."""

    require_fields("Audio file and story prompt are required", audio, story_prompt)
    criteria_items = parse_text_list(criteria, field_name="criteria")
    payload = await read_audio_payload(audio)

    task = StoryTask(story_prompt=story_prompt.strip(), criteria=criteria_items)
    logger.info("Story evaluation request criteria=%s", len(criteria_items) or "default")

    result = await run_evaluation(
        task,
        payload,
        transcribe_service=transcribe_service,
        llm_client=llm_client,
    )
    return result.to_payload()
