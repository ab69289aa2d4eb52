"""Speech analysis endpoint (pronunciation, intonation, fluency, general)."""

import logging
from typing import Any, Optional

from fastapi import APIRouter, File, Form, UploadFile

from app.controllers.dependencies import LlmClientDep, ProviderGuard, TranscribeServiceDep
from app.domain.models import AnalysisTask, AnalysisType
from app.pipelines.practice import read_audio_payload, require_fields, run_evaluation

router = APIRouter(prefix="/api", tags=["practice"], dependencies=[ProviderGuard])

logger = logging.getLogger(__name__)

_AUDIO_FILE_UPLOAD = File(None)
_EXPECTED_TEXT_FORM = Form(None, alias="expectedText")
_TYPE_FORM = Form(None, alias="type")


@router.post("/speech-analysis")
async def analyze_speech(
    transcribe_service: TranscribeServiceDep,
    llm_client: LlmClientDep,
    audio: Optional[UploadFile] = _AUDIO_FILE_UPLOAD,
    expected_text: Optional[str] = _EXPECTED_TEXT_FORM,
    analysis_type: Optional[str] = _TYPE_FORM,
) -> dict[str, Any]:
    """Compare the spoken attempt with the expected text using the chosen sub-rubric."""

    require_fields("Audio file and expected text are required", audio, expected_text)
    payload = await read_audio_payload(audio)

    task = AnalysisTask(
        expected_text=expected_text.strip(),
        analysis_type=AnalysisType.parse(analysis_type),
    )
    logger.info("Speech analysis request type=%s", task.analysis_type.value)

    result = await run_evaluation(
        task,
        payload,
        transcribe_service=transcribe_service,
        llm_client=llm_client,
    )
    return result.to_payload()
