"""Text-to-speech controller backed by the OpenAI speech API."""

from fastapi import APIRouter
from fastapi.responses import Response

from app.config.settings import settings
from app.controllers.dependencies import ProviderGuard, SpeechServiceDep
from app.pipelines.practice import require_fields, synthesize_speech
from app.services.errors import ValidationError
from app.services.speech_tts import SPEECH_MEDIA_TYPE, Voice
from app.views import TextToSpeechRequest

router = APIRouter(prefix="/api", tags=["tts"], dependencies=[ProviderGuard])


@router.post("/text-to-speech", response_class=Response)
async def text_to_speech(
    request: TextToSpeechRequest,
    speech_service: SpeechServiceDep,
) -> Response:
    """Convert text to speech and return MP3 bytes."""

    require_fields("Text is required", request.text)
    try:
        voice = Voice((request.voice or settings.speech.default_voice).strip().lower())
    except ValueError:
        allowed = ", ".join(item.value for item in Voice)
        raise ValidationError(f"Unsupported voice. Choose one of: {allowed}") from None

    result = await synthesize_speech(speech_service, request.text, voice)
    return Response(
        content=result.audio_bytes,
        media_type=SPEECH_MEDIA_TYPE,
        headers={"Content-Length": str(len(result.audio_bytes))},
    )
