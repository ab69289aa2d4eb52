"""Service layer helpers for external integrations."""

from .errors import (
    ConfigurationError,
    MalformedResponseError,
    PayloadTooLargeError,
    PracticeError,
    UpstreamError,
    ValidationError,
)
from .llm_client import LlmInvocationError, OpenAILlmClient, get_llm_client
from .speech_tts import (
    SpeechTtsError,
    SpeechTtsResult,
    SpeechTtsService,
    Voice,
    get_speech_tts_service,
)
from .transcribe import (
    TranscribeService,
    TranscriptionError,
    TranscriptionResult,
    get_transcribe_service,
)

__all__ = [
    "ConfigurationError",
    "MalformedResponseError",
    "PayloadTooLargeError",
    "PracticeError",
    "UpstreamError",
    "ValidationError",
    "LlmInvocationError",
    "OpenAILlmClient",
    "get_llm_client",
    "SpeechTtsService",
    "SpeechTtsResult",
    "SpeechTtsError",
    "Voice",
    "get_speech_tts_service",
    "TranscribeService",
    "TranscriptionError",
    "TranscriptionResult",
    "get_transcribe_service",
]
