"""Pydantic schemas used as views in the MVC architecture."""

from .common import ErrorResponse
from .tts import TextToSpeechRequest

__all__ = [
    "ErrorResponse",
    "TextToSpeechRequest",
]
