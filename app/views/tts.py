"""Schema for text-to-speech requests."""

from typing import Optional

from pydantic import BaseModel


class TextToSpeechRequest(BaseModel):
    text: Optional[str] = None
    voice: Optional[str] = None
