"""Shared fixtures: a test client with in-memory provider fakes."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
import sys
from typing import Any, Iterable

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from app.config.settings import settings  # noqa: E402
from app.main import app  # noqa: E402
from app.services.llm_client import get_llm_client  # noqa: E402
from app.services.speech_tts import (  # noqa: E402
    SPEECH_MEDIA_TYPE,
    SpeechTtsResult,
    get_speech_tts_service,
)
from app.services.transcribe import TranscriptionResult, get_transcribe_service  # noqa: E402

FEEDBACK_KEYS = ("clarity", "reasoning", "vocabulary", "persuasiveness")
AUDIO_UPLOAD = ("answer.webm", b"\x1aE\xdf\xa3fake-webm-audio", "audio/webm")


def evaluation_json(metric_keys: Iterable[str], **extra: Any) -> str:
    """Build a well-formed completion body with the given metric keys."""

    body: dict[str, Any] = {
        "transcribedText": "model echo that must be replaced",
        "overallScore": 78,
        "metrics": {
            key: {"score": 70 + idx, "details": f"{key} notes"}
            for idx, key in enumerate(metric_keys)
        },
        "feedback": "Solid attempt.",
        "improvements": ["Slow down", "Add an example"],
    }
    body.update(extra)
    return json.dumps(body)


class FakeTranscribeService:
    def __init__(self, transcript: str = "hello world") -> None:
        self.transcript = transcript
        self.error: Exception | None = None
        self.calls: list[dict[str, Any]] = []

    async def transcribe(self, audio_bytes, *, content_type, filename):
        self.calls.append(
            {"bytes": audio_bytes, "content_type": content_type, "filename": filename}
        )
        if self.error is not None:
            raise self.error
        return TranscriptionResult(transcript=self.transcript, model="whisper-1")


class FakeLlmClient:
    def __init__(self, response: str) -> None:
        self.response = response
        self.error: Exception | None = None
        self.prompts: list[str] = []

    async def complete_json(self, prompt, **_kwargs):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


class FakeSpeechService:
    def __init__(self, audio: bytes = b"ID3fake-mp3-bytes") -> None:
        self.audio = audio
        self.error: Exception | None = None
        self.delay_seconds = 0.0
        self.calls: list[dict[str, Any]] = []

    async def synthesize(self, text, *, voice=None):
        self.calls.append({"text": text, "voice": voice})
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.error is not None:
            raise self.error
        return SpeechTtsResult(
            audio_bytes=self.audio,
            media_type=SPEECH_MEDIA_TYPE,
            voice=voice.value if voice else "alloy",
        )


@pytest.fixture
def transcriber() -> FakeTranscribeService:
    return FakeTranscribeService()


@pytest.fixture
def llm() -> FakeLlmClient:
    return FakeLlmClient(evaluation_json(FEEDBACK_KEYS, followUpQuestion="Why?"))


@pytest.fixture
def speech() -> FakeSpeechService:
    return FakeSpeechService()


@pytest.fixture(autouse=True)
def api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Provide a credential unless a test removes it explicitly."""

    monkeypatch.setattr(settings.openai, "api_key", SecretStr("sk-test"))


@pytest.fixture
def client(transcriber, llm, speech):
    """Bypass external integrations for the test client."""

    app.dependency_overrides[get_transcribe_service] = lambda: transcriber
    app.dependency_overrides[get_llm_client] = lambda: llm
    app.dependency_overrides[get_speech_tts_service] = lambda: speech

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()

