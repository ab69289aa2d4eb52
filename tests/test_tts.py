"""Tests for the /api/text-to-speech endpoint."""

from __future__ import annotations

from app.config.settings import settings
from app.services.speech_tts import SpeechTtsError, Voice


def test_tts_defaults_to_alloy(client, speech):
    response = client.post("/api/text-to-speech", json={"text": "Good morning!"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "audio/mpeg"
    assert response.headers["content-length"] == str(len(speech.audio))
    assert response.content == speech.audio
    assert speech.calls == [{"text": "Good morning!", "voice": Voice.ALLOY}]


def test_tts_uses_requested_voice(client, speech):
    response = client.post("/api/text-to-speech", json={"text": "Hi", "voice": "nova"})

    assert response.status_code == 200
    assert speech.calls[0]["voice"] is Voice.NOVA


def test_tts_rejects_unknown_voice(client, speech):
    response = client.post("/api/text-to-speech", json={"text": "Hi", "voice": "robot"})

    assert response.status_code == 400
    assert "alloy" in response.json()["error"]
    assert speech.calls == []


def test_tts_requires_text(client, speech):
    response = client.post("/api/text-to-speech", json={"voice": "echo"})

    assert response.status_code == 400
    assert response.json()["error"] == "Text is required"
    assert speech.calls == []


def test_tts_upstream_failure_returns_500(client, speech):
    speech.error = SpeechTtsError("quota exceeded")

    response = client.post("/api/text-to-speech", json={"text": "Hi"})

    assert response.status_code == 500
    assert response.json() == {"error": "quota exceeded"}


def test_tts_missing_api_key(client, speech, monkeypatch):
    monkeypatch.setattr(settings.openai, "api_key", None)

    response = client.post("/api/text-to-speech", json={"text": "Hi"})

    assert response.status_code == 500
    assert "API key is not configured" in response.json()["error"]
    assert speech.calls == []
