"""Tests for the service-level endpoints and error envelope."""

from __future__ import annotations

import pytest

from app.config.settings import OpenAIConfig, Settings, SpeechConfig, settings
from app.services.openai_client import MISSING_API_KEY_MESSAGE
from conftest import AUDIO_UPLOAD


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "operational"


def test_metrics_exposes_request_counters(client):
    client.post("/api/text-to-speech", json={"text": "Hi"})

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "http_requests_total" in response.text
    assert "practice_evaluations_total" in response.text


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


@pytest.mark.parametrize(
    "path, kwargs",
    [
        ("/api/feedback", {"data": {"topic": "Homework"}, "files": {"audio": AUDIO_UPLOAD}}),
        ("/api/story-evaluation", {"data": {"storyPrompt": "A storm"}, "files": {"audio": AUDIO_UPLOAD}}),
        (
            "/api/conversation-simulation",
            {"data": {"scenario": "Bakery", "role": "Baker"}, "files": {"audio": AUDIO_UPLOAD}},
        ),
        ("/api/speech-analysis", {"data": {"expectedText": "Hello"}, "files": {"audio": AUDIO_UPLOAD}}),
        ("/api/text-to-speech", {"json": {"text": "Hello"}}),
    ],
)
def test_every_endpoint_requires_api_key(client, transcriber, llm, speech, monkeypatch, path, kwargs):
    monkeypatch.setattr(settings.openai, "api_key", None)

    response = client.post(path, **kwargs)

    assert response.status_code == 500
    assert response.json()["error"] == MISSING_API_KEY_MESSAGE
    assert transcriber.calls == []
    assert llm.prompts == []
    assert speech.calls == []


def test_settings_read_only_env_sources():
    for config in (OpenAIConfig, SpeechConfig, Settings):
        assert config.model_config.get("secrets_dir") is None
