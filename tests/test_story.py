"""Tests for the /api/story-evaluation endpoint."""

from __future__ import annotations

import json

from conftest import AUDIO_UPLOAD, evaluation_json

DEFAULT_KEYS = [
    "coherence_and_structure",
    "creativity_and_originality",
    "use_of_descriptive_language",
    "character_development",
    "narrative_flow",
]


def test_story_default_criteria_yield_five_metrics(client, llm):
    llm.response = evaluation_json(DEFAULT_KEYS, strengths=["Vivid opening"])

    response = client.post(
        "/api/story-evaluation",
        data={"storyPrompt": "A dragon who is afraid of fire"},
        files={"audio": AUDIO_UPLOAD},
    )

    assert response.status_code == 200
    payload = response.json()
    assert list(payload["metrics"]) == DEFAULT_KEYS
    assert payload["strengths"] == ["Vivid opening"]
    assert payload["transcribedText"] == "hello world"
    for key in DEFAULT_KEYS:
        assert f'"{key}"' in llm.prompts[0]


def test_story_custom_criteria_drive_metric_keys(client, llm):
    # Unrequested keys from the model are dropped.
    llm.response = evaluation_json(["humor", "plot_twist", "plot_twist_2", "extra"])

    response = client.post(
        "/api/story-evaluation",
        data={
            "storyPrompt": "Lost in the city",
            "criteria": json.dumps(["Humor", "Plot twist", "plot  twist"]),
        },
        files={"audio": AUDIO_UPLOAD},
    )

    assert response.status_code == 200
    assert list(response.json()["metrics"]) == ["humor", "plot_twist", "plot_twist_2"]
    assert "1. Humor\n2. Plot twist\n3. plot  twist" in llm.prompts[0]


def test_story_missing_metric_is_a_parse_failure(client, llm):
    llm.response = evaluation_json(DEFAULT_KEYS[:3])

    response = client.post(
        "/api/story-evaluation",
        data={"storyPrompt": "A dragon who is afraid of fire"},
        files={"audio": AUDIO_UPLOAD},
    )

    assert response.status_code == 500
    assert "character_development" in response.json()["error"]


def test_story_requires_prompt(client, transcriber):
    response = client.post("/api/story-evaluation", files={"audio": AUDIO_UPLOAD})

    assert response.status_code == 400
    assert response.json()["error"] == "Audio file and story prompt are required"
    assert transcriber.calls == []
