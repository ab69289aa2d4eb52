"""Tests for strict parsing of evaluation completions."""

from __future__ import annotations

import json

import pytest

from app.domain.models import MetricSpec, TaskKind
from app.services.response_contract import (
    ConversationResult,
    FeedbackResult,
    ResponseContractError,
    parse_evaluation,
)
from conftest import evaluation_json

SPECS = (MetricSpec("clarity", "clarity"), MetricSpec("pace", "pace"))


def test_transcript_overrides_model_echo():
    result = parse_evaluation(
        evaluation_json(["clarity", "pace"], followUpQuestion="And then?"),
        transcript="what the learner said",
        task_kind=TaskKind.FEEDBACK,
        expected_metrics=SPECS,
    )

    assert isinstance(result, FeedbackResult)
    assert result.transcribed_text == "what the learner said"
    assert result.follow_up_question == "And then?"
    assert list(result.metrics) == ["clarity", "pace"]


def test_scores_are_clamped_to_range():
    body = json.dumps(
        {
            "overallScore": 140,
            "metrics": {"clarity": {"score": -5, "details": "x"}, "pace": {"score": 72.6}},
            "feedback": None,
            "improvements": "Breathe",
        }
    )

    result = parse_evaluation(
        body, transcript="t", task_kind=TaskKind.ANALYSIS, expected_metrics=SPECS
    )

    assert result.overall_score == 100
    assert result.metrics["clarity"].score == 0
    assert result.metrics["pace"].score == 73
    assert result.feedback == ""
    assert result.improvements == ["Breathe"]


def test_payload_uses_camel_case_and_omits_empty_audio():
    result = parse_evaluation(
        evaluation_json(["clarity", "pace"], aiResponse="Hello there"),
        transcript="hi",
        task_kind=TaskKind.CONVERSATION,
        expected_metrics=SPECS,
    )

    assert isinstance(result, ConversationResult)
    payload = result.to_payload()
    assert payload["aiResponse"] == "Hello there"
    assert payload["alternativeResponses"] == []
    assert "aiResponseAudioUrl" not in payload
    assert payload["transcribedText"] == "hi"


@pytest.mark.parametrize(
    "body",
    [
        "not json at all",
        "```json\n{}\n```",
        "[1, 2, 3]",
        json.dumps({"metrics": {"clarity": {"score": 1}, "pace": {"score": 2}}}),
        json.dumps({"overallScore": "high", "metrics": {"clarity": {"score": 1}, "pace": {"score": 2}}}),
    ],
)
def test_malformed_completions_are_rejected(body):
    with pytest.raises(ResponseContractError, match="^Failed to parse AI response"):
        parse_evaluation(
            body, transcript="t", task_kind=TaskKind.ANALYSIS, expected_metrics=SPECS
        )


def test_missing_metric_names_the_key():
    with pytest.raises(ResponseContractError, match="pace"):
        parse_evaluation(
            evaluation_json(["clarity"]),
            transcript="t",
            task_kind=TaskKind.ANALYSIS,
            expected_metrics=SPECS,
        )


@pytest.mark.parametrize(
    "body",
    [
        '{"overallScore": NaN, "metrics": {"clarity": {"score": 1}, "pace": {"score": 2}}}',
        '{"overallScore": 50, "metrics": {"clarity": {"score": Infinity}, "pace": {"score": 2}}}',
        '{"overallScore": 1e999, "metrics": {"clarity": {"score": 1}, "pace": {"score": 2}}}',
        '{"overallScore": 50, "metrics": {"clarity": {"score": -1e999}, "pace": {"score": 2}}}',
    ],
)
def test_non_finite_scores_are_rejected(body):
    with pytest.raises(ResponseContractError, match="^Failed to parse AI response"):
        parse_evaluation(
            body, transcript="t", task_kind=TaskKind.ANALYSIS, expected_metrics=SPECS
        )


def test_model_cannot_supply_reply_audio():
    result = parse_evaluation(
        evaluation_json(["clarity", "pace"], aiResponseAudioUrl="https://cdn.example/a.mp3"),
        transcript="hi",
        task_kind=TaskKind.CONVERSATION,
        expected_metrics=SPECS,
    )

    assert result.ai_response_audio_url is None
    assert "aiResponseAudioUrl" not in result.to_payload()
