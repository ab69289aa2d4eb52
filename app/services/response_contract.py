"""Pydantic models for validating evaluation JSON returned by the LLM.

Every practice endpoint runs the completion text through ``parse_evaluation``
so downstream code receives normalized, type-safe objects. The transcript from
the transcription stage is authoritative and always replaces whatever the model
echoed back.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError, field_validator

from app.domain.models import MetricSpec, TaskKind

logger = logging.getLogger(__name__)


def _clamp_score(value: Any) -> int:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"score must be a finite number, got {value!r}")
    return int(max(0, min(100, round(number))))


def _as_text_list(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None]
    return value


class MetricScore(BaseModel):
    score: int
    details: str = ""

    model_config = {"extra": "allow"}

    @field_validator("score", mode="before")
    @classmethod
    def normalize_score(cls, value: Any) -> int:
        return _clamp_score(value)

    @field_validator("details", mode="before")
    @classmethod
    def normalize_details(cls, value: Any) -> str:
        return "" if value is None else str(value)


class EvaluationResult(BaseModel):
    transcribed_text: str = Field(default="", alias="transcribedText")
    overall_score: int = Field(alias="overallScore")
    metrics: Dict[str, MetricScore]
    feedback: str = ""
    improvements: List[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True, "extra": "allow"}

    @field_validator("overall_score", mode="before")
    @classmethod
    def normalize_overall_score(cls, value: Any) -> int:
        return _clamp_score(value)

    @field_validator("feedback", mode="before")
    @classmethod
    def normalize_feedback(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("improvements", mode="before")
    @classmethod
    def normalize_improvements(cls, value: Any) -> Any:
        return _as_text_list(value)

    def to_payload(self) -> dict[str, Any]:
        """Serialize with the camelCase keys the frontend consumes."""
        return self.model_dump(by_alias=True, exclude_none=True)


class FeedbackResult(EvaluationResult):
    follow_up_question: Optional[str] = Field(default=None, alias="followUpQuestion")


class StoryResult(EvaluationResult):
    strengths: List[str] = Field(default_factory=list)

    @field_validator("strengths", mode="before")
    @classmethod
    def normalize_strengths(cls, value: Any) -> Any:
        return _as_text_list(value)


class ConversationResult(EvaluationResult):
    ai_response: Optional[str] = Field(default=None, alias="aiResponse")
    alternative_responses: List[str] = Field(
        default_factory=list, alias="alternativeResponses"
    )
    ai_response_audio_url: Optional[str] = Field(default=None, alias="aiResponseAudioUrl")

    @field_validator("alternative_responses", mode="before")
    @classmethod
    def normalize_alternatives(cls, value: Any) -> Any:
        return _as_text_list(value)


class AnalysisResult(EvaluationResult):
    pass


RESULT_TYPES: dict[TaskKind, type[EvaluationResult]] = {
    TaskKind.FEEDBACK: FeedbackResult,
    TaskKind.STORY: StoryResult,
    TaskKind.CONVERSATION: ConversationResult,
    TaskKind.ANALYSIS: AnalysisResult,
}


class ResponseContractError(RuntimeError):
    """Raised when the LLM response contract cannot be validated."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _reconcile_metrics(data: dict[str, Any], expected: Sequence[MetricSpec]) -> None:
    """Keep exactly the requested metric keys, failing if any is missing."""

    if not expected:
        return
    metrics = data.get("metrics")
    if not isinstance(metrics, dict):
        raise ResponseContractError("Failed to parse AI response: metrics object missing")

    expected_keys = [spec.key for spec in expected]
    missing = [key for key in expected_keys if key not in metrics]
    if missing:
        raise ResponseContractError(
            "Failed to parse AI response: missing metrics " + ", ".join(missing)
        )
    unexpected = sorted(set(metrics) - set(expected_keys))
    if unexpected:
        logger.info("Dropping unrequested metrics from LLM response: %s", unexpected)
    data["metrics"] = {key: metrics[key] for key in expected_keys}


def parse_evaluation(
    payload: str,
    *,
    transcript: str,
    task_kind: TaskKind,
    expected_metrics: Sequence[MetricSpec] = (),
) -> EvaluationResult:
    """Strictly parse completion text into the result type for ``task_kind``."""

    try:
        data = json.loads(payload, parse_constant=_reject_constant)
    except (TypeError, ValueError) as exc:
        raise ResponseContractError(f"Failed to parse AI response: {exc}") from exc
    if not isinstance(data, dict):
        raise ResponseContractError("Failed to parse AI response: expected a JSON object")

    data["transcribedText"] = transcript
    # Reply audio is attached by the synthesis stage, never by the model.
    data.pop("aiResponseAudioUrl", None)
    data.pop("ai_response_audio_url", None)
    _reconcile_metrics(data, expected_metrics)

    result_type = RESULT_TYPES[task_kind]
    try:
        return result_type.model_validate(data)
    except (ValidationError, TypeError, ValueError, OverflowError) as exc:
        raise ResponseContractError(f"Failed to parse AI response: {exc}") from exc


__all__ = [
    "AnalysisResult",
    "ConversationResult",
    "EvaluationResult",
    "FeedbackResult",
    "MetricScore",
    "RESULT_TYPES",
    "ResponseContractError",
    "StoryResult",
    "parse_evaluation",
]
