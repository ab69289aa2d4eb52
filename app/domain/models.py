"""Domain models for practice tasks.

A practice request is one of four task variants. Each variant carries only the
fields its prompt template needs; the shared result shape lives in
``app.services.response_contract``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


class TaskKind(str, Enum):
    FEEDBACK = "feedback"
    STORY = "story"
    CONVERSATION = "conversation"
    ANALYSIS = "analysis"


class AnalysisType(str, Enum):
    PRONUNCIATION = "pronunciation"
    INTONATION = "intonation"
    FLUENCY = "fluency"
    GENERAL = "general"

    @classmethod
    def parse(cls, value: str | None) -> "AnalysisType":
        """Map a raw form value onto a sub-template, defaulting to general."""
        if not value:
            return cls.GENERAL
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.GENERAL


@dataclass(frozen=True)
class MetricSpec:
    """One rubric dimension: the JSON key and its human label."""

    key: str
    label: str


@dataclass(frozen=True)
class FeedbackTask:
    topic: str
    context: str = ""
    previous_exchanges: Tuple[str, ...] = ()

    kind = TaskKind.FEEDBACK


@dataclass(frozen=True)
class StoryTask:
    story_prompt: str
    criteria: Tuple[str, ...] = ()

    kind = TaskKind.STORY


@dataclass(frozen=True)
class ConversationTask:
    scenario: str
    role: str
    previous_exchanges: Tuple[str, ...] = ()

    kind = TaskKind.CONVERSATION


@dataclass(frozen=True)
class AnalysisTask:
    expected_text: str
    analysis_type: AnalysisType = AnalysisType.GENERAL

    kind = TaskKind.ANALYSIS


TaskContext = Union[FeedbackTask, StoryTask, ConversationTask, AnalysisTask]


__all__ = [
    "AnalysisTask",
    "AnalysisType",
    "ConversationTask",
    "FeedbackTask",
    "MetricSpec",
    "StoryTask",
    "TaskContext",
    "TaskKind",
]
