"""Typed containers shared across the practice pipeline.

These dataclasses live in their own module so the other stages (`ingestion`,
`prompts`, `llm`, `runner`) can import them without creating circular
dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.domain.models import TaskContext
from app.services.prompt_builder import PromptBundle
from app.services.response_contract import EvaluationResult


@dataclass(frozen=True)
class AudioPayload:
    """Uploaded recording held in memory for the lifetime of one request."""

    data: bytes
    content_type: str
    filename: str

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class LlmRequest:
    """Normalized payload handed to the completion client."""

    task: TaskContext
    transcript: str
    bundle: PromptBundle


@dataclass(frozen=True)
class LlmOutcome:
    """Structured result produced by the LLM stage of the pipeline."""

    result: EvaluationResult
    raw_response: str
