"""Prompt construction stage (Stage 03) of the practice pipeline.

Transforms the task variant + transcript into the single user prompt consumed
by the completion model.
"""

from __future__ import annotations

import logging

from app.config.settings import settings
from app.domain.models import TaskContext
from app.services.prompt_builder import build_prompt

from .types import LlmRequest

logger = logging.getLogger("app.services.practice_pipeline")


def _truncate(value: str, max_length: int = 240) -> str:
    if len(value) <= max_length:
        return value
    return value[: max_length - 3] + "..."


def build_llm_request(task: TaskContext, transcript: str) -> LlmRequest:
    """Assemble the prompt and expected metric set for the completion call."""

    bundle = build_prompt(
        task,
        transcript,
        max_exchanges=settings.max_prior_exchanges,
    )

    logger.info(
        "Prompt built task=%s metrics=%s\nUSER> %s",
        bundle.task_kind.value,
        ",".join(spec.key for spec in bundle.metrics),
        _truncate(bundle.prompt, 500),
    )

    return LlmRequest(task=task, transcript=transcript, bundle=bundle)


__all__ = ["build_llm_request"]
