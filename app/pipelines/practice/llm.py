"""Completion stage (Stage 04) of the practice pipeline."""

from __future__ import annotations

import logging

from app.services.errors import MalformedResponseError, UpstreamError
from app.services.llm_client import LlmInvocationError, OpenAILlmClient
from app.services.response_contract import ResponseContractError, parse_evaluation
from app.telemetry import record_provider_call

from .types import LlmOutcome, LlmRequest

logger = logging.getLogger("app.services.practice_pipeline")


def _truncate(value: str, max_length: int = 500) -> str:
    if len(value) <= max_length:
        return value
    return value[: max_length - 3] + "..."


async def call_evaluation_llm(client: OpenAILlmClient, request: LlmRequest) -> LlmOutcome:
    """Invoke the LLM once and validate the evaluation contract."""

    try:
        raw_response = await client.complete_json(request.bundle.prompt)
    except LlmInvocationError as exc:
        record_provider_call("completion", "error")
        logger.error("Completion failed task=%s: %s", request.bundle.task_kind.value, exc)
        raise UpstreamError(str(exc)) from exc
    record_provider_call("completion", "ok")

    logger.info(
        "Raw LLM response task=%s: %s",
        request.bundle.task_kind.value,
        _truncate(raw_response),
    )

    # No repair or retry: a malformed completion fails the request.
    try:
        result = parse_evaluation(
            raw_response,
            transcript=request.transcript,
            task_kind=request.bundle.task_kind,
            expected_metrics=request.bundle.metrics,
        )
    except ResponseContractError as exc:
        logger.warning(
            "LLM returned an invalid evaluation task=%s: %s",
            request.bundle.task_kind.value,
            exc,
        )
        raise MalformedResponseError(str(exc)) from exc

    return LlmOutcome(result=result, raw_response=raw_response)


__all__ = ["call_evaluation_llm"]
