"""Telemetry helpers and metrics."""

from .metrics import (
    ERROR_COUNTER,
    EVALUATION_COUNTER,
    PROVIDER_CALL_COUNTER,
    REQUEST_COUNT,
    REQUEST_LATENCY,
    observe_request,
    record_evaluation,
    record_provider_call,
)

__all__ = [
    "ERROR_COUNTER",
    "EVALUATION_COUNTER",
    "PROVIDER_CALL_COUNTER",
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "observe_request",
    "record_evaluation",
    "record_provider_call",
]
