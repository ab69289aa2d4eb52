"""Request-level error taxonomy surfaced to API clients as ``{"error": ...}``.

Service classes raise their own narrow exceptions (``TranscriptionError``,
``LlmInvocationError``...). The pipeline stages translate those into the
types below, and ``app.main`` renders them with the matching status code.
"""

from __future__ import annotations

from fastapi import status


class PracticeError(RuntimeError):
    """Base class for errors that end a practice request."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(PracticeError):
    """The AI provider credential is missing."""


class ValidationError(PracticeError):
    """Required request input is missing or unusable."""

    status_code = status.HTTP_400_BAD_REQUEST


class PayloadTooLargeError(ValidationError):
    """The uploaded audio exceeds the configured byte limit."""

    # Content Too Large
    status_code = 413


class UpstreamError(PracticeError):
    """A provider call (transcription, completion, synthesis) failed."""


class MalformedResponseError(PracticeError):
    """The completion text could not be parsed into an evaluation."""


__all__ = [
    "PracticeError",
    "ConfigurationError",
    "ValidationError",
    "PayloadTooLargeError",
    "UpstreamError",
    "MalformedResponseError",
]
