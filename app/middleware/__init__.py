"""Request logging and Prometheus instrumentation middleware."""

from .logging import StructuredLoggingMiddleware
from .telemetry import TelemetryMiddleware

__all__ = ["TelemetryMiddleware", "StructuredLoggingMiddleware"]
