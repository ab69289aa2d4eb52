"""Structured logging middleware for FastAPI requests."""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger("app.middleware.structured")

COLOR_RESET = "\u001b[0m"
COLOR_GREEN = "\u001b[32m"
COLOR_CYAN = "\u001b[36m"
COLOR_YELLOW = "\u001b[33m"
COLOR_RED = "\u001b[31m"


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """Emit one structured log line for each HTTP request."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start_time = time.perf_counter()
        log_payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "method": request.method,
            "url": str(request.url),
            "client_ip": request.client.host if request.client else None,
            "content_length": request.headers.get("content-length"),
        }

        try:
            response = await call_next(request)
        except Exception as exc:
            log_payload["status_code"] = 500
            log_payload["duration_ms"] = self._elapsed_ms(start_time)
            log_payload["error"] = repr(exc)
            logger.exception(self._format_console_message(log_payload))
            raise

        log_payload["status_code"] = response.status_code
        log_payload["duration_ms"] = self._elapsed_ms(start_time)
        logger.info(self._format_console_message(log_payload))
        logger.debug(self._to_json(log_payload))
        return response

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        """Return elapsed milliseconds rounded to two decimals."""

        return round((time.perf_counter() - start_time) * 1000, 2)

    @staticmethod
    def _format_console_message(payload: dict[str, Any]) -> str:
        """Return minimal request metadata wrapped with ANSI color codes."""

        status = payload.get("status_code") or 0
        if 200 <= status < 300:
            color = COLOR_GREEN
        elif 400 <= status < 500:
            color = COLOR_YELLOW
        elif status >= 500:
            color = COLOR_RED
        else:
            color = COLOR_CYAN

        fields = [
            ("timestamp", payload.get("timestamp")),
            ("method", payload.get("method")),
            ("url", payload.get("url")),
            ("client_ip", payload.get("client_ip")),
            ("status", payload.get("status_code")),
            ("duration_ms", payload.get("duration_ms")),
        ]
        message = ", ".join(
            f"{name}={value if value is not None else '-'}" for name, value in fields
        )

        return f"{color}{message}{COLOR_RESET}"

    @staticmethod
    def _to_json(payload: dict[str, Any]) -> str:
        """Serialize payload as compact JSON."""

        return json.dumps(payload, default=str, separators=(',', ':'))
