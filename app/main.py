"""Application entry point and FastAPI app factory."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import sys
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config.settings import settings
from .controllers import conversation, feedback, speech_analysis, story, tts
from .middleware import StructuredLoggingMiddleware, TelemetryMiddleware
from .services.errors import PracticeError
from .views import ErrorResponse

logger = logging.getLogger(__name__)


def _rotating_handler(path_value: str, max_bytes: int, fmt: str) -> RotatingFileHandler:
    log_path = Path(path_value)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _configure_logging() -> None:
    """Ensure structured middleware logs stream to stdout and file."""

    logging.getLogger().handlers.clear()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.addHandler(stdout_handler)
    root_logger.addHandler(
        _rotating_handler(
            settings.log_file,
            1_000_000,
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
    )
    root_logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

    middleware_logger = logging.getLogger("app.middleware.structured")
    middleware_logger.handlers.clear()
    middleware_stdout = logging.StreamHandler(sys.stdout)
    middleware_stdout.setFormatter(logging.Formatter("%(message)s"))
    middleware_logger.addHandler(middleware_stdout)
    middleware_logger.setLevel(logging.INFO)
    middleware_logger.propagate = False

    pipeline_logger = logging.getLogger("app.services.practice_pipeline")
    pipeline_logger.handlers.clear()
    pipeline_logger.addHandler(
        _rotating_handler(
            settings.pipeline_log_file,
            500_000,
            "%(asctime)s | %(levelname)s | %(message)s",
        )
    )
    pipeline_logger.setLevel(logging.INFO)

    transcript_logger = logging.getLogger("app.logs.transcript")
    transcript_logger.handlers.clear()
    transcript_logger.addHandler(
        _rotating_handler(
            settings.transcript_log_file,
            500_000,
            "%(asctime)s | %(levelname)s | %(message)s",
        )
    )
    transcript_logger.setLevel(logging.INFO)

    noisy_loggers = [
        "httpx",
        "httpcore",
        "openai",
        "multipart",
    ]
    for name in noisy_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    _configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        description="Speaking practice evaluation API",
    )

    app.add_middleware(TelemetryMiddleware)
    app.add_middleware(StructuredLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.include_router(feedback.router)
    app.include_router(story.router)
    app.include_router(conversation.router)
    app.include_router(speech_analysis.router)
    app.include_router(tts.router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Root endpoint."""

        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "status": "operational",
        }

    @app.get("/health", include_in_schema=False)
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""

        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
        }

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        """Expose application metrics for Prometheus scraping."""

        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.exception_handler(PracticeError)
    async def practice_exception_handler(request: Request, exc: PracticeError):
        if exc.status_code >= 500:
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
        else:
            logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
            for error in exc.errors()
        )
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            f"Invalid request: {details}" if details else "Invalid request",
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path, exc_info=exc)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
        )

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
