"""Request ingestion helpers (Stage 01 of the practice pipeline)."""

from __future__ import annotations

import json
import mimetypes
from typing import Final

from fastapi import UploadFile

from app.config.settings import settings
from app.services.errors import PayloadTooLargeError, ValidationError

from .types import AudioPayload

DEFAULT_CONTENT_TYPE: Final[str] = "audio/webm"

# Content type -> file extension the transcription API recognises.
_EXTENSIONS: Final[dict[str, str]] = {
    "audio/webm": "webm",
    "video/webm": "webm",
    "audio/ogg": "ogg",
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/wave": "wav",
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
    "audio/mpga": "mpga",
    "audio/mp4": "mp4",
    "video/mp4": "mp4",
    "audio/x-m4a": "m4a",
    "audio/m4a": "m4a",
    "audio/flac": "flac",
    "audio/x-flac": "flac",
}

_GENERIC_TYPES: Final[set[str]] = {"application/octet-stream", "binary/octet-stream"}


def resolve_content_type(audio_file: UploadFile) -> str:
    """Normalize the declared MIME type, guessing from the filename when absent."""

    content_type = (audio_file.content_type or "").split(";", 1)[0].strip().lower()
    if (not content_type or content_type in _GENERIC_TYPES) and audio_file.filename:
        guessed_type, _ = mimetypes.guess_type(audio_file.filename)
        content_type = (guessed_type or "").lower()

    content_type = content_type or DEFAULT_CONTENT_TYPE
    if content_type in _GENERIC_TYPES:
        content_type = DEFAULT_CONTENT_TYPE

    if content_type not in _EXTENSIONS:
        raise ValidationError(f"Unsupported audio format: {content_type}")
    return content_type


async def read_audio_payload(
    audio_file: UploadFile,
    *,
    max_bytes: int | None = None,
) -> AudioPayload:
    """Load the upload fully into memory, rejecting empty or oversized payloads."""

    limit = max_bytes or settings.max_upload_bytes
    content_type = resolve_content_type(audio_file)
    # Read one byte past the limit so oversized uploads are detected without
    # buffering the whole body.
    audio_bytes = await audio_file.read(limit + 1)
    await audio_file.close()

    if not audio_bytes:
        raise ValidationError("Uploaded audio file is empty")
    if len(audio_bytes) > limit:
        raise PayloadTooLargeError(f"Uploaded audio exceeds the {limit} byte limit")

    return AudioPayload(
        data=audio_bytes,
        content_type=content_type,
        filename=f"audio.{_EXTENSIONS[content_type]}",
    )


def require_fields(message: str, *values: object) -> None:
    """Raise ``ValidationError`` with ``message`` when any value is missing or blank."""

    for value in values:
        if value is None:
            raise ValidationError(message)
        if isinstance(value, str) and not value.strip():
            raise ValidationError(message)


def parse_text_list(raw: str | None, *, field_name: str) -> tuple[str, ...]:
    """Decode a JSON array form field into stripped, non-empty strings."""

    if raw is None or not raw.strip():
        return ()
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"{field_name} must be a JSON array") from exc
    if not isinstance(decoded, list):
        raise ValidationError(f"{field_name} must be a JSON array")

    items: list[str] = []
    for item in decoded:
        if item is None:
            continue
        text = item if isinstance(item, str) else json.dumps(item, ensure_ascii=False)
        text = text.strip()
        if text:
            items.append(text)
    return tuple(items)


__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "parse_text_list",
    "read_audio_payload",
    "require_fields",
    "resolve_content_type",
]
