"""Tests for request ingestion helpers."""

from __future__ import annotations

import asyncio
import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from app.pipelines.practice import (
    parse_text_list,
    read_audio_payload,
    require_fields,
    resolve_content_type,
)
from app.services.errors import PayloadTooLargeError, ValidationError


def _upload(data: bytes, filename: str | None, content_type: str | None) -> UploadFile:
    headers = Headers({"content-type": content_type}) if content_type else Headers({})
    return UploadFile(file=io.BytesIO(data), filename=filename, headers=headers)


def test_content_type_parameters_are_stripped():
    upload = _upload(b"x", "clip.webm", "audio/webm;codecs=opus")
    assert resolve_content_type(upload) == "audio/webm"


def test_content_type_guessed_from_filename():
    upload = _upload(b"x", "clip.mp3", "application/octet-stream")
    assert resolve_content_type(upload) == "audio/mpeg"


def test_content_type_defaults_to_webm():
    upload = _upload(b"x", None, None)
    assert resolve_content_type(upload) == "audio/webm"


def test_unsupported_content_type_rejected():
    upload = _upload(b"x", "notes.txt", "text/plain")
    with pytest.raises(ValidationError) as exc_info:
        resolve_content_type(upload)
    assert exc_info.value.status_code == 400


def test_read_audio_payload_names_file_by_format():
    upload = _upload(b"RIFFdata", "recording", "audio/wav")

    payload = asyncio.run(read_audio_payload(upload))

    assert payload.data == b"RIFFdata"
    assert payload.content_type == "audio/wav"
    assert payload.filename == "audio.wav"
    assert payload.size == 8


def test_read_audio_payload_enforces_limit():
    upload = _upload(b"0123456789", "clip.webm", "audio/webm")

    with pytest.raises(PayloadTooLargeError) as exc_info:
        asyncio.run(read_audio_payload(upload, max_bytes=4))

    assert exc_info.value.status_code == 413


def test_read_audio_payload_accepts_exact_limit():
    upload = _upload(b"0123", "clip.webm", "audio/webm")
    payload = asyncio.run(read_audio_payload(upload, max_bytes=4))
    assert payload.size == 4


def test_require_fields_rejects_blank_strings():
    with pytest.raises(ValidationError, match="Topic is required"):
        require_fields("Topic is required", object(), "   ")
    require_fields("unused", object(), "value")


def test_parse_text_list_variants():
    assert parse_text_list(None, field_name="criteria") == ()
    assert parse_text_list("  ", field_name="criteria") == ()
    assert parse_text_list('[" Humor ", "", null, 3]', field_name="criteria") == ("Humor", "3")


@pytest.mark.parametrize("raw", ["not json", '{"a": 1}', '"text"'])
def test_parse_text_list_requires_array(raw):
    with pytest.raises(ValidationError, match="criteria must be a JSON array"):
        parse_text_list(raw, field_name="criteria")
