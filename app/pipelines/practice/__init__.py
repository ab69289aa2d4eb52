"""Practice evaluation pipeline package.

Modules are organised by the order in which a practice request executes:

1. `ingestion` – required fields, content type, in-memory upload.
2. `transcription` – speech-to-text call.
3. `prompts` – task-specific evaluation prompt.
4. `llm` – JSON-mode completion and contract validation.
5. `synthesis` – text-to-speech, primary or best-effort.
6. `flow` – human-readable description of the end-to-end stages.

Controllers import from here so contributors can jump straight to the
relevant stage without wading through a single monolithic file.
"""

from .flow import PipelineStage, PracticePipeline
from .ingestion import parse_text_list, read_audio_payload, require_fields, resolve_content_type
from .llm import call_evaluation_llm
from .prompts import build_llm_request
from .runner import run_evaluation
from .synthesis import synthesize_reply_audio, synthesize_speech, to_data_url
from .transcription import transcribe_audio
from .types import AudioPayload, LlmOutcome, LlmRequest

__all__ = [
    "AudioPayload",
    "LlmOutcome",
    "LlmRequest",
    "PipelineStage",
    "PracticePipeline",
    "build_llm_request",
    "call_evaluation_llm",
    "parse_text_list",
    "read_audio_payload",
    "require_fields",
    "resolve_content_type",
    "run_evaluation",
    "synthesize_reply_audio",
    "synthesize_speech",
    "to_data_url",
    "transcribe_audio",
]
