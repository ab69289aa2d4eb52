"""High-level orchestration map for the practice evaluation pipeline.

The HTTP controllers in ``app/controllers`` parse the form fields and hand a
task variant to ``runner.run_evaluation``; this module documents the canonical
execution order so team members can navigate the codebase more easily:

1. ``ingestion`` – check required fields and load the upload into memory.
2. ``transcription`` – send the recording to the speech-to-text API.
3. ``prompts`` – render the task-specific evaluation prompt.
4. ``llm`` – request a JSON-mode completion.
5. ``response_contract`` – parse, re-attach the transcript, validate metrics.
6. ``synthesis`` – optional spoken reply for conversation practice.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class PipelineStage:
    """Human-readable description of one stage in the practice pipeline."""

    order: int
    name: str
    module: str
    summary: str


class PracticePipeline:
    """Utility wrapper for documenting the evaluation flow."""

    _STAGES: List[PipelineStage] = [
        PipelineStage(
            1,
            "Ingestion",
            "app.pipelines.practice.ingestion",
            "Validate required fields, resolve content type, read and size-check the upload.",
        ),
        PipelineStage(
            2,
            "Transcription",
            "app.pipelines.practice.transcription",
            "Forward the audio bytes once to the transcription model (Whisper).",
        ),
        PipelineStage(
            3,
            "Prompt Assembly",
            "app.pipelines.practice.prompts",
            "Render the task template with topic/context/exchanges/criteria and transcript.",
        ),
        PipelineStage(
            4,
            "LLM Invocation",
            "app.pipelines.practice.llm",
            "Call the chat model in JSON-object mode, single attempt.",
        ),
        PipelineStage(
            5,
            "Response Parsing",
            "app.services.response_contract",
            "Strict JSON parse, overwrite transcribedText, check the metric key set.",
        ),
        PipelineStage(
            6,
            "Reply Synthesis",
            "app.pipelines.practice.synthesis",
            "Conversation only: best-effort TTS of aiResponse under a bounded timeout.",
        ),
    ]

    @classmethod
    def describe(cls) -> Iterable[PipelineStage]:
        """Expose the ordered list of stages for debugging and documentation."""

        return tuple(cls._STAGES)


__all__ = ["PracticePipeline", "PipelineStage"]
