"""Helpers to construct evaluation prompts for the practice pipeline.

Given a task variant and the learner transcript, we emit a single user prompt
that:
* embeds the task material (topic, story prompt, scenario, expected text),
* spells out the coaching rubric,
* describes the exact JSON object the model must return.

The metric set each template requests is returned alongside the prompt so the
response parser can check the model kept to it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Mapping, Sequence

from app.domain.models import (
    AnalysisTask,
    AnalysisType,
    ConversationTask,
    FeedbackTask,
    MetricSpec,
    StoryTask,
    TaskContext,
    TaskKind,
)
from app.domain.services import DEFAULT_STORY_CRITERIA, MetricKeyService

DEFAULT_MAX_EXCHANGES = 10


def _metrics(*keys: str) -> tuple[MetricSpec, ...]:
    return tuple(MetricSpec(key=key, label=key.replace("_", " ")) for key in keys)


FEEDBACK_METRICS = _metrics("clarity", "reasoning", "vocabulary", "persuasiveness")
CONVERSATION_METRICS = _metrics("appropriateness", "clarity", "vocabulary", "cultural_awareness")

# Analysis sub-templates: coach persona, comparison wording, rubric, metrics.
ANALYSIS_TEMPLATES: Mapping[AnalysisType, Mapping[str, object]] = {
    AnalysisType.PRONUNCIATION: {
        "labels": ("Expected text", "User's spoken text"),
        "instruction": (
            "You are an expert pronunciation coach. Analyze the user's pronunciation "
            "by comparing their spoken text with the expected text."
        ),
        "rubric": (
            "Accuracy of pronunciation",
            "Specific sounds or words that were mispronounced",
            "Overall clarity",
        ),
        "metrics": _metrics("accuracy", "clarity", "intonation"),
    },
    AnalysisType.INTONATION: {
        "labels": ("Expected text", "User's spoken text"),
        "instruction": (
            "You are an expert speech coach. Analyze the user's intonation and rhythm "
            "by comparing their spoken text with the expected text."
        ),
        "rubric": (
            "Intonation patterns",
            "Rhythm and stress",
            "Natural flow of speech",
        ),
        "metrics": _metrics("intonation", "rhythm", "naturalness"),
    },
    AnalysisType.FLUENCY: {
        "labels": ("Expected prompt", "User's spoken response"),
        "instruction": (
            "You are an expert fluency coach. Analyze the user's fluency in "
            "responding to the prompt."
        ),
        "rubric": (
            "Speaking pace",
            "Hesitations and filler words",
            "Sentence structure and complexity",
            "Vocabulary usage",
        ),
        "metrics": _metrics("pace", "fluency", "complexity", "vocabulary"),
    },
    AnalysisType.GENERAL: {
        "labels": ("Expected text", "User's spoken text"),
        "instruction": (
            "You are an expert speech coach. Analyze the user's speech by comparing "
            "their spoken text with the expected text."
        ),
        "rubric": (
            "Accuracy of pronunciation",
            "Clarity of speech",
            "Overall delivery",
        ),
        "metrics": _metrics("accuracy", "clarity", "delivery"),
    },
}


@dataclass(frozen=True)
class PromptBundle:
    prompt: str
    metrics: tuple[MetricSpec, ...]
    task_kind: TaskKind


def _quote(value: str) -> str:
    """Quote free text so embedded quotes cannot break the prompt framing."""
    return json.dumps(value.strip(), ensure_ascii=False)


def _numbered(items: Sequence[str]) -> str:
    return "\n".join(f"{idx + 1}. {item}" for idx, item in enumerate(items))


def _format_exchanges(exchanges: Sequence[str], max_exchanges: int) -> str:
    """Number the most recent exchanges so the model sees short-term context."""
    if not exchanges or max_exchanges <= 0:
        return ""
    recent_slice = list(exchanges)[-max_exchanges:]
    return "Previous exchanges:\n" + _numbered(recent_slice) + "\n\n"


def _schema_block(
    metrics: Sequence[MetricSpec],
    *,
    leading: Sequence[tuple[str, str]] = (),
    trailing: Sequence[tuple[str, str]] = (),
) -> str:
    """Render the JSON object description the model must follow."""

    lines = ['  "transcribedText": "The user\'s transcribed text"']
    lines.extend(f'  "{name}": {kind}' for name, kind in leading)
    lines.append('  "overallScore": number (0-100)')
    metric_lines = ",\n".join(
        f'    "{spec.key}": {{ "score": number (0-100), "details": string }}'
        for spec in metrics
    )
    lines.append('  "metrics": {\n' + metric_lines + "\n  }")
    lines.append('  "feedback": string')
    lines.append('  "improvements": string[]')
    lines.extend(f'  "{name}": {kind}' for name, kind in trailing)
    return (
        "Format the response as a JSON object with exactly the following structure:\n"
        "{\n" + ",\n".join(lines) + "\n}\n"
        "Respond with the JSON object only."
    )


def _build_feedback(task: FeedbackTask, transcript: str, max_exchanges: int) -> PromptBundle:
    context_line = f"Context: {task.context.strip()}\n" if task.context.strip() else ""
    prompt = (
        f"{_format_exchanges(task.previous_exchanges, max_exchanges)}"
        f"Topic: {task.topic.strip()}\n"
        f"{context_line}"
        f"User's response: {_quote(transcript)}\n\n"
        "You are an expert debate and speaking coach. Analyze the user's response to the topic.\n"
        "Provide detailed feedback on:\n"
        + _numbered(
            (
                "Argument quality and logical structure",
                "Use of evidence and examples",
                "Persuasiveness and rhetoric",
                "Clarity and conciseness",
                "Potential counterarguments they should address",
            )
        )
        + "\n\nAlso provide a follow-up question or challenge to their position that would "
        "help them develop their argument further.\n\n"
        + _schema_block(FEEDBACK_METRICS, trailing=(("followUpQuestion", "string"),))
    )
    return PromptBundle(prompt=prompt, metrics=FEEDBACK_METRICS, task_kind=TaskKind.FEEDBACK)


def _story_rubric(task: StoryTask) -> tuple[str, tuple[MetricSpec, ...]]:
    criteria = [item for item in task.criteria if item.strip()] or list(DEFAULT_STORY_CRITERIA)
    metrics = tuple(MetricKeyService.derive_specs(criteria))
    return _numbered([spec.label for spec in metrics]), metrics


def _build_story(task: StoryTask, transcript: str) -> PromptBundle:
    rubric, metrics = _story_rubric(task)
    prompt = (
        f"Story Prompt: {_quote(task.story_prompt)}\n\n"
        f"User's Story: {_quote(transcript)}\n\n"
        "You are an expert storytelling coach. Evaluate the user's story based on the "
        "following criteria:\n"
        f"{rubric}\n\n"
        + _schema_block(metrics, trailing=(("strengths", "string[]"),))
    )
    return PromptBundle(prompt=prompt, metrics=metrics, task_kind=TaskKind.STORY)


def _build_conversation(
    task: ConversationTask, transcript: str, max_exchanges: int
) -> PromptBundle:
    prompt = (
        f"{_format_exchanges(task.previous_exchanges, max_exchanges)}"
        f"Scenario: {task.scenario.strip()}\n"
        f"Your role: {task.role.strip()}\n"
        f"User's response: {_quote(transcript)}\n\n"
        "You are an expert language and communication coach. Analyze the user's "
        "response in this real-world scenario.\n\n"
        "First, generate a natural response that a person in your role would give to "
        "the user's statement.\n\n"
        "Then, evaluate the user's communication based on:\n"
        + _numbered(
            (
                "Appropriateness for the context",
                "Clarity and effectiveness",
                "Use of relevant vocabulary and expressions",
                "Cultural awareness and politeness",
                "Overall communication success",
            )
        )
        + "\n\n"
        + _schema_block(
            CONVERSATION_METRICS,
            leading=(("aiResponse", "\"Your natural response to the user\""),),
            trailing=(("alternativeResponses", "string[]"),),
        )
    )
    return PromptBundle(
        prompt=prompt, metrics=CONVERSATION_METRICS, task_kind=TaskKind.CONVERSATION
    )


def _build_analysis(task: AnalysisTask, transcript: str) -> PromptBundle:
    template = ANALYSIS_TEMPLATES[task.analysis_type]
    expected_label, spoken_label = template["labels"]
    metrics = template["metrics"]
    prompt = (
        f"{expected_label}: {_quote(task.expected_text)}\n"
        f"{spoken_label}: {_quote(transcript)}\n\n"
        f"{template['instruction']}\n\n"
        "Provide detailed feedback on:\n"
        f"{_numbered(template['rubric'])}\n\n"
        + _schema_block(metrics)
    )
    return PromptBundle(prompt=prompt, metrics=metrics, task_kind=TaskKind.ANALYSIS)


def build_prompt(
    task: TaskContext,
    transcript: str,
    *,
    max_exchanges: int = DEFAULT_MAX_EXCHANGES,
) -> PromptBundle:
    """Compose the evaluation prompt for the given task variant."""

    if isinstance(task, FeedbackTask):
        return _build_feedback(task, transcript, max_exchanges)
    if isinstance(task, StoryTask):
        return _build_story(task, transcript)
    if isinstance(task, ConversationTask):
        return _build_conversation(task, transcript, max_exchanges)
    if isinstance(task, AnalysisTask):
        return _build_analysis(task, transcript)
    raise TypeError(f"Unsupported task type: {type(task).__name__}")


__all__ = [
    "ANALYSIS_TEMPLATES",
    "CONVERSATION_METRICS",
    "FEEDBACK_METRICS",
    "PromptBundle",
    "build_prompt",
]
