import re
from typing import Iterable, List

from .models import MetricSpec

DEFAULT_STORY_CRITERIA = (
    "Coherence and structure",
    "Creativity and originality",
    "Use of descriptive language",
    "Character development",
    "Narrative flow",
)

_WHITESPACE = re.compile(r"\s+")


class MetricKeyService:
    """Domain rules for turning rubric criteria into metric keys."""

    @staticmethod
    def normalize_key(criterion: str) -> str:
        """Lower-case the criterion and join words with underscores."""
        return _WHITESPACE.sub("_", criterion.strip().lower())

    @classmethod
    def derive_specs(cls, criteria: Iterable[str]) -> List[MetricSpec]:
        """Build ordered (key, label) pairs, suffixing duplicate keys.

        The first criterion that normalizes to a key keeps it; later ones get
        ``_2``, ``_3``... so no criterion silently replaces another.
        """
        specs: List[MetricSpec] = []
        taken: set[str] = set()
        for criterion in criteria:
            label = criterion.strip()
            if not label:
                continue
            base = cls.normalize_key(label)
            key = base
            suffix = 2
            while key in taken:
                key = f"{base}_{suffix}"
                suffix += 1
            taken.add(key)
            specs.append(MetricSpec(key=key, label=label))
        return specs
