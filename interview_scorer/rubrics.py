from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple

DEFAULT_IDEAL_LENGTH = 100

# dimension weights for the total score
WEIGHTS = {
    "keywords": 0.4,
    "length": 0.2,
    "structure": 0.2,
    "clarity": 0.2,
}

FILLER_WORDS = ("um", "uh", "like", "you know", "basically", "actually")
TRANSITION_WORDS = (
    "first",
    "second",
    "then",
    "next",
    "finally",
    "however",
    "therefore",
    "because",
    "for example",
)
LIST_MARKERS = ("-", "•", "1.")
VOICE_FILLER_WORDS = FILLER_WORDS + ("literally", "so", "well")


def _clean_terms(terms: Optional[Iterable[str]]) -> Tuple[str, ...]:
    seen = []
    for term in terms or ():
        t = str(term).strip().lower()
        if t and t not in seen:
            seen.append(t)
    return tuple(seen)


@dataclass(frozen=True)
class ScoringTables:
    """Read-only word tables the scorer and confidence estimator match against.

    Passed in at construction so callers can localize or tune them without
    touching module state.
    """

    filler_words: Tuple[str, ...] = FILLER_WORDS
    transition_words: Tuple[str, ...] = TRANSITION_WORDS
    list_markers: Tuple[str, ...] = LIST_MARKERS
    voice_filler_words: Tuple[str, ...] = VOICE_FILLER_WORDS

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoringTables":
        overrides = {}
        for name in ("filler_words", "transition_words", "voice_filler_words"):
            if name in data:
                overrides[name] = _clean_terms(data[name])
        if "list_markers" in data:
            # markers are matched verbatim, no case folding
            overrides["list_markers"] = tuple(m for m in data["list_markers"] if m)
        return cls(**overrides)


DEFAULT_TABLES = ScoringTables()


@dataclass(frozen=True)
class Rubric:
    expected_keywords: Tuple[str, ...] = field(default_factory=tuple)
    ideal_answer_length: int = DEFAULT_IDEAL_LENGTH

    def __post_init__(self):
        object.__setattr__(self, "expected_keywords", _clean_terms(self.expected_keywords))
        object.__setattr__(
            self, "ideal_answer_length", coerce_ideal_length(self.ideal_answer_length)
        )

    @classmethod
    def from_record(cls, record: Optional[Dict[str, Any]], default_length: int = DEFAULT_IDEAL_LENGTH) -> "Rubric":
        """Build a rubric from a question-bank row; missing fields get the bank defaults."""
        record = record or {}
        return cls(
            expected_keywords=tuple(record.get("expected_keywords") or ()),
            ideal_answer_length=coerce_ideal_length(record.get("ideal_answer_length"), default_length),
        )


def coerce_ideal_length(value: Any, default: int = DEFAULT_IDEAL_LENGTH) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    return n if n > 0 else default
