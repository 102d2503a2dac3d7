"""Plain-text helpers shared by the answer scorer and the confidence estimator."""

import math
import re
from typing import Iterable, List

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_TRAILING_PUNCT = ".,!?"


def normalize(text: str) -> str:
    return (text or "").lower().strip()


def tokenize(text: str) -> List[str]:
    # str.split() with no argument already drops empty tokens
    return (text or "").split()


def split_sentences(text: str) -> List[str]:
    return [s for s in _SENTENCE_SPLIT.split(text or "") if s.strip()]


def count_phrases(text: str, phrases: Iterable[str]) -> int:
    """Total non-overlapping occurrences of every phrase, matched as raw substrings."""
    return sum(text.count(p) for p in phrases if p)


def strip_trailing_punct(token: str) -> str:
    return token.rstrip(_TRAILING_PUNCT)


def round_half_up(value: float, ndigits: int = 0) -> float:
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
