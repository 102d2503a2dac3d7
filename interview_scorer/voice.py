"""Speaking-confidence estimate for spoken answers.

Only the transcript is available, not the recording length, so the speaking
rate assumes every answer took about 30 seconds (``words * 2``). That is an
approximation, not a measured rate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .rubrics import DEFAULT_TABLES, ScoringTables
from .text import clamp, round_half_up, strip_trailing_punct, tokenize

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE = 70
OPTIMAL_WPM = 135
ASSUMED_ANSWER_SECONDS = 30


@dataclass(frozen=True)
class VoiceMetrics:
    confidence_score: int
    words_per_minute: float
    filler_word_count: int

    @classmethod
    def default(cls) -> "VoiceMetrics":
        return cls(confidence_score=DEFAULT_CONFIDENCE, words_per_minute=0, filler_word_count=0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "confidence_score": self.confidence_score,
            "words_per_minute": self.words_per_minute,
            "filler_word_count": self.filler_word_count,
        }


def estimate_confidence(
    transcript: Optional[str],
    clarity_score: float,
    tables: ScoringTables = DEFAULT_TABLES,
) -> VoiceMetrics:
    """Blend speaking rate, filler density and the answer's clarity score into 0-100.

    Fillers are matched per token, so multi-word entries such as "you know"
    never match here.
    """
    if not transcript or not transcript.strip():
        return VoiceMetrics.default()

    words = tokenize(transcript)
    word_count = len(words)
    wpm = word_count * (60 // ASSUMED_ANSWER_SECONDS)

    fillers = set(tables.voice_filler_words)
    filler_count = sum(1 for w in words if strip_trailing_punct(w.lower()) in fillers)

    rate_score = max(0, 100 - abs(wpm - OPTIMAL_WPM) * 0.5)
    filler_ratio = filler_count / max(word_count, 1)
    filler_score = max(0, 100 - filler_ratio * 500)

    raw = rate_score * 0.4 + filler_score * 0.3 + clarity_score * 10 * 0.3
    confidence = int(clamp(round_half_up(raw), 0, 100))
    logger.debug(
        "voice metrics: words=%d wpm=%d fillers=%d rate=%.1f filler=%.1f -> %d",
        word_count, wpm, filler_count, rate_score, filler_score, confidence,
    )
    return VoiceMetrics(confidence_score=confidence, words_per_minute=wpm, filler_word_count=filler_count)
