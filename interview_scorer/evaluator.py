"""Rule-based answer scoring.

Turns a free-text answer plus a rubric (expected keywords, ideal length) into a
weighted 0-10 score over four dimensions: keyword coverage, length fit,
structure and clarity. No model calls; the same input always yields the same
``Feedback``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .feedback import Feedback, build_feedback_lists
from .rubrics import DEFAULT_TABLES, WEIGHTS, Rubric, ScoringTables
from .text import clamp, count_phrases, normalize, round_half_up, split_sentences, tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Dimensions:
    keyword_ratio: float
    missing_keywords: Tuple[str, ...]
    keyword_score: float
    length_score: float
    structure_score: float
    clarity_score: float
    word_count: int
    sentence_count: int
    filler_count: int


def length_score(word_count: int, ideal_length: int) -> float:
    if word_count < ideal_length * 0.5:
        return (word_count / (ideal_length * 0.5)) * 6
    if word_count > ideal_length * 2:
        return 7.0
    if ideal_length * 0.8 <= word_count <= ideal_length * 1.5:
        return 10.0
    return 8.0


class AnswerScorer:
    def __init__(self, tables: ScoringTables = DEFAULT_TABLES):
        self.tables = tables

    def structure_score(self, answer: str, sentence_count: int) -> float:
        s = 5
        if sentence_count >= 3:
            s += 2
        elif sentence_count == 2:
            s += 1
        if any(m in answer for m in self.tables.list_markers):
            s += 2
        if any(t in answer for t in self.tables.transition_words):
            s += 1
        return clamp(s, 0, 10)

    def clarity_score(self, word_count: int, sentence_count: int, filler_count: int) -> float:
        c = 7
        avg_sentence_length = word_count / max(1, sentence_count)
        if 10 <= avg_sentence_length <= 30:
            c += 2
        elif avg_sentence_length < 10:
            c += 1
        if filler_count == 0:
            c += 1
        elif filler_count > 5:
            c -= 2
        return clamp(c, 0, 10)

    def _dimensions(self, answer_text: Optional[str], keywords: Tuple[str, ...], ideal_length: int) -> _Dimensions:
        answer = normalize(answer_text)
        word_count = len(tokenize(answer))
        sentence_count = len(split_sentences(answer))

        missing = tuple(k for k in keywords if k not in answer)
        matched = len(keywords) - len(missing)
        ratio = matched / len(keywords) if keywords else 0.0

        filler_count = count_phrases(answer, self.tables.filler_words)
        return _Dimensions(
            keyword_ratio=ratio,
            missing_keywords=missing,
            keyword_score=ratio * 10,
            length_score=length_score(word_count, ideal_length),
            structure_score=self.structure_score(answer, sentence_count),
            clarity_score=self.clarity_score(word_count, sentence_count, filler_count),
            word_count=word_count,
            sentence_count=sentence_count,
            filler_count=filler_count,
        )

    def score(self, answer_text: Optional[str], expected_keywords: Iterable[str], ideal_answer_length: int) -> Feedback:
        return self.score_rubric(
            answer_text,
            Rubric(expected_keywords=tuple(expected_keywords or ()), ideal_answer_length=ideal_answer_length),
        )

    def score_rubric(self, answer_text: Optional[str], rubric: Rubric) -> Feedback:
        ideal = rubric.ideal_answer_length
        d = self._dimensions(answer_text, rubric.expected_keywords, ideal)
        total = (
            d.keyword_score * WEIGHTS["keywords"]
            + d.length_score * WEIGHTS["length"]
            + d.structure_score * WEIGHTS["structure"]
            + d.clarity_score * WEIGHTS["clarity"]
        )
        logger.debug(
            "scored answer: words=%d sentences=%d fillers=%d keywords=%.2f length=%.2f structure=%.1f clarity=%.1f",
            d.word_count, d.sentence_count, d.filler_count,
            d.keyword_score, d.length_score, d.structure_score, d.clarity_score,
        )

        strengths, weaknesses, suggestions = build_feedback_lists(
            keyword_ratio=d.keyword_ratio,
            missing_keywords=d.missing_keywords,
            word_count=d.word_count,
            ideal_length=ideal,
            structure_score=d.structure_score,
            clarity_score=d.clarity_score,
            filler_count=d.filler_count,
        )
        return Feedback(
            score=round_half_up(clamp(total, 0, 10), 1),
            technical_accuracy=round_half_up(clamp(d.keyword_score, 0, 10), 1),
            clarity=round_half_up(d.clarity_score, 1),
            structure=round_half_up(d.structure_score, 1),
            strengths=tuple(strengths),
            weaknesses=tuple(weaknesses),
            suggestions=tuple(suggestions),
        )


_default_scorer = AnswerScorer()


def evaluate_answer(answer_text: Optional[str], rubric: Optional[Rubric] = None) -> Feedback:
    """Score with the default tables; no rubric means no keywords and an ideal length of 100."""
    return _default_scorer.score_rubric(answer_text, rubric or Rubric())
