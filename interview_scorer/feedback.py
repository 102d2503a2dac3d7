from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

STRENGTHS_HEADER = "✅ Strengths"
WEAKNESSES_HEADER = "⚙️ Areas to Improve"
SUGGESTIONS_HEADER = "💡 Suggestions"


@dataclass(frozen=True)
class Feedback:
    score: float
    technical_accuracy: float
    clarity: float
    structure: float
    strengths: Tuple[str, ...] = field(default_factory=tuple)
    weaknesses: Tuple[str, ...] = field(default_factory=tuple)
    suggestions: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Shape stored as ``ai_feedback`` next to the answer."""
        return {
            "score": self.score,
            "technical_accuracy": self.technical_accuracy,
            "clarity": self.clarity,
            "structure": self.structure,
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "suggestions": list(self.suggestions),
        }


def build_feedback_lists(
    keyword_ratio: float,
    missing_keywords: Sequence[str],
    word_count: int,
    ideal_length: int,
    structure_score: float,
    clarity_score: float,
    filler_count: int,
) -> Tuple[List[str], List[str], List[str]]:
    """Apply the threshold rules in order; every rule is checked independently."""
    strengths: List[str] = []
    weaknesses: List[str] = []
    suggestions: List[str] = []

    # keyword coverage
    if keyword_ratio >= 0.7:
        strengths.append("Covered most of the key technical concepts")
    if 0.4 <= keyword_ratio < 0.7:
        weaknesses.append("Some important concepts were missing")
        if 1 <= len(missing_keywords) <= 3:
            suggestions.append("Consider discussing: " + ", ".join(missing_keywords[:3]))
    if keyword_ratio < 0.4:
        weaknesses.append("Many key concepts were not addressed")
        suggestions.append("Review the fundamental concepts related to this topic")

    # length
    if word_count < ideal_length * 0.5:
        weaknesses.append("Answer was too brief")
        suggestions.append("Provide more detail and examples in your response")
    if ideal_length * 0.8 <= word_count <= ideal_length * 1.5:
        strengths.append("Good answer length with appropriate detail")
    if word_count > ideal_length * 2:
        weaknesses.append("Answer was longer than necessary")
        suggestions.append("Try to be more concise while covering key points")

    # structure
    if structure_score >= 8:
        strengths.append("Well-structured response with clear organization")
    if structure_score < 6:
        weaknesses.append("Answer could be better organized")
        suggestions.append(
            "Use a structured approach: introduce the concept, explain details, give examples"
        )

    # clarity
    if clarity_score >= 8:
        strengths.append("Clear and easy to understand explanation")
    if filler_count > 3:
        weaknesses.append("Too many filler words detected")
        suggestions.append("Practice speaking more directly without filler words")

    return strengths, weaknesses, suggestions


def render_feedback(feedback: Feedback) -> str:
    lines = [f"Score: {feedback.score}/10 "
             f"(technical {feedback.technical_accuracy}, clarity {feedback.clarity}, "
             f"structure {feedback.structure})"]
    for header, items in (
        (STRENGTHS_HEADER, feedback.strengths),
        (WEAKNESSES_HEADER, feedback.weaknesses),
        (SUGGESTIONS_HEADER, feedback.suggestions),
    ):
        lines.append(header)
        lines.extend(f"- {item}" for item in items)
    return "\n".join(lines)


def parse_feedback_sections(text: str) -> dict:
    blk = {"strengths": [], "areas_to_improve": [], "suggestions": []}
    cur = None
    for line in text.splitlines():
        l = line.strip()
        if l.startswith("✅"): cur = "strengths"
        elif l.startswith("⚙️"): cur = "areas_to_improve"
        elif l.startswith("💡"): cur = "suggestions"
        elif cur and l.startswith("- "): blk[cur].append(l[2:])
    return blk
