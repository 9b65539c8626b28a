"""Data model for perceptual error causes and the diagnostic summary."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCause(str, Enum):
    """Why a word was hard to hear."""
    CONNECTED_SPEECH = "CONNECTED_SPEECH"
    WORD_REDUCTION = "WORD_REDUCTION"
    FUNCTION_WORD_DROP = "FUNCTION_WORD_DROP"
    VOWEL_REDUCTION = "VOWEL_REDUCTION"
    BOUNDARY_MISALIGNMENT = "BOUNDARY_MISALIGNMENT"
    CONTENT_WORD_MISS = "CONTENT_WORD_MISS"


@dataclass(frozen=True)
class RankedCause:
    cause: ErrorCause
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"cause": self.cause.value, "count": self.count}


@dataclass(frozen=True)
class DiagnosticSummary:
    """Coaching summary for one attempt.

    Attributes:
        primary_cause: Highest ranked cause
        secondary_cause: Runner-up, only when it has at least two supporting errors
        summary: One or two sentence description of the pattern
        what_happened: Sentence quoting up to two literal examples
        why_hard: Why this kind of error happens in natural speech
        examples: Quoted example spans used in ``what_happened``
        practice_phrases: Short reference windows to replay
        cause_counts: All causes in rank order
    """
    primary_cause: ErrorCause
    summary: str
    what_happened: str
    why_hard: str
    secondary_cause: Optional[ErrorCause] = None
    examples: List[str] = field(default_factory=list)
    practice_phrases: List[str] = field(default_factory=list)
    cause_counts: List[RankedCause] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "primaryCause": self.primary_cause.value,
            "summary": self.summary,
            "whatHappened": self.what_happened,
            "whyHard": self.why_hard,
            "examples": list(self.examples),
            "practicePhrases": list(self.practice_phrases),
            "causeCounts": [c.to_dict() for c in self.cause_counts],
        }
        if self.secondary_cause is not None:
            data["secondaryCause"] = self.secondary_cause.value
        return data
