"""Data model for a scored listening attempt."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .alignment import AlignmentEvent, AlignmentStats, AlignmentToken
from .diagnostic import DiagnosticSummary


@dataclass(frozen=True)
class SemanticScore:
    """Comprehension score computed outside the engine.

    Attributes:
        score: Either a 0-1 fraction or a 0-100 percentage
        missing_keywords: Keywords the grader could not find in the attempt
    """
    score: float
    missing_keywords: List[str] = field(default_factory=list)

    @property
    def percent(self) -> int:
        value = self.score * 100 if self.score <= 1 else self.score
        return int(max(0.0, min(100.0, value)) + 0.5)

    def to_dict(self) -> Dict[str, Any]:
        return {"scorePercent": self.percent, "missingKeywords": list(self.missing_keywords)}


@dataclass(frozen=True)
class CheckAnswerResult:
    ref_tokens: List[str]
    user_tokens: List[str]
    tokens: List[AlignmentToken]
    events: List[AlignmentEvent]
    stats: AlignmentStats
    accuracy_percent: int
    skipped: bool = False
    diagnostic: Optional[DiagnosticSummary] = None
    semantic: Optional[SemanticScore] = None
    operation_summary: Optional[str] = None

    @property
    def score_percent(self) -> int:
        if self.semantic is not None:
            return self.semantic.percent
        return self.accuracy_percent

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "refTokens": list(self.ref_tokens),
            "userTokens": list(self.user_tokens),
            "tokens": [t.to_dict() for t in self.tokens],
            "events": [e.to_dict() for e in self.events],
            "stats": self.stats.to_dict(),
            "accuracyPercent": self.accuracy_percent,
            "scorePercent": self.score_percent,
            "skipped": self.skipped,
        }
        if self.diagnostic is not None:
            data["diagnostic"] = self.diagnostic.to_dict()
        if self.semantic is not None:
            data["semantic"] = self.semantic.to_dict()
        if self.operation_summary is not None:
            data["operationSummary"] = self.operation_summary
        return data
