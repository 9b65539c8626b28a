"""Data models for alignment results and diagnostics."""
from .alignment import (
    CORRECT,
    EXTRA,
    MISSING,
    NOT_HEARD,
    SUBSTITUTION,
    AlignmentEvent,
    AlignmentResult,
    AlignmentStats,
    AlignmentToken,
    EventContext,
    PhraseHint,
)
from .diagnostic import DiagnosticSummary, ErrorCause, RankedCause
from .result import CheckAnswerResult, SemanticScore

__all__ = [
    "CORRECT",
    "EXTRA",
    "MISSING",
    "NOT_HEARD",
    "SUBSTITUTION",
    "AlignmentEvent",
    "AlignmentResult",
    "AlignmentStats",
    "AlignmentToken",
    "CheckAnswerResult",
    "DiagnosticSummary",
    "ErrorCause",
    "EventContext",
    "PhraseHint",
    "RankedCause",
    "SemanticScore",
]
