"""Listening practice engine.

Aligns a learner's typed attempt with the transcript of a clip, scores it,
groups errors into phrases and explains which perceptual causes made the
sentence hard to hear.
"""
from .alignment import (
    ConfidencePolicy,
    align,
    evaluate_replacement,
    expand_contraction,
    is_contraction,
    normalize,
    tokenize,
)
from .diagnosis import analyze_errors, build_diagnostic_summary, classify_error, rank_causes
from .errors import (
    AlignmentIntegrityError,
    CoachServiceError,
    InputTooLongError,
    ListeningCoreError,
    MissingTranscriptError,
)
from .lexicon import DEFAULT_LEXICON, Lexicon
from .models import CheckAnswerResult, ErrorCause, SemanticScore
from .phrases import attach_phrase_spans
from .pipeline import check_answer

__version__ = "0.1.0"

__all__ = [
    "AlignmentIntegrityError",
    "CheckAnswerResult",
    "CoachServiceError",
    "ConfidencePolicy",
    "DEFAULT_LEXICON",
    "ErrorCause",
    "InputTooLongError",
    "Lexicon",
    "ListeningCoreError",
    "MissingTranscriptError",
    "SemanticScore",
    "align",
    "analyze_errors",
    "attach_phrase_spans",
    "build_diagnostic_summary",
    "check_answer",
    "classify_error",
    "evaluate_replacement",
    "expand_contraction",
    "is_contraction",
    "normalize",
    "rank_causes",
    "tokenize",
]
