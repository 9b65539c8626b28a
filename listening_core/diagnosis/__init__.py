"""Perceptual diagnosis of listening errors."""
from .classifier import ClassifiedError, analyze_errors, classify_error, classify_tokens
from .explanations import listening_explanation, operation_summary
from .practice import extract_practice_phrases
from .ranking import CAUSE_PRIORITY, rank_causes
from .summary import build_diagnostic_summary

__all__ = [
    "CAUSE_PRIORITY",
    "ClassifiedError",
    "analyze_errors",
    "build_diagnostic_summary",
    "classify_error",
    "classify_tokens",
    "extract_practice_phrases",
    "listening_explanation",
    "operation_summary",
    "rank_causes",
]
