"""Alignment utilities for matching a learner attempt to a reference transcript."""
from .aligner import align, build_result
from .confidence import (
    DEFAULT_POLICY,
    ConfidencePolicy,
    ReplacementDecision,
    compute_string_similarity,
    evaluate_replacement,
    is_known_reduced_form,
)
from .edit_distance import align_sequences, edit_distance
from .ids import stable_id
from .normalizer import expand_contraction, is_contraction, normalize, normalize_text
from .tokenizer import Token, tokenize, tokenize_words

__all__ = [
    "DEFAULT_POLICY",
    "ConfidencePolicy",
    "ReplacementDecision",
    "Token",
    "align",
    "align_sequences",
    "build_result",
    "compute_string_similarity",
    "edit_distance",
    "evaluate_replacement",
    "expand_contraction",
    "is_contraction",
    "is_known_reduced_form",
    "normalize",
    "normalize_text",
    "stable_id",
    "tokenize",
    "tokenize_words",
]
