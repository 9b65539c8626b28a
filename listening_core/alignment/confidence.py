"""Confidence gate deciding whether a replacement is a real substitution."""
from __future__ import annotations

from dataclasses import dataclass

from ..lexicon import DEFAULT_LEXICON, Lexicon
from .edit_distance import edit_distance

HIGH_SIMILARITY = "high_similarity"
KNOWN_REDUCTION = "known_reduction"
LOW_CONFIDENCE = "low_confidence"


@dataclass(frozen=True)
class ConfidencePolicy:
    """Thresholds for the substitution gate.

    Attributes:
        substitution_threshold: Minimum character similarity kept as a substitution
        known_reduction_confidence: Confidence reported for a known reduced form
    """
    substitution_threshold: float = 0.55
    known_reduction_confidence: float = 0.8


DEFAULT_POLICY = ConfidencePolicy()


@dataclass(frozen=True)
class ReplacementDecision:
    is_substitution: bool
    confidence: float
    reason: str  # "high_similarity" | "known_reduction" | "low_confidence"


def compute_string_similarity(a: str, b: str) -> float:
    """1 - levenshtein / max length, case-insensitive, in [0, 1]."""
    a, b = a.lower(), b.lower()
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    return 1 - edit_distance(a, b) / max(len(a), len(b))


def is_known_reduced_form(expected: str, actual: str, lexicon: Lexicon = DEFAULT_LEXICON) -> bool:
    """True when one side is a listed reduction of the other, in either direction.

    Casual reductions match on the head word ("going" ~ "gonna"), contracted
    phrases need the whole phrase ("i am" ~ "i'm").
    """
    e = expected.lower().strip()
    a = actual.lower().strip()
    for full, reduced in lexicon.casual_reductions.items():
        head = full.split()[0]
        if (head in e and a == reduced) or (head in a and e == reduced):
            return True
    for full, reduced in lexicon.contracted_phrases.items():
        if (full in e and a == reduced) or (full in a and e == reduced):
            return True
    return False


def evaluate_replacement(
    expected: str,
    actual: str,
    policy: ConfidencePolicy = DEFAULT_POLICY,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> ReplacementDecision:
    """Decide whether ``expected`` heard as ``actual`` is kept as a substitution.

    Similarity at or above the threshold always keeps it. Below the threshold a
    known reduction keeps it; anything else should be split into a missing
    word plus an extra word by the caller.
    """
    similarity = compute_string_similarity(expected, actual)
    if similarity >= policy.substitution_threshold:
        return ReplacementDecision(True, similarity, HIGH_SIMILARITY)
    if is_known_reduced_form(expected, actual, lexicon):
        return ReplacementDecision(True, policy.known_reduction_confidence, KNOWN_REDUCTION)
    return ReplacementDecision(False, similarity, LOW_CONFIDENCE)
