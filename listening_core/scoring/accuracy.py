"""Accuracy scores for a listening attempt."""
from __future__ import annotations

from ..models.alignment import AlignmentStats

TOKEN_OVERLAP_WEIGHT = 0.7
CHARACTER_WEIGHT = 0.3


def calculate_accuracy(stats: AlignmentStats) -> float:
    """correct / (correct + substitutions + missing); extra words do not count against."""
    denominator = stats.correct + stats.substitutions + stats.missing
    if denominator <= 0:
        return 0.0
    return stats.correct / denominator


def accuracy_percent(stats: AlignmentStats) -> int:
    # round half up
    return int(calculate_accuracy(stats) * 100 + 0.5)


def character_overlap_score(expected: str, user_input: str) -> float:
    """Legacy score: 70% word-set overlap plus 30% same-position character matches.

    Ignores word order and punctuation handling, so it undervalues attempts that
    use reduced forms. Kept for comparison with the alignment-based accuracy.
    """
    if not expected or not user_input:
        return 0.0
    e = expected.lower().strip()
    u = user_input.lower().strip()
    if e == u:
        return 1.0

    expected_tokens = e.split()
    user_tokens = u.split()
    if not expected_tokens or not user_tokens:
        return 0.0
    matches = len(set(user_tokens) & set(expected_tokens))
    token_overlap = matches / max(len(expected_tokens), len(user_tokens))

    char_matches = sum(1 for x, y in zip(e, u) if x == y)
    char_similarity = char_matches / max(len(e), len(u))

    score = token_overlap * TOKEN_OVERLAP_WEIGHT + char_similarity * CHARACTER_WEIGHT
    return max(0.0, min(1.0, score))
