"""Perceptual classification of alignment errors."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ..alignment.confidence import is_known_reduced_form
from ..lexicon import DEFAULT_LEXICON, Lexicon
from ..models.alignment import CORRECT, EXTRA, MISSING, SUBSTITUTION, AlignmentToken
from ..models.diagnostic import ErrorCause


@dataclass(frozen=True)
class ClassifiedError:
    """A non-correct token with the causes assigned to it."""
    position: int
    token: AlignmentToken
    causes: List[ErrorCause]


def is_reduction_pair(expected: str, actual: str, lexicon: Lexicon = DEFAULT_LEXICON) -> bool:
    """Heard the reduced form of the expected words, or the expected word is itself reduced."""
    expected = expected.lower()
    actual = actual.lower()
    reduced_forms = lexicon.reduced_forms
    if reduced_forms.get(expected) == actual or reduced_forms.get(actual) == expected:
        return True
    if is_known_reduced_form(expected, actual, lexicon):
        return True
    return expected in lexicon.reduced_words


def sounds_similar(word1: str, word2: str, lexicon: Lexicon = DEFAULT_LEXICON) -> bool:
    w1 = word1.lower()
    w2 = word2.lower()
    if w1 and w2 and w1[0] == w2[0] and abs(len(w1) - len(w2)) <= 2:
        return True
    return any(w1 in group and w2 in group for group in lexicon.sound_alike_groups)


def classify_error(
    token: AlignmentToken,
    prev_token: Optional[AlignmentToken] = None,
    next_token: Optional[AlignmentToken] = None,
    *,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> List[ErrorCause]:
    """Tag one token with every perceptual cause whose rule fires.

    Args:
        token: The token to classify
        prev_token: Token before it in alignment order, if any
        next_token: Token after it in alignment order, if any
        lexicon: Word tables

    Returns:
        Causes in rule order; empty for correct tokens
    """
    if token.type == CORRECT:
        return []

    causes: List[ErrorCause] = []

    if token.type == MISSING:
        expected = (token.expected or "").lower()
        function_word = lexicon.is_function_word(expected)
        contraction = lexicon.is_contraction(expected)
        if function_word:
            causes.append(ErrorCause.FUNCTION_WORD_DROP)
        if contraction or expected in lexicon.reduced_words:
            causes.append(ErrorCause.WORD_REDUCTION)
        if not function_word and not contraction:
            causes.append(ErrorCause.CONTENT_WORD_MISS)
        if prev_token is not None and next_token is not None:
            causes.append(ErrorCause.CONNECTED_SPEECH)

    elif token.type == SUBSTITUTION:
        expected = (token.expected or "").lower()
        actual = (token.actual or "").lower()
        if is_reduction_pair(expected, actual, lexicon):
            causes.append(ErrorCause.WORD_REDUCTION)
        if sounds_similar(expected, actual, lexicon):
            causes.append(ErrorCause.VOWEL_REDUCTION)
        causes.append(ErrorCause.BOUNDARY_MISALIGNMENT)

    elif token.type == EXTRA:
        causes.append(ErrorCause.BOUNDARY_MISALIGNMENT)

    if not causes:
        causes.append(ErrorCause.CONNECTED_SPEECH)
    return causes


def classify_tokens(
    tokens: Sequence[AlignmentToken], *, lexicon: Lexicon = DEFAULT_LEXICON
) -> List[ClassifiedError]:
    classified = []
    for i, token in enumerate(tokens):
        if token.type == CORRECT:
            continue
        prev_token = tokens[i - 1] if i > 0 else None
        next_token = tokens[i + 1] if i < len(tokens) - 1 else None
        causes = classify_error(token, prev_token, next_token, lexicon=lexicon)
        classified.append(ClassifiedError(position=i, token=token, causes=causes))
    return classified


def count_causes(classified: Sequence[ClassifiedError]) -> Dict[ErrorCause, int]:
    counts: Counter = Counter()
    for item in classified:
        counts.update(item.causes)
    return dict(counts)


def analyze_errors(
    tokens: Sequence[AlignmentToken], *, lexicon: Lexicon = DEFAULT_LEXICON
) -> Dict[ErrorCause, int]:
    """How many non-correct tokens carry each cause."""
    return count_causes(classify_tokens(tokens, lexicon=lexicon))
