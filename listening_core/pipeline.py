"""Single entry point that scores and diagnoses one listening attempt."""
from __future__ import annotations

from typing import Optional

from .alignment.aligner import align
from .alignment.confidence import DEFAULT_POLICY, ConfidencePolicy
from .alignment.ids import Hasher, stable_id
from .alignment.tokenizer import tokenize_words
from .diagnosis.explanations import operation_summary
from .diagnosis.summary import build_diagnostic_summary
from .errors import InputTooLongError, MissingTranscriptError
from .lexicon import DEFAULT_LEXICON, Lexicon
from .models.alignment import AlignmentStats
from .models.result import CheckAnswerResult, SemanticScore
from .phrases.spans import attach_phrase_spans
from .scoring.accuracy import accuracy_percent


def _check_size(field: str, size: int, limit: Optional[int]) -> None:
    if limit is not None and size > limit:
        raise InputTooLongError(field, size, limit)


def check_answer(
    reference_text: Optional[str],
    attempt_text: Optional[str],
    *,
    skipped: bool = False,
    include_summary: bool = True,
    semantic: Optional[SemanticScore] = None,
    max_tokens: Optional[int] = None,
    policy: ConfidencePolicy = DEFAULT_POLICY,
    lexicon: Lexicon = DEFAULT_LEXICON,
    hasher: Hasher = stable_id,
) -> CheckAnswerResult:
    """Align, score and diagnose a learner's attempt at a transcript.

    Runs normalizer -> aligner -> phrase spans -> accuracy -> diagnostic.
    A skipped attempt, or one with no words, scores 0 with no tokens or events.

    Args:
        reference_text: The transcript that was played
        attempt_text: What the learner typed
        skipped: The learner gave up without answering
        include_summary: Build the diagnostic summary when there are errors
        semantic: Optional comprehension score from an external grader
        max_tokens: Reject inputs longer than this many words
        policy: Thresholds for the substitution gate
        lexicon: Word tables
        hasher: Id function for tokens, events and spans

    Returns:
        CheckAnswerResult

    Raises:
        MissingTranscriptError: Reference is empty or has no words
        InputTooLongError: Either text exceeds ``max_tokens``
    """
    if not reference_text or not reference_text.strip():
        raise MissingTranscriptError("reference transcript is empty")
    ref_tokens = tokenize_words(reference_text)
    if not ref_tokens:
        raise MissingTranscriptError("reference transcript has no words")
    user_tokens = tokenize_words(attempt_text)
    _check_size("reference", len(ref_tokens), max_tokens)
    _check_size("attempt", len(user_tokens), max_tokens)

    if skipped or not user_tokens:
        return CheckAnswerResult(
            ref_tokens=ref_tokens,
            user_tokens=[],
            tokens=[],
            events=[],
            stats=AlignmentStats(),
            accuracy_percent=0,
            skipped=True,
            semantic=semantic,
        )

    result = align(reference_text, attempt_text, policy=policy, lexicon=lexicon, hasher=hasher)
    result = attach_phrase_spans(result, lexicon=lexicon, hasher=hasher)

    diagnostic = None
    if include_summary and result.events:
        diagnostic = build_diagnostic_summary(result, lexicon=lexicon)

    return CheckAnswerResult(
        ref_tokens=result.ref_tokens,
        user_tokens=result.user_tokens,
        tokens=result.tokens,
        events=result.events,
        stats=result.stats,
        accuracy_percent=accuracy_percent(result.stats),
        diagnostic=diagnostic,
        semantic=semantic,
        operation_summary=operation_summary(result.stats),
    )
