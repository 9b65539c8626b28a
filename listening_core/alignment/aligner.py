"""Align a learner attempt to a reference transcript."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..errors import AlignmentIntegrityError, MissingTranscriptError
from ..lexicon import DEFAULT_LEXICON, Lexicon
from ..models.alignment import (
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
)
from .confidence import DEFAULT_POLICY, ConfidencePolicy
from .edit_distance import align_sequences
from .ids import Hasher, stable_id
from .operations import AlignmentStep, apply_confidence, reconcile_reductions, steps_from_path
from .tokenizer import tokenize_words

CONTEXT_WINDOW = 3


def _check_index(index: Optional[int], size: int, label: str, step: AlignmentStep) -> int:
    if index is None or not 0 <= index < size:
        raise AlignmentIntegrityError(f"{label} index {index!r} out of range 0..{size - 1} in {step}")
    return index


def guess_anchor(steps: Sequence[AlignmentStep], k: int, ref_size: int) -> int:
    """Reference index of the nearest step with one, scanning backward then forward."""
    anchor = 0
    for i in range(k, -1, -1):
        if steps[i].ref_index is not None:
            anchor = steps[i].ref_last
            break
    else:
        for i in range(k, len(steps)):
            if steps[i].ref_index is not None:
                anchor = steps[i].ref_index
                break
    return max(0, min(ref_size - 1, anchor))


def _context(ref_tokens: List[str], start: int, end: int, full_ref: str, full_user: str) -> EventContext:
    return EventContext(
        before=" ".join(ref_tokens[max(0, start - CONTEXT_WINDOW):start]),
        after=" ".join(ref_tokens[end + 1:end + 1 + CONTEXT_WINDOW]),
        full_ref=full_ref,
        full_user=full_user,
    )


def build_result(
    ref_tokens: List[str],
    user_tokens: List[str],
    steps: Sequence[AlignmentStep],
    hasher: Hasher = stable_id,
) -> AlignmentResult:
    """Render alignment steps into tokens, events and stats.

    Raises:
        AlignmentIntegrityError: A step points outside either token sequence
    """
    n, m = len(ref_tokens), len(user_tokens)
    full_ref = " ".join(ref_tokens)
    full_user = " ".join(user_tokens)
    tokens: List[AlignmentToken] = []
    events: List[AlignmentEvent] = []

    for k, step in enumerate(steps):
        if step.op == "match":
            r = _check_index(step.ref_index, n, "reference", step)
            u = _check_index(step.user_index, m, "attempt", step)
            word = ref_tokens[r]
            tokens.append(AlignmentToken(
                id=hasher({"t": "c", "r": r, "u": u, "w": word}),
                type=CORRECT,
                ref_index=r,
                user_index=u,
                expected=word,
                actual=user_tokens[u],
            ))

        elif step.op == "sub":
            r = _check_index(step.ref_index, n, "reference", step)
            u = _check_index(step.user_index, m, "attempt", step)
            r_end = _check_index(step.ref_last, n, "reference", step)
            u_end = _check_index(step.user_last, m, "attempt", step)
            expected = " ".join(ref_tokens[r:r_end + 1])
            actual = " ".join(user_tokens[u:u_end + 1])
            fields: Dict[str, Any] = {"r": r, "u": u, "e": expected, "a": actual}
            if r_end != r or u_end != u:
                fields.update({"re": r_end, "ue": u_end})
            tokens.append(AlignmentToken(
                id=hasher({"t": "s", **fields}),
                type=SUBSTITUTION,
                ref_index=r,
                user_index=u,
                expected=expected,
                actual=actual,
            ))
            events.append(AlignmentEvent(
                event_id=hasher({"event": "sub", **fields}),
                type=SUBSTITUTION,
                ref_start=r,
                ref_end=r_end,
                user_start=u,
                user_end=u_end,
                expected_span=expected,
                actual_span=actual,
                context=_context(ref_tokens, r, r_end, full_ref, full_user),
            ))

        elif step.op == "del":
            r = _check_index(step.ref_index, n, "reference", step)
            expected = ref_tokens[r]
            tokens.append(AlignmentToken(
                id=hasher({"t": "m", "r": r, "e": expected}),
                type=MISSING,
                ref_index=r,
                expected=expected,
            ))
            events.append(AlignmentEvent(
                event_id=hasher({"event": "miss", "r": r, "e": expected}),
                type=MISSING,
                ref_start=r,
                ref_end=r,
                expected_span=expected,
                actual_span=NOT_HEARD,
                context=_context(ref_tokens, r, r, full_ref, full_user),
            ))

        elif step.op == "ins":
            u = _check_index(step.user_index, m, "attempt", step)
            actual = user_tokens[u]
            anchor = guess_anchor(steps, k, n)
            tokens.append(AlignmentToken(
                id=hasher({"t": "x", "u": u, "a": actual}),
                type=EXTRA,
                user_index=u,
                actual=actual,
            ))
            events.append(AlignmentEvent(
                event_id=hasher({"event": "extra", "u": u, "a": actual, "ar": anchor}),
                type=EXTRA,
                ref_start=anchor,
                ref_end=anchor,
                user_start=u,
                user_end=u,
                expected_span=ref_tokens[anchor],
                actual_span=actual,
                context=_context(ref_tokens, anchor, anchor, full_ref, full_user),
            ))

        else:
            raise AlignmentIntegrityError(f"unknown operation {step.op!r}")

    stats = AlignmentStats(
        correct=sum(1 for t in tokens if t.type == CORRECT),
        substitutions=sum(1 for t in tokens if t.type == SUBSTITUTION),
        missing=sum(1 for t in tokens if t.type == MISSING),
        extra=sum(1 for t in tokens if t.type == EXTRA),
    )
    return AlignmentResult(
        ref_tokens=list(ref_tokens),
        user_tokens=list(user_tokens),
        tokens=tokens,
        events=events,
        stats=stats,
    )


def align(
    reference_text: str,
    attempt_text: Optional[str],
    *,
    policy: ConfidencePolicy = DEFAULT_POLICY,
    lexicon: Lexicon = DEFAULT_LEXICON,
    hasher: Hasher = stable_id,
    adjust_confidence: bool = True,
) -> AlignmentResult:
    """Align an attempt to a reference transcript at the word level.

    Both texts are normalized and tokenized, aligned with the edit-distance
    DP, and (by default) known reductions are reconciled and low-confidence
    substitutions are split into a missing and an extra word.

    Args:
        reference_text: The transcript the learner heard
        attempt_text: What the learner typed (may be empty)
        policy: Thresholds for the substitution gate
        lexicon: Word tables for reductions
        hasher: Pure function turning a dict of fields into an id
        adjust_confidence: Set False to get the raw DP path

    Returns:
        AlignmentResult with one token per step and one event per non-correct token

    Raises:
        MissingTranscriptError: Reference is empty or has no words
    """
    if not reference_text or not reference_text.strip():
        raise MissingTranscriptError("reference transcript is empty")
    ref_tokens = tokenize_words(reference_text)
    if not ref_tokens:
        raise MissingTranscriptError("reference transcript has no words")
    user_tokens = tokenize_words(attempt_text)

    steps = steps_from_path(align_sequences(ref_tokens, user_tokens))
    if adjust_confidence:
        steps = reconcile_reductions(steps, ref_tokens, user_tokens, lexicon=lexicon)
        steps = apply_confidence(steps, ref_tokens, user_tokens, policy=policy, lexicon=lexicon)
    return build_result(ref_tokens, user_tokens, steps, hasher=hasher)
