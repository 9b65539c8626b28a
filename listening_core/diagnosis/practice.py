"""Practice phrase extraction from error spans."""
from __future__ import annotations

import re
from typing import List, Sequence, Tuple

from ..models.alignment import MISSING, SUBSTITUTION, AlignmentEvent

MIN_PHRASE_TOKENS = 2
MAX_PHRASE_TOKENS = 5
MAX_PHRASES = 5


def phrase_window(
    ref_tokens: Sequence[str],
    start: int,
    end: int,
    min_len: int = MIN_PHRASE_TOKENS,
    max_len: int = MAX_PHRASE_TOKENS,
) -> str:
    """Reference text around ``start..end`` widened by one word on each side.

    Short windows grow outward to ``min_len`` words where the sentence
    allows; long ones are cut to ``max_len`` words centered on the error.
    """
    n = len(ref_tokens)
    if n == 0:
        return ""
    lo = max(0, start - 1)
    hi = min(n - 1, end + 1)
    while hi - lo + 1 < min_len and (lo > 0 or hi < n - 1):
        if lo > 0:
            lo -= 1
        if hi - lo + 1 < min_len and hi < n - 1:
            hi += 1
    if hi - lo + 1 > max_len:
        center = (start + end) // 2
        lo = max(0, center - max_len // 2)
        hi = lo + max_len - 1
        if hi > n - 1:
            hi = n - 1
            lo = hi - max_len + 1
    return " ".join(ref_tokens[lo:hi + 1])


def _contains(longer: str, shorter: str) -> bool:
    return re.search(r"(?<!\S)" + re.escape(shorter) + r"(?!\S)", longer) is not None


def deduplicate_phrases(phrases: Sequence[str]) -> List[str]:
    """Drop phrases contained in another (on word boundaries), keeping the shorter."""
    kept: List[str] = []
    for phrase in phrases:
        candidate = phrase.strip()
        if not candidate:
            continue
        if any(_contains(candidate, existing) for existing in kept):
            continue
        # the candidate replaces every kept phrase containing it, at the first one's slot
        overlapping = [i for i, existing in enumerate(kept) if _contains(existing, candidate)]
        if overlapping:
            kept[overlapping[0]] = candidate
            kept = [p for i, p in enumerate(kept) if i not in overlapping[1:]]
        else:
            kept.append(candidate)
    return kept


def _error_spans(events: Sequence[AlignmentEvent]) -> List[Tuple[int, int]]:
    hinted: List[Tuple[int, int]] = []
    for event in events:
        hint = event.phrase_hint
        if hint is not None:
            span = (hint.span_ref_start, hint.span_ref_end)
            if span not in hinted:
                hinted.append(span)

    single: List[Tuple[int, int]] = []
    for event in sorted(events, key=lambda e: (e.ref_start, e.ref_end)):
        if event.type not in (MISSING, SUBSTITUTION):
            continue
        covered = any(s <= event.ref_start and event.ref_end <= e for s, e in hinted)
        span = (event.ref_start, event.ref_end)
        if not covered and span not in single:
            single.append(span)

    spans = hinted + single
    if not spans:
        # only extra words: fall back to their anchors
        spans = list(dict.fromkeys((e.ref_start, e.ref_end) for e in events))
    return spans


def extract_practice_phrases(
    ref_tokens: Sequence[str],
    events: Sequence[AlignmentEvent],
    max_phrases: int = MAX_PHRASES,
) -> List[str]:
    """Short reference phrases to replay, phrase hints first.

    Returns at least one phrase whenever there is at least one event.
    """
    if not events or not ref_tokens:
        return []
    phrases = [phrase_window(ref_tokens, start, end) for start, end in _error_spans(events)]
    return deduplicate_phrases(phrases)[:max_phrases]
