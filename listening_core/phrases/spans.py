"""Group nearby alignment errors into phrase-level hints."""
from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from ..alignment.ids import Hasher, stable_id
from ..lexicon import DEFAULT_LEXICON, Lexicon
from ..models.alignment import CORRECT, AlignmentResult, AlignmentToken, PhraseHint

# events separated by at most this many correct tokens share a span
MAX_GAP = 1
SPAN_ID_PREFIX = "sp_"
SPAN_ID_LENGTH = 10


def cluster_events(tokens: Sequence[AlignmentToken], max_gap: int = MAX_GAP) -> List[List[int]]:
    """Group events separated by at most ``max_gap`` correct tokens.

    Walks the alignment token stream, where the n-th non-correct token
    produced the n-th event, so an extra word anchored on a correct token
    still counts that token as a gap. Grouping is transitive: a chain of
    close events forms one cluster. Returns lists of event positions.
    """
    clusters: List[List[int]] = []
    gap = None
    event_index = 0
    for token in tokens:
        if token.type == CORRECT:
            if gap is not None:
                gap += 1
            continue
        if gap is not None and gap <= max_gap:
            clusters[-1].append(event_index)
        else:
            clusters.append([event_index])
        gap = 0
        event_index += 1
    return clusters


def _match_pattern_at(ref_tokens: Sequence[str], start: int, pattern: Tuple[str, ...]) -> bool:
    if start + len(pattern) > len(ref_tokens):
        return False
    return tuple(ref_tokens[start:start + len(pattern)]) == pattern


def find_pattern_span(
    ref_tokens: Sequence[str], ref_index: int, lexicon: Lexicon = DEFAULT_LEXICON
) -> Optional[Tuple[int, int]]:
    """(start, end) of the first curated phrase pattern covering ``ref_index``."""
    for pattern in lexicon.phrase_patterns:
        for start in range(max(0, ref_index - (len(pattern) - 1)), ref_index + 1):
            if _match_pattern_at(ref_tokens, start, pattern):
                return start, start + len(pattern) - 1
    return None


def span_id(start: int, end: int, text: str, hasher: Hasher = stable_id) -> str:
    return SPAN_ID_PREFIX + hasher({"span": f"{start}:{end}:{text}"})[:SPAN_ID_LENGTH]


def attach_phrase_spans(
    result: AlignmentResult,
    *,
    lexicon: Lexicon = DEFAULT_LEXICON,
    hasher: Hasher = stable_id,
) -> AlignmentResult:
    """Return a copy of ``result`` with phrase hints on events and span ids on tokens.

    A cluster of two or more close events covering at least two reference
    tokens becomes one hint shared by all its events. An event left without a
    hint gets the span of a curated phrase pattern it falls inside, if any.
    """
    ref_tokens = result.ref_tokens
    events = result.events
    hints: Dict[int, PhraseHint] = {}

    for cluster in cluster_events(result.tokens):
        start = min(events[i].ref_start for i in cluster)
        end = max(events[i].ref_end for i in cluster)
        if len(cluster) >= 2 and end > start:
            hint = PhraseHint(" ".join(ref_tokens[start:end + 1]), start, end)
            for i in cluster:
                hints[i] = hint

    for i, event in enumerate(events):
        if i in hints:
            continue
        found = find_pattern_span(ref_tokens, event.ref_start, lexicon)
        if found is not None:
            start, end = found
            hints[i] = PhraseHint(" ".join(ref_tokens[start:end + 1]), start, end)

    new_events = [replace(e, phrase_hint=hints.get(i, e.phrase_hint)) for i, e in enumerate(events)]

    spans = sorted({(h.span_ref_start, h.span_ref_end, h.span_text) for h in hints.values()})
    new_tokens = []
    for token in result.tokens:
        sid = token.span_id
        if token.ref_index is not None:
            for start, end, text in spans:
                if start <= token.ref_index <= end:
                    sid = span_id(start, end, text, hasher)
                    break
        new_tokens.append(replace(token, span_id=sid) if sid != token.span_id else token)

    return replace(result, events=new_events, tokens=new_tokens)
