"""Ranking of perceptual causes."""
from __future__ import annotations

from typing import Dict, List, Mapping, Tuple

from ..models.diagnostic import ErrorCause, RankedCause

# sound and reduction causes first, plain misses last
CAUSE_PRIORITY: Tuple[ErrorCause, ...] = (
    ErrorCause.WORD_REDUCTION,
    ErrorCause.VOWEL_REDUCTION,
    ErrorCause.CONNECTED_SPEECH,
    ErrorCause.FUNCTION_WORD_DROP,
    ErrorCause.BOUNDARY_MISALIGNMENT,
    ErrorCause.CONTENT_WORD_MISS,
)


def rank_causes(
    counts: Mapping[ErrorCause, int], priority: Tuple[ErrorCause, ...] = CAUSE_PRIORITY
) -> List[RankedCause]:
    """Sort causes by count, highest first; equal counts follow ``priority``."""
    order: Dict[ErrorCause, int] = {cause: i for i, cause in enumerate(priority)}
    ranked = sorted(
        ((cause, count) for cause, count in counts.items() if count > 0),
        key=lambda item: (-item[1], order.get(item[0], len(order))),
    )
    return [RankedCause(cause=cause, count=count) for cause, count in ranked]
