"""Deterministic coaching text for an alignment event."""
from __future__ import annotations

from ..alignment.confidence import is_known_reduced_form
from ..diagnosis.explanations import listening_explanation
from ..lexicon import DEFAULT_LEXICON, Lexicon
from ..models.alignment import EXTRA, MISSING, NOT_HEARD, AlignmentEvent
from .insight import CoachingInsight, ReplayTarget


def replay_target(event: AlignmentEvent) -> ReplayTarget:
    """The phrase hint if the event has one, else the event's own span."""
    hint = event.phrase_hint
    if hint is not None:
        return ReplayTarget(text=hint.span_text, ref_start=hint.span_ref_start, ref_end=hint.span_ref_end)
    return ReplayTarget(text=event.expected_span, ref_start=event.ref_start, ref_end=event.ref_end)


def build_fallback_insight(event: AlignmentEvent, lexicon: Lexicon = DEFAULT_LEXICON) -> CoachingInsight:
    """Always-available insight built only from the event itself."""
    replay = replay_target(event)
    heard = event.actual_span or NOT_HEARD
    was = replay.text or event.expected_span or heard

    if event.type == MISSING:
        return CoachingInsight(
            title="That part can disappear",
            what_you_might_have_heard=heard,
            what_it_was=was,
            why_this_happens_here=f'In this sentence, "{was}" sits between other words, so it can blend in and be easy to miss.',
            try_this=f'Replay "{was}" and listen for it as one small piece, not word-by-word.',
            replay_target=replay,
            reason_type="short_word_got_swallowed",
        )
    if event.type == EXTRA:
        return CoachingInsight(
            title="Your ear may have filled a gap",
            what_you_might_have_heard=heard,
            what_it_was=was,
            why_this_happens_here="When the sentence flows, it can feel like there's an extra word in the middle, even if it wasn't said.",
            try_this=f'Replay "{was}" and focus on the flow into the next words.',
            replay_target=replay,
            reason_type="brain_autofill",
        )
    if is_known_reduced_form(event.expected_span, heard, lexicon):
        return CoachingInsight(
            title="A casual form of the same words",
            what_you_might_have_heard=heard,
            what_it_was=was,
            why_this_happens_here=listening_explanation(event.expected_span, heard, event.type, lexicon),
            try_this=f'Replay "{was}" and notice how the words shrink together.',
            replay_target=replay,
            reason_type="common_casual_form",
        )
    return CoachingInsight(
        title="Two parts can sound close",
        what_you_might_have_heard=heard,
        what_it_was=was,
        why_this_happens_here="In this spot, the surrounding words make this part easy to confuse with something that sounds close.",
        try_this=f'Replay "{was}" and listen for how it connects to the words around it.',
        replay_target=replay,
        reason_type="sounds_like",
    )
