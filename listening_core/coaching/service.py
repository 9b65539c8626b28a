"""Per-event coaching: deterministic text, optionally enriched by a language model."""
from __future__ import annotations

import logging
import warnings
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..errors import CoachServiceError
from ..lexicon import DEFAULT_LEXICON, Lexicon
from ..models.alignment import NOT_HEARD, AlignmentEvent
from .client import CoachClient
from .fallback import build_fallback_insight, replay_target
from .insight import CoachingInsight, CoachingResult, Deterministic, EnrichedByModel
from .prompts import COACH_EVENT_PROMPT_TEMPLATE, COACH_RETRY_NUDGE, COACH_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


def quotes_guess(parsed: Dict[str, Any], actual_span: str) -> bool:
    """The model repeated the learner's guess in what_you_might_have_heard."""
    heard = str(parsed.get("what_you_might_have_heard") or "")
    if not actual_span:
        return NOT_HEARD in heard
    return actual_span.lower() in heard.lower()


def build_prompts(event: AlignmentEvent, transcript: str, user_text: str) -> Dict[str, str]:
    actual_span = event.actual_span or NOT_HEARD
    replay = replay_target(event)
    user = COACH_EVENT_PROMPT_TEMPLATE.format(
        transcript=transcript,
        user_text=user_text,
        event_type=event.type,
        expected_span=event.expected_span,
        actual_span=actual_span,
        replay_text=replay.text,
        replay_start=replay.ref_start,
        replay_end=replay.ref_end,
        context_before=event.context.before,
        context_after=event.context.after,
    )
    return {"system": COACH_SYSTEM_PROMPT.format(actual_span=actual_span), "user": user}


def explain_event(
    event: AlignmentEvent,
    transcript: str,
    user_text: str,
    *,
    client: Optional[CoachClient] = None,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> CoachingResult:
    """Explain one alignment event to the learner.

    Without a client, or whenever the model output is unusable, the
    deterministic insight is returned. Model output must parse, validate and
    quote the learner's guess; one retry with a stronger nudge is allowed.

    Args:
        event: The event to explain
        transcript: The full reference transcript
        user_text: What the learner typed
        client: Optional model client
        lexicon: Word tables for the deterministic text

    Returns:
        Deterministic or EnrichedByModel
    """
    fallback = build_fallback_insight(event, lexicon)
    if client is None:
        return Deterministic(fallback)

    actual_span = event.actual_span or NOT_HEARD
    prompts = build_prompts(event, transcript, user_text)
    try:
        parsed = client.complete_json(prompts["system"], prompts["user"])
        if not quotes_guess(parsed, actual_span):
            nudge = COACH_RETRY_NUDGE.format(actual_span=actual_span)
            parsed = client.complete_json(prompts["system"], f"{prompts['user']}\n\n{nudge}")
    except CoachServiceError as e:
        warnings.warn(f"Coaching service failed, using deterministic insight: {e}")
        return Deterministic(fallback)

    if not quotes_guess(parsed, actual_span):
        logger.info("Model reply did not quote the learner's guess for event %s", event.event_id)
        return Deterministic(fallback)

    merged = fallback.model_dump()
    merged.update({key: value for key, value in parsed.items() if key in merged and value})
    try:
        insight = CoachingInsight.model_validate(merged)
    except ValidationError as e:
        warnings.warn(f"Coaching reply failed validation, using deterministic insight: {e}")
        return Deterministic(fallback)
    return EnrichedByModel(insight=insight, model=client.model)
