"""Coaching insights for individual alignment events."""
from .client import CoachClient
from .fallback import build_fallback_insight
from .insight import CoachingInsight, CoachingResult, Deterministic, EnrichedByModel, ReplayTarget
from .service import explain_event

__all__ = [
    "CoachClient",
    "CoachingInsight",
    "CoachingResult",
    "Deterministic",
    "EnrichedByModel",
    "ReplayTarget",
    "build_fallback_insight",
    "explain_event",
]
