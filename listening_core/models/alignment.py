"""Data model for token alignment between a transcript and a learner attempt."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

CORRECT = "correct"
SUBSTITUTION = "substitution"
MISSING = "missing"
EXTRA = "extra"

NOT_HEARD = "(not heard)"


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True)
class AlignmentToken:
    """One backtrace step rendered for display.

    Attributes:
        id: Stable identifier derived from the step's defining fields
        type: "correct", "substitution", "missing" or "extra"
        ref_index: Position in the reference tokens (None for extra)
        user_index: Position in the attempt tokens (None for missing)
        expected: Reference word, or the whole phrase for a multi-word substitution
        actual: Attempt word(s)
        span_id: Identifier of the phrase span this token belongs to
    """
    id: str
    type: str  # "correct" | "substitution" | "missing" | "extra"
    ref_index: Optional[int] = None
    user_index: Optional[int] = None
    expected: Optional[str] = None
    actual: Optional[str] = None
    span_id: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.type != CORRECT

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "id": self.id,
            "type": self.type,
            "refIndex": self.ref_index,
            "userIndex": self.user_index,
            "expected": self.expected,
            "actual": self.actual,
            "spanId": self.span_id,
        })


@dataclass(frozen=True)
class EventContext:
    before: str
    after: str
    full_ref: str
    full_user: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "before": self.before,
            "after": self.after,
            "fullRef": self.full_ref,
            "fullUser": self.full_user,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EventContext":
        return cls(
            before=data.get("before", ""),
            after=data.get("after", ""),
            full_ref=data.get("fullRef", ""),
            full_user=data.get("fullUser", ""),
        )


@dataclass(frozen=True)
class PhraseHint:
    span_text: str
    span_ref_start: int
    span_ref_end: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "spanText": self.span_text,
            "spanRefStart": self.span_ref_start,
            "spanRefEnd": self.span_ref_end,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PhraseHint":
        return cls(
            span_text=data["spanText"],
            span_ref_start=int(data["spanRefStart"]),
            span_ref_end=int(data["spanRefEnd"]),
        )


@dataclass(frozen=True)
class AlignmentEvent:
    """A non-correct occurrence with its reference range and context.

    For extra words the reference range is the anchor of the nearest aligned
    neighbor, not a true location.
    """
    event_id: str
    type: str  # "substitution" | "missing" | "extra"
    ref_start: int
    ref_end: int
    expected_span: str
    actual_span: str
    context: EventContext
    user_start: Optional[int] = None
    user_end: Optional[int] = None
    phrase_hint: Optional[PhraseHint] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "eventId": self.event_id,
            "type": self.type,
            "refStart": self.ref_start,
            "refEnd": self.ref_end,
            "userStart": self.user_start,
            "userEnd": self.user_end,
            "expectedSpan": self.expected_span,
            "actualSpan": self.actual_span,
            "context": self.context.to_dict(),
            "phraseHint": self.phrase_hint.to_dict() if self.phrase_hint else None,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AlignmentEvent":
        """Rebuild an event from its wire shape. Raises KeyError/ValueError on bad input."""
        event_type = data["type"]
        if event_type not in (SUBSTITUTION, MISSING, EXTRA):
            raise ValueError(f"unknown event type: {event_type!r}")
        hint = data.get("phraseHint")
        user_start = data.get("userStart")
        user_end = data.get("userEnd")
        return cls(
            event_id=str(data["eventId"]),
            type=event_type,
            ref_start=int(data["refStart"]),
            ref_end=int(data["refEnd"]),
            expected_span=data.get("expectedSpan", ""),
            actual_span=data.get("actualSpan", ""),
            context=EventContext.from_dict(data.get("context") or {}),
            user_start=int(user_start) if user_start is not None else None,
            user_end=int(user_end) if user_end is not None else None,
            phrase_hint=PhraseHint.from_dict(hint) if hint else None,
        )


@dataclass(frozen=True)
class AlignmentStats:
    correct: int = 0
    substitutions: int = 0
    missing: int = 0
    extra: int = 0

    @property
    def errors(self) -> int:
        return self.substitutions + self.missing + self.extra

    def to_dict(self) -> Dict[str, int]:
        return {
            "correct": self.correct,
            "substitutions": self.substitutions,
            "missing": self.missing,
            "extra": self.extra,
        }


@dataclass(frozen=True)
class AlignmentResult:
    """Full alignment of one attempt against one reference.

    Attributes:
        ref_tokens: Normalized reference words
        user_tokens: Normalized attempt words
        tokens: One entry per alignment step, in sequence order
        events: One entry per non-correct token, in the same order
        stats: Token counts by type
    """
    ref_tokens: List[str]
    user_tokens: List[str]
    tokens: List[AlignmentToken] = field(default_factory=list)
    events: List[AlignmentEvent] = field(default_factory=list)
    stats: AlignmentStats = field(default_factory=AlignmentStats)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "refTokens": list(self.ref_tokens),
            "userTokens": list(self.user_tokens),
            "tokens": [t.to_dict() for t in self.tokens],
            "events": [e.to_dict() for e in self.events],
            "stats": self.stats.to_dict(),
        }
