"""Coaching insight model and the tagged result returned to callers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

ReasonType = Literal[
    "words_blended",
    "short_word_got_swallowed",
    "sounds_like",
    "brain_autofill",
    "common_casual_form",
]


class ReplayTarget(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    ref_start: int = Field(alias="refStart", ge=0)
    ref_end: int = Field(alias="refEnd", ge=0)


class CoachingInsight(BaseModel):
    """Explanation of one alignment event, written for the learner."""
    title: str = Field(min_length=1)
    what_you_might_have_heard: str = Field(min_length=1)
    what_it_was: str = Field(min_length=1)
    why_this_happens_here: str = Field(min_length=1)
    try_this: str = Field(min_length=1)
    replay_target: ReplayTarget
    reason_type: ReasonType


@dataclass(frozen=True)
class Deterministic:
    insight: CoachingInsight
    kind: str = "deterministic"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "insight": self.insight.model_dump(by_alias=True)}


@dataclass(frozen=True)
class EnrichedByModel:
    insight: CoachingInsight
    model: str
    kind: str = "enriched_by_model"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "model": self.model, "insight": self.insight.model_dump(by_alias=True)}


CoachingResult = Union[Deterministic, EnrichedByModel]
