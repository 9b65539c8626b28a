"""Request bodies accepted by the HTTP layer."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CheckAnswerRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reference_text: Optional[str] = Field(default=None, alias="referenceText")
    correct_answer: Optional[str] = Field(default=None, alias="correctAnswer")
    attempt_text: Optional[str] = Field(default=None, alias="attemptText")
    user_answer: Optional[str] = Field(default=None, alias="userAnswer")
    skipped: bool = False
    include_summary: bool = Field(default=True, alias="includeSummary")
    semantic_score: Optional[float] = Field(default=None, alias="semanticScore", ge=0, le=100)
    missing_keywords: List[str] = Field(default_factory=list, alias="missingKeywords")

    @property
    def transcript(self) -> Optional[str]:
        return self.reference_text if self.reference_text is not None else self.correct_answer

    @property
    def attempt(self) -> str:
        if self.attempt_text is not None:
            return self.attempt_text
        return self.user_answer or ""


class InsightRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    event: Dict[str, Any]
    transcript: str = Field(min_length=1)
    user_text: str = Field(alias="userText", min_length=1)
