from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Literal, Optional

FeedbackType = Literal["improvement", "strength", "insight", "warning", "suggestion"]
FEEDBACK_TYPES = ("improvement", "strength", "insight", "warning", "suggestion")


class FeedbackItem(BaseModel):
    type: FeedbackType = "insight"
    title: str = Field(min_length=1)
    section: str = "General"
    description: str = Field(min_length=1)
    severity: str = "medium"
    suggestion: Optional[str] = None
    source: Optional[str] = None
    category: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value):
        if isinstance(value, str) and value.strip().lower() in FEEDBACK_TYPES:
            return value.strip().lower()
        return "insight"

    @field_validator("severity", mode="before")
    @classmethod
    def _default_severity(cls, value):
        return value or "medium"

    @field_validator("section", mode="before")
    @classmethod
    def _default_section(cls, value):
        return value or "General"


class ScoreSet(BaseModel):
    """Five scores in [0, 1]. Accepts the provider's `*_score` keys on input."""
    model_config = ConfigDict(populate_by_name=True)

    overall: float = Field(validation_alias=AliasChoices("overall", "overall_score"))
    content: float = Field(validation_alias=AliasChoices("content", "content_score"))
    formatting: float = Field(validation_alias=AliasChoices("formatting", "formatting_score"))
    impact: float = Field(validation_alias=AliasChoices("impact", "impact_score"))
    ats: float = Field(validation_alias=AliasChoices("ats", "ats_score"))

    @model_validator(mode="after")
    def _into_unit_range(self):
        fields = ("overall", "content", "formatting", "impact", "ats")
        values = [getattr(self, name) for name in fields]
        # Models sometimes answer on a 0-100 scale
        scale = 100.0 if any(v > 1 for v in values) else 1.0
        for name, value in zip(fields, values):
            setattr(self, name, min(1.0, max(0.0, value / scale)))
        return self


class AnalysisPayload(BaseModel):
    """The JSON document a provider must return for a resume analysis."""
    feedback: List[FeedbackItem] = Field(min_length=1)
    scores: ScoreSet


class AnalyzeRequest(BaseModel):
    resumeId: Optional[str] = None
    resumeText: Optional[str] = None


class AnalyzeResponse(BaseModel):
    success: bool = True
    feedback: List[FeedbackItem]
    scores: ScoreSet
    insights_used: Optional[int] = None
    feedback_stored: Optional[int] = None
    mock: Optional[bool] = None


def letter_grade(overall: float) -> str:
    if overall >= 0.9:
        return "A+"
    if overall >= 0.8:
        return "A"
    if overall >= 0.7:
        return "B"
    if overall >= 0.6:
        return "C"
    if overall >= 0.5:
        return "D"
    return "F"
