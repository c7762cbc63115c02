from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Literal, Optional

Sentiment = Literal["positive", "negative", "neutral"]


class InsightCandidate(BaseModel):
    """An insight as produced by the extractor, before it is tied to a topic."""
    insight: str = Field(min_length=1)
    section: str = "General"
    category: str = "General"
    sentiment: Sentiment = "neutral"

    @field_validator("sentiment", mode="before")
    @classmethod
    def _normalize_sentiment(cls, value):
        if isinstance(value, str):
            value = value.strip().lower()
            if value in ("positive", "negative", "neutral"):
                return value
        return "neutral"

    @field_validator("section", "category", mode="before")
    @classmethod
    def _default_blank(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return "General"
        return value


class InsightRecord(InsightCandidate):
    model_config = ConfigDict(from_attributes=True)

    topic: str
    source_url: str


class ScrapeRequest(BaseModel):
    subreddit: Optional[str] = None


class ScrapeResponse(BaseModel):
    success: bool = True
    count: int
    posts_analyzed: int
    insights: List[InsightRecord]
    mock: Optional[bool] = None
