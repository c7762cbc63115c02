from datetime import datetime
from pydantic import BaseModel, ConfigDict
from typing import List, Optional

from resume_feedback.schemas.analysis import FeedbackItem, ScoreSet


class ResumeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    filename: str
    upload_date: Optional[datetime] = None


class ResumeUploadResponse(ResumeResponse):
    content: str
    characters: int


class ScoreSummary(BaseModel):
    resume_id: str
    scores: ScoreSet
    grade: str


class ResumeDashboard(BaseModel):
    resume: ResumeResponse
    scores: Optional[ScoreSet] = None
    grade: Optional[str] = None
    feedback: List[FeedbackItem] = []
