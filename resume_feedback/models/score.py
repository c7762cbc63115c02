from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from resume_feedback.database import Base


class ResumeScore(Base):
    # Re-analysis appends a new row; readers take the most recent one.
    __tablename__ = "resume_scores"

    id = Column(Integer, primary_key=True, index=True)
    resume_id = Column(String(64), ForeignKey("user_resumes.id"), nullable=False, index=True)
    overall_score = Column(Float, nullable=False)
    content_score = Column(Float, nullable=False)
    formatting_score = Column(Float, nullable=False)
    impact_score = Column(Float, nullable=False)
    ats_score = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)

    resume = relationship("Resume", back_populates="scores")
