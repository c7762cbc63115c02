from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from resume_feedback.database import Base


class ResumeFeedback(Base):
    __tablename__ = "resume_feedback"

    id = Column(Integer, primary_key=True, index=True)
    resume_id = Column(String(64), ForeignKey("user_resumes.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)
    title = Column(String(255), nullable=False)
    category = Column(String(100))
    section = Column(String(100))
    feedback = Column(Text, nullable=False)
    severity = Column(String(20), default="medium")
    suggestion = Column(Text, nullable=True)
    source = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    resume = relationship("Resume", back_populates="feedback")
