import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship
from resume_feedback.database import Base


def _new_resume_id() -> str:
    return uuid.uuid4().hex


class Resume(Base):
    __tablename__ = "user_resumes"

    id = Column(String(64), primary_key=True, default=_new_resume_id)
    filename = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    upload_date = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)

    feedback = relationship("ResumeFeedback", back_populates="resume")
    scores = relationship("ResumeScore", back_populates="resume")
