from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime
from resume_feedback.database import Base


class RedditInsight(Base):
    """Append-only corpus of advice shared by every analysis. No resume FK."""
    __tablename__ = "reddit_insights"

    id = Column(Integer, primary_key=True, index=True)
    subreddit = Column(String(100), nullable=False, index=True)
    insight = Column(Text, nullable=False)
    section = Column(String(100))
    category = Column(String(100))
    sentiment = Column(String(20))
    source_url = Column(String(500))
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)
