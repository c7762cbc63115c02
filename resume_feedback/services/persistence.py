import logging
from typing import Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from resume_feedback.models.feedback import ResumeFeedback
from resume_feedback.models.insight import RedditInsight
from resume_feedback.models.resume import Resume
from resume_feedback.models.score import ResumeScore
from resume_feedback.schemas.analysis import FeedbackItem, ScoreSet
from resume_feedback.schemas.insight import InsightCandidate

logger = logging.getLogger(__name__)


def topic_url(topic: str) -> str:
    return f"https://reddit.com/r/{topic}"


class PersistenceGateway:
    """
    Append-only writes for insights, feedback and scores.

    Every row is committed on its own. A failed row is rolled back, logged and
    left out of the returned count; the rest of the batch still goes in.
    """

    def __init__(self, db: Session):
        self.db = db

    def _insert(self, row, label: str) -> bool:
        self.db.add(row)
        try:
            self.db.commit()
            return True
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error inserting {label}: {e}")
            return False

    # --- writes ---

    def store_insights(self, topic: str, records: Iterable[InsightCandidate]) -> int:
        stored = 0
        for record in records:
            row = RedditInsight(
                subreddit=topic,
                insight=record.insight,
                section=record.section,
                category=record.category,
                sentiment=record.sentiment,
                source_url=topic_url(topic),
            )
            stored += self._insert(row, "insight")
        logger.info(f"Stored {stored} insights for r/{topic}")
        return stored

    def store_feedback(self, resume_id: str, items: Iterable[FeedbackItem]) -> int:
        stored = 0
        for item in items:
            row = ResumeFeedback(
                resume_id=resume_id,
                type=item.type,
                title=item.title,
                category=item.category or item.type,
                section=item.section,
                feedback=item.description,
                severity=item.severity or "medium",
                suggestion=item.suggestion,
                source=item.source,
            )
            stored += self._insert(row, "feedback")
        return stored

    def store_scores(self, resume_id: str, scores: ScoreSet) -> int:
        row = ResumeScore(
            resume_id=resume_id,
            overall_score=scores.overall,
            content_score=scores.content,
            formatting_score=scores.formatting,
            impact_score=scores.impact,
            ats_score=scores.ats,
        )
        return int(self._insert(row, "scores"))

    def create_resume(self, filename: str, content: str, resume_id: Optional[str] = None) -> Resume:
        resume = Resume(filename=filename, content=content)
        if resume_id:
            resume.id = resume_id
        self.db.add(resume)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(resume)
        return resume

    # --- reads ---

    def count_insights(self) -> int:
        return self.db.query(func.count(RedditInsight.id)).scalar() or 0

    def recent_insights(self, limit: int = 100) -> List[RedditInsight]:
        return (
            self.db.query(RedditInsight)
            .order_by(RedditInsight.created_at.desc(), RedditInsight.id.desc())
            .limit(limit)
            .all()
        )

    def get_resume(self, resume_id: str) -> Optional[Resume]:
        return self.db.get(Resume, resume_id)

    def latest_resume(self) -> Optional[Resume]:
        return self.db.query(Resume).order_by(Resume.upload_date.desc()).first()

    def latest_scores(self, resume_id: str) -> Optional[ResumeScore]:
        return (
            self.db.query(ResumeScore)
            .filter(ResumeScore.resume_id == resume_id)
            .order_by(ResumeScore.created_at.desc(), ResumeScore.id.desc())
            .first()
        )

    def feedback_for(self, resume_id: str, limit: Optional[int] = None) -> List[ResumeFeedback]:
        query = (
            self.db.query(ResumeFeedback)
            .filter(ResumeFeedback.resume_id == resume_id)
            .order_by(ResumeFeedback.id)
        )
        if limit is not None:
            query = query.limit(limit)
        return query.all()
