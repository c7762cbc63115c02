from sqlalchemy.exc import OperationalError

from resume_feedback.models.feedback import ResumeFeedback
from resume_feedback.models.insight import RedditInsight
from resume_feedback.models.score import ResumeScore
from resume_feedback.schemas.analysis import FeedbackItem, ScoreSet
from resume_feedback.services.fallback import fallback_feedback, fallback_insights, fallback_scores
from resume_feedback.services.persistence import PersistenceGateway


class FlakySession:
    """Session double whose commit fails on chosen calls."""

    def __init__(self, fail_on):
        self.fail_on = set(fail_on)
        self.added = []
        self.commits = 0
        self.rollbacks = 0

    def add(self, row):
        self.added.append(row)

    def commit(self):
        self.commits += 1
        if self.commits in self.fail_on:
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    def rollback(self):
        self.rollbacks += 1


def test_store_insights_counts_rows(db_session):
    gateway = PersistenceGateway(db_session)
    stored = gateway.store_insights("resumes", fallback_insights())

    assert stored == 10
    rows = db_session.query(RedditInsight).filter(RedditInsight.subreddit == "resumes").all()
    assert len(rows) == 10
    assert rows[0].source_url == "https://reddit.com/r/resumes"


def test_single_insert_failure_does_not_abort_batch():
    session = FlakySession(fail_on={4})
    stored = PersistenceGateway(session).store_insights("resumes", fallback_insights())

    assert stored == 9
    assert session.commits == 10
    assert session.rollbacks == 1


def test_feedback_failures_are_excluded_from_count():
    session = FlakySession(fail_on={1, 2})
    stored = PersistenceGateway(session).store_feedback("r1", fallback_feedback())
    assert stored == 8


def test_store_scores_failure_returns_zero():
    session = FlakySession(fail_on={1})
    assert PersistenceGateway(session).store_scores("r1", fallback_scores()) == 0


def test_feedback_defaults(db_session):
    gateway = PersistenceGateway(db_session)
    resume = gateway.create_resume("cv.txt", "text")
    item = FeedbackItem(type="warning", title="Typos", section="General", description="Fix typos")

    assert gateway.store_feedback(resume.id, [item]) == 1

    row = db_session.query(ResumeFeedback).filter(ResumeFeedback.resume_id == resume.id).one()
    assert row.category == "warning"
    assert row.severity == "medium"
    assert row.feedback == "Fix typos"
    assert row.suggestion is None


def test_rescoring_appends_and_latest_wins(db_session):
    gateway = PersistenceGateway(db_session)
    resume = gateway.create_resume("cv.txt", "text")

    gateway.store_scores(resume.id, fallback_scores())
    gateway.store_scores(resume.id, ScoreSet(overall=0.9, content=0.9, formatting=0.9, impact=0.9, ats=0.9))

    assert db_session.query(ResumeScore).filter(ResumeScore.resume_id == resume.id).count() == 2
    assert gateway.latest_scores(resume.id).overall_score == 0.9


def test_recent_insights_is_capped(db_session):
    gateway = PersistenceGateway(db_session)
    for topic in ("a", "b", "c"):
        gateway.store_insights(topic, fallback_insights())

    assert gateway.count_insights() == 30
    assert len(gateway.recent_insights(limit=25)) == 25


def test_create_resume_with_explicit_id(db_session):
    gateway = PersistenceGateway(db_session)
    gateway.create_resume("pasted.txt", "content", resume_id="r-42")
    assert gateway.get_resume("r-42").filename == "pasted.txt"
    assert gateway.get_resume("missing") is None
