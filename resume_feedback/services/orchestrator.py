"""
Insight collection and resume analysis pipeline.

Collection:  IDLE -> CHECKING_CORPUS -> (empty) COLLECTING -> IDLE
                                     -> (non-empty) IDLE
Analysis:    IDLE -> EXTRACTING_TEXT -> ENSURING_CORPUS -> ANALYZING
                  -> PERSISTING -> COMPLETE   (or FAILED from ANALYZING)

Topics are collected one at a time, paced by a token bucket, because the
content source and the providers are shared, rate-limited upstreams.
"""
import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import requests
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from resume_feedback.core.config import CollectionSettings, Config, settings
from resume_feedback.core.exceptions import PipelineError, RequestValidationFailed
from resume_feedback.schemas.analysis import FeedbackItem, ScoreSet
from resume_feedback.schemas.insight import InsightCandidate, InsightRecord
from resume_feedback.services.content_fetcher import RedditFetcher
from resume_feedback.services.fallback import SYNTHETIC_TOPIC
from resume_feedback.services.insight_extractor import InsightExtractor
from resume_feedback.services.llm_client import select_providers
from resume_feedback.services.persistence import PersistenceGateway, topic_url
from resume_feedback.services.resume_analyzer import ResumeAnalyzer
from resume_feedback.services.throttle import TokenBucket

logger = logging.getLogger(__name__)

PASTED_RESUME_FILENAME = "pasted-resume.txt"


class PipelineState(str, enum.Enum):
    IDLE = "idle"
    CHECKING_CORPUS = "checking_corpus"
    COLLECTING = "collecting"
    EXTRACTING_TEXT = "extracting_text"
    ENSURING_CORPUS = "ensuring_corpus"
    ANALYZING = "analyzing"
    PERSISTING = "persisting"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass
class CollectionResult:
    topic: str
    insights: List[InsightRecord]
    stored: int
    posts_analyzed: int
    mock: bool
    provider: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.insights)


@dataclass
class AnalysisOutcome:
    resume_id: str
    feedback: List[FeedbackItem]
    scores: ScoreSet
    insights_used: int
    feedback_stored: int
    scores_stored: int
    mock: bool
    provider: Optional[str] = None
    collected: List[CollectionResult] = field(default_factory=list)


class PipelineOrchestrator:
    def __init__(
        self,
        gateway: PersistenceGateway,
        fetcher: RedditFetcher,
        extractor: InsightExtractor,
        analyzer: ResumeAnalyzer,
        collection: CollectionSettings,
        throttle: Optional[TokenBucket] = None,
    ):
        self.gateway = gateway
        self.fetcher = fetcher
        self.extractor = extractor
        self.analyzer = analyzer
        self.collection = collection
        self.throttle = throttle
        self.state = PipelineState.IDLE

    @classmethod
    def from_settings(
        cls,
        db: Session,
        config: Config = settings,
        session: Optional[requests.Session] = None,
    ) -> "PipelineOrchestrator":
        """Wire the pipeline from an explicit configuration object."""
        providers = select_providers(config.ai, session=session)
        if not providers:
            logger.info("No generative provider configured; pipeline will serve sample data")
        delay = config.collection.topic_delay_seconds
        return cls(
            gateway=PersistenceGateway(db),
            fetcher=RedditFetcher(
                user_agent=config.collection.user_agent,
                max_documents=config.collection.max_documents,
                max_body_chars=config.collection.max_body_chars,
                session=session,
            ),
            extractor=InsightExtractor(providers, config.ai),
            analyzer=ResumeAnalyzer(providers, config.ai),
            collection=config.collection,
            throttle=TokenBucket.from_interval(delay) if delay > 0 else None,
        )

    def _transition(self, state: PipelineState):
        logger.info(f"Pipeline state {self.state.value} -> {state.value}")
        self.state = state

    # --- collection path ---

    def collect(self, topic: str) -> CollectionResult:
        """Fetch, extract and store insights for one topic."""
        if self.extractor.providers:
            documents = list(self.fetcher.fetch(topic))
        else:
            # Nothing could consume the posts, so the content source is not contacted
            documents = []

        extraction = self.extractor.extract(topic, documents)
        stored = self.gateway.store_insights(topic, extraction.insights)
        records = [
            InsightRecord(topic=topic, source_url=topic_url(topic), **candidate.model_dump())
            for candidate in extraction.insights
        ]
        if stored < len(records):
            logger.warning(f"Stored {stored}/{len(records)} insights for r/{topic}")
        return CollectionResult(
            topic=topic,
            insights=records,
            stored=stored,
            posts_analyzed=extraction.documents_used,
            mock=extraction.mock,
            provider=extraction.provider,
        )

    def ensure_corpus(self) -> List[CollectionResult]:
        """Populate the insight corpus if it is empty. Returns what was collected."""
        self._transition(PipelineState.CHECKING_CORPUS)
        if self.gateway.count_insights() > 0:
            self._transition(PipelineState.IDLE)
            return []

        self._transition(PipelineState.COLLECTING)
        results = []
        for topic in self.collection.topics:
            if self.throttle is not None:
                self.throttle.acquire()
            results.append(self.collect(topic))

        if self.gateway.count_insights() == 0:
            logger.warning(f"Corpus still empty after {len(results)} topics; seeding r/{SYNTHETIC_TOPIC}")
            extraction = self.extractor.extract(SYNTHETIC_TOPIC, [])
            stored = self.gateway.store_insights(SYNTHETIC_TOPIC, extraction.insights)
            results.append(CollectionResult(
                topic=SYNTHETIC_TOPIC,
                insights=[
                    InsightRecord(topic=SYNTHETIC_TOPIC, source_url=topic_url(SYNTHETIC_TOPIC), **c.model_dump())
                    for c in extraction.insights
                ],
                stored=stored,
                posts_analyzed=0,
                mock=True,
            ))

        self._transition(PipelineState.IDLE)
        return results

    # --- analysis path ---

    def _corpus(self) -> List[InsightCandidate]:
        rows = self.gateway.recent_insights(self.collection.insight_corpus_limit)
        return [
            InsightCandidate(
                insight=row.insight,
                section=row.section,
                category=row.category,
                sentiment=row.sentiment,
            )
            for row in rows
        ]

    def _register_resume(self, resume_id: str, text: str) -> None:
        logger.info(f"Registering resume {resume_id} from submitted text")
        try:
            self.gateway.create_resume(PASTED_RESUME_FILENAME, text, resume_id=resume_id)
        except IntegrityError:
            # A concurrent request registered the same id first
            if self.gateway.get_resume(resume_id) is None:
                raise
            logger.info(f"Resume {resume_id} was already registered")

    def analyze(self, resume_id: str, resume_text: str) -> AnalysisOutcome:
        self._transition(PipelineState.EXTRACTING_TEXT)
        text = (resume_text or "").strip()
        if not resume_id or not text:
            self._transition(PipelineState.IDLE)
            raise RequestValidationFailed("Resume ID and text are required")
        if self.gateway.get_resume(resume_id) is None:
            self._register_resume(resume_id, text)

        self._transition(PipelineState.ENSURING_CORPUS)
        collected = self.ensure_corpus()

        self._transition(PipelineState.ANALYZING)
        try:
            corpus = self._corpus()
            logger.info(f"Analyzing resume {resume_id} against {len(corpus)} insights")
            result = self.analyzer.analyze(text, corpus)
        except Exception as e:
            self._transition(PipelineState.FAILED)
            logger.exception(f"Analysis failed for resume {resume_id}")
            raise PipelineError(str(e) or "Resume analysis failed")

        self._transition(PipelineState.PERSISTING)
        feedback_stored = self.gateway.store_feedback(resume_id, result.feedback)
        scores_stored = self.gateway.store_scores(resume_id, result.scores)

        self._transition(PipelineState.COMPLETE)
        return AnalysisOutcome(
            resume_id=resume_id,
            feedback=result.feedback,
            scores=result.scores,
            insights_used=len(corpus),
            feedback_stored=feedback_stored,
            scores_stored=scores_stored,
            mock=result.mock,
            provider=result.provider,
            collected=collected,
        )
