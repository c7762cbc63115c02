import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Request

from resume_feedback.core.exceptions import AppException, PipelineError, RequestValidationFailed
from resume_feedback.core.limiter import TRIGGER_LIMIT, limiter
from resume_feedback.routers.deps import get_gateway, get_orchestrator
from resume_feedback.schemas.insight import InsightRecord, ScrapeRequest, ScrapeResponse
from resume_feedback.services.orchestrator import PipelineOrchestrator
from resume_feedback.services.persistence import PersistenceGateway

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/reddit-scraper", response_model=ScrapeResponse)
@limiter.limit(TRIGGER_LIMIT)
def scrape_subreddit(
    request: Request,
    payload: ScrapeRequest,
    orchestrator: PipelineOrchestrator = Depends(get_orchestrator),
):
    topic = (payload.subreddit or "").strip()
    if not topic:
        raise RequestValidationFailed("Subreddit parameter is required")

    logger.info(f"Scraping insights from r/{topic}")
    try:
        result = orchestrator.collect(topic)
    except AppException:
        raise
    except Exception as e:
        logger.exception(f"Collection failed for r/{topic}")
        raise PipelineError(str(e))

    return ScrapeResponse(
        success=True,
        count=result.count,
        posts_analyzed=result.posts_analyzed,
        insights=result.insights,
        mock=result.mock,
    )


@router.get("/insights", response_model=List[InsightRecord])
def list_insights(
    limit: int = Query(default=100, ge=1, le=500),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    return [
        InsightRecord(
            topic=row.subreddit,
            insight=row.insight,
            section=row.section,
            category=row.category,
            sentiment=row.sentiment,
            source_url=row.source_url or "",
        )
        for row in gateway.recent_insights(limit)
    ]
