import logging

from fastapi import APIRouter, Depends, Request

from resume_feedback.core.exceptions import AppException, PipelineError, RequestValidationFailed
from resume_feedback.core.limiter import TRIGGER_LIMIT, limiter
from resume_feedback.routers.deps import get_orchestrator
from resume_feedback.schemas.analysis import AnalyzeRequest, AnalyzeResponse
from resume_feedback.services.orchestrator import PipelineOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze-resume", response_model=AnalyzeResponse)
@limiter.limit(TRIGGER_LIMIT)
def analyze_resume(
    request: Request,
    payload: AnalyzeRequest,
    orchestrator: PipelineOrchestrator = Depends(get_orchestrator),
):
    if not payload.resumeId or not (payload.resumeText or "").strip():
        raise RequestValidationFailed("Resume ID and text are required")

    logger.info(f"Analyzing resume: {payload.resumeId}")
    try:
        outcome = orchestrator.analyze(payload.resumeId, payload.resumeText)
    except AppException:
        raise
    except Exception as e:
        logger.exception(f"Analysis pipeline failed for resume {payload.resumeId}")
        raise PipelineError(str(e))

    return AnalyzeResponse(
        success=True,
        feedback=outcome.feedback,
        scores=outcome.scores,
        insights_used=outcome.insights_used,
        feedback_stored=outcome.feedback_stored,
        mock=outcome.mock,
    )
