import logging
from typing import List

from fastapi import APIRouter, Depends, File, UploadFile

from resume_feedback.core.config import settings
from resume_feedback.core.exceptions import NotFoundError, RequestValidationFailed
from resume_feedback.models.feedback import ResumeFeedback
from resume_feedback.models.score import ResumeScore
from resume_feedback.routers.deps import get_gateway
from resume_feedback.schemas.analysis import FeedbackItem, ScoreSet, letter_grade
from resume_feedback.schemas.resume import (
    ResumeDashboard, ResumeResponse, ResumeUploadResponse, ScoreSummary
)
from resume_feedback.services.persistence import PersistenceGateway
from resume_feedback.services.text_extraction import extract_text, validate_filename

logger = logging.getLogger(__name__)

router = APIRouter()

DASHBOARD_FEEDBACK_LIMIT = 3


def _to_item(row: ResumeFeedback) -> FeedbackItem:
    return FeedbackItem(
        type=row.type,
        title=row.title,
        section=row.section,
        description=row.feedback,
        severity=row.severity,
        suggestion=row.suggestion,
        source=row.source,
        category=row.category,
    )


def _to_scores(row: ResumeScore) -> ScoreSet:
    return ScoreSet(
        overall=row.overall_score,
        content=row.content_score,
        formatting=row.formatting_score,
        impact=row.impact_score,
        ats=row.ats_score,
    )


@router.post("", response_model=ResumeUploadResponse)
def upload_resume(
    file: UploadFile = File(...),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    file_ext = validate_filename(file.filename)
    data = file.file.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        raise RequestValidationFailed("File too large")

    text = extract_text(data, file_ext)
    resume = gateway.create_resume(file.filename, text)
    logger.info(f"Stored resume {resume.id} ({len(text)} chars) from {file.filename}")
    return ResumeUploadResponse(
        id=resume.id,
        filename=resume.filename,
        upload_date=resume.upload_date,
        content=text,
        characters=len(text),
    )


@router.get("/latest", response_model=ResumeDashboard)
def latest_resume(gateway: PersistenceGateway = Depends(get_gateway)):
    resume = gateway.latest_resume()
    if resume is None:
        raise NotFoundError("No resume has been uploaded yet")

    score_row = gateway.latest_scores(resume.id)
    scores = _to_scores(score_row) if score_row else None
    return ResumeDashboard(
        resume=ResumeResponse.model_validate(resume),
        scores=scores,
        grade=letter_grade(scores.overall) if scores else None,
        feedback=[_to_item(r) for r in gateway.feedback_for(resume.id, limit=DASHBOARD_FEEDBACK_LIMIT)],
    )


@router.get("/{resume_id}/feedback", response_model=List[FeedbackItem])
def resume_feedback(resume_id: str, gateway: PersistenceGateway = Depends(get_gateway)):
    if gateway.get_resume(resume_id) is None:
        raise NotFoundError("Resume not found")
    return [_to_item(r) for r in gateway.feedback_for(resume_id)]


@router.get("/{resume_id}/scores", response_model=ScoreSummary)
def resume_scores(resume_id: str, gateway: PersistenceGateway = Depends(get_gateway)):
    score_row = gateway.latest_scores(resume_id)
    if score_row is None:
        raise NotFoundError("No scores recorded for this resume")
    scores = _to_scores(score_row)
    return ScoreSummary(resume_id=resume_id, scores=scores, grade=letter_grade(scores.overall))
