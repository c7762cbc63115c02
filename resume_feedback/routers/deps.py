from fastapi import Depends
from sqlalchemy.orm import Session

from resume_feedback.database import get_db
from resume_feedback.services.orchestrator import PipelineOrchestrator
from resume_feedback.services.persistence import PersistenceGateway


def get_gateway(db: Session = Depends(get_db)) -> PersistenceGateway:
    return PersistenceGateway(db)


def get_orchestrator(db: Session = Depends(get_db)) -> PipelineOrchestrator:
    """One pipeline per request, wired from the process settings."""
    return PipelineOrchestrator.from_settings(db)
