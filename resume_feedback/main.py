"""
Resume Feedback API - FastAPI Application

Middleware order: CorrelationId -> PermissiveCors -> routes.
Every error leaves as {"error": "<message>"}.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Union

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from slowapi.errors import RateLimitExceeded

import resume_feedback.models  # noqa: F401  (model registration)
from resume_feedback.core.config import settings
from resume_feedback.core.exceptions import AppException
from resume_feedback.core.limiter import limiter
from resume_feedback.core.logging import setup_logging
from resume_feedback.core.middleware import CorrelationIdMiddleware, PermissiveCorsMiddleware
from resume_feedback.database import SessionLocal, init_db
from resume_feedback.routers.api_router import api_router

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.app_name} v{settings.version} ({settings.environment})")
    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    yield

    logger.info("Gracefully shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Resume feedback built from community advice and generative scoring",
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.state.limiter = limiter

# Last added runs first
app.add_middleware(PermissiveCorsMiddleware)
app.add_middleware(CorrelationIdMiddleware)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or mistyped bodies are client errors (400), not 422."""
    errors = exc.errors()
    if errors:
        field = errors[0]["loc"][-1] if errors[0]["loc"] else "body"
        message = f"Invalid request: {field}: {errors[0]['msg']}"
    else:
        message = "Invalid request"
    logger.warning(f"Validation Error: {message}")
    return _error(400, message)


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"AppException: {exc.message}", extra={"code": exc.error_code})
    return _error(exc.status_code, exc.message)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return _error(429, f"Rate limit exceeded: {exc.detail}")


@app.exception_handler(StarletteHTTPException)
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: Union[HTTPException, StarletteHTTPException]):
    return _error(exc.status_code, exc.detail if isinstance(exc.detail, str) else "Request failed")


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled server error", extra={"path": request.url.path})
    return _error(500, str(exc) or "An unexpected server error occurred.")


app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/", tags=["Health"])
def root():
    return {
        "message": settings.app_name,
        "version": settings.version,
        "docs": "/docs",
    }


@app.get("/health", tags=["Health"])
def health_check():
    """Liveness probe for load balancers and orchestrators."""
    return {
        "status": "up",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.version,
        "environment": settings.environment,
    }


@app.get("/readiness", tags=["Health"])
def readiness_check():
    """Readiness probe - verifies database connectivity."""
    try:
        with SessionLocal() as session:
            session.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Readiness check failed: {e}")
        raise HTTPException(status_code=503, detail="Service not ready")
    return {
        "status": "ready",
        "components": {"database": "connected"},
    }
