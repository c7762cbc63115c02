import logging
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from resume_feedback.core.config import settings
from resume_feedback.core.logging import request_id_var

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type, x-request-id",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Reads or mints a request id and exposes it to logging for the request."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(settings.request_id_header) or uuid.uuid4().hex
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[settings.request_id_header] = request_id
        return response


class PermissiveCorsMiddleware(BaseHTTPMiddleware):
    """Answers every preflight with an empty 200 and stamps CORS headers on all responses."""

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)
        try:
            response = await call_next(request)
        except Exception as exc:
            # Unhandled errors would otherwise be rendered outside this middleware
            logger.exception("Unhandled server error", extra={"path": request.url.path})
            response = JSONResponse(
                status_code=500,
                content={"error": str(exc) or "An unexpected server error occurred."},
            )
        response.headers.update(CORS_HEADERS)
        return response
