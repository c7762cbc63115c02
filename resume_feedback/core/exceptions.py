from typing import Any, Dict, Optional


class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class RequestValidationFailed(AppException):
    def __init__(self, message: str):
        super().__init__(message=message, status_code=400, error_code="INVALID_REQUEST")


class NotFoundError(AppException):
    def __init__(self, message: str):
        super().__init__(message=message, status_code=404, error_code="NOT_FOUND")


class ProviderError(AppException):
    """A generative provider is unconfigured, unreachable, or answered non-2xx."""
    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(
            message=f"{provider}: {message}",
            status_code=503,
            error_code="AI_SERVICE_UNAVAILABLE",
            details={"provider": provider}
        )


class PayloadParseError(AppException):
    """Provider output did not decode into the expected JSON shape."""
    def __init__(self, message: str, raw: str = ""):
        self.raw = raw
        super().__init__(message=message, status_code=502, error_code="AI_PAYLOAD_INVALID")


class PipelineError(AppException):
    def __init__(self, message: str):
        super().__init__(message=message, status_code=500, error_code="PIPELINE_FAILED")
