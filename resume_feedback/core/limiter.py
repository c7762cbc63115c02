from slowapi import Limiter
from slowapi.util import get_remote_address

from resume_feedback.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

TRIGGER_LIMIT = f"{settings.rate_limit_per_minute}/minute"
