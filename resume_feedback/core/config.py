import os
import logging
from pydantic import BaseModel, Field
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()

DEFAULT_TOPICS = "resumes,jobs,careerguidance,cscareerquestions,recruitinghell"


def _split_csv(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class AISettings(BaseModel):
    # Primary provider
    perplexity_api_key: Optional[str] = Field(default=os.getenv("PERPLEXITY_API_KEY") or None)
    perplexity_model: str = Field(default=os.getenv("PERPLEXITY_MODEL", "llama-3.1-sonar-small-128k-online"))
    # Secondary provider
    groq_api_key: Optional[str] = Field(default=os.getenv("GROQ_API_KEY") or None)
    groq_model: str = Field(default=os.getenv("GROQ_MODEL", "llama3-8b-8192"))

    temperature: float = 0.7
    timeout_seconds: float = float(os.getenv("AI_TIMEOUT_SECONDS", "30"))
    max_attempts: int = int(os.getenv("AI_MAX_ATTEMPTS", "2"))
    insight_max_tokens: int = 2048
    analysis_max_tokens: int = 4096


class CollectionSettings(BaseModel):
    topics: List[str] = Field(default_factory=lambda: _split_csv(os.getenv("COLLECTION_TOPICS", DEFAULT_TOPICS)))
    topic_delay_seconds: float = float(os.getenv("TOPIC_DELAY_SECONDS", "1.0"))
    max_documents: int = 5
    max_body_chars: int = 1000
    insight_corpus_limit: int = 100
    user_agent: str = os.getenv("REDDIT_USER_AGENT", "resume-feedback/1.0 (insight collector)")


class Config(BaseModel):
    app_name: str = "Resume Feedback API"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"

    # Database (credentials travel inside the URL)
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./database.db")

    ai: AISettings = AISettings()
    collection: CollectionSettings = CollectionSettings()

    rate_limit_per_minute: int = int(os.getenv("RATE_LIMIT_PER_MINUTE", "30"))
    rate_limit_enabled: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    max_upload_bytes: int = 10 * 1024 * 1024


settings = Config()

_logger = logging.getLogger(__name__)
if not settings.ai.perplexity_api_key and not settings.ai.groq_api_key:
    _logger.warning("No generative provider key configured; responses will use sample data.")
