import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from resume_feedback.core import prompts
from resume_feedback.core.config import AISettings
from resume_feedback.schemas.insight import InsightCandidate
from resume_feedback.services.content_fetcher import Document
from resume_feedback.services.fallback import fallback_insights
from resume_feedback.services.llm_client import ChatProvider, run_provider_chain
from resume_feedback.services.payload import decode_insights

logger = logging.getLogger(__name__)


@dataclass
class ExtractionResult:
    insights: List[InsightCandidate]
    documents_used: int
    mock: bool
    provider: Optional[str] = None


def build_insight_prompt(topic: str, documents: List[Document]) -> str:
    rendered = "\n\n---\n\n".join(
        prompts.get_prompt(prompts.DOCUMENT_TEMPLATE, title=d.title, url=d.url, body=d.body)
        for d in documents
    )
    return prompts.get_prompt(prompts.INSIGHT_EXTRACTION_USER_TEMPLATE, topic=topic, documents=rendered)


class InsightExtractor:
    def __init__(self, providers: List[ChatProvider], ai: AISettings):
        self.providers = providers
        self.max_tokens = ai.insight_max_tokens

    def extract(self, topic: str, documents: Iterable[Document]) -> ExtractionResult:
        """Turn fetched posts into 10 unpersisted insights, or the static list."""
        docs = list(documents)
        if not docs:
            logger.warning(f"No documents for r/{topic}; using sample insights")
            return ExtractionResult(insights=fallback_insights(), documents_used=0, mock=True)

        result = run_provider_chain(
            self.providers,
            system=prompts.INSIGHT_EXTRACTION_SYSTEM,
            user=build_insight_prompt(topic, docs),
            max_tokens=self.max_tokens,
            decode=decode_insights,
        )
        if result is None:
            logger.warning(f"All providers exhausted for r/{topic}; using sample insights")
            return ExtractionResult(insights=fallback_insights(), documents_used=len(docs), mock=True)

        logger.info(f"Extracted {len(result.value)} insights from r/{topic} via {result.provider}")
        return ExtractionResult(
            insights=result.value, documents_used=len(docs), mock=False, provider=result.provider
        )
