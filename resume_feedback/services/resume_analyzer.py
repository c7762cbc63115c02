import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from resume_feedback.core import prompts
from resume_feedback.core.config import AISettings
from resume_feedback.schemas.analysis import FeedbackItem, ScoreSet
from resume_feedback.schemas.insight import InsightCandidate
from resume_feedback.services.fallback import fallback_feedback, fallback_scores
from resume_feedback.services.llm_client import ChatProvider, run_provider_chain
from resume_feedback.services.payload import decode_analysis

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    feedback: List[FeedbackItem]
    scores: ScoreSet
    mock: bool
    provider: Optional[str] = None


def format_insights(insights: Sequence[InsightCandidate]) -> str:
    return "\n".join(
        prompts.get_prompt(
            prompts.INSIGHT_LINE_TEMPLATE,
            section=i.section,
            category=i.category,
            insight=i.insight,
            sentiment=i.sentiment,
        )
        for i in insights
    )


def fallback_analysis() -> AnalysisResult:
    return AnalysisResult(feedback=fallback_feedback(), scores=fallback_scores(), mock=True)


class ResumeAnalyzer:
    def __init__(self, providers: List[ChatProvider], ai: AISettings):
        self.providers = providers
        self.max_tokens = ai.analysis_max_tokens

    def analyze(self, resume_text: str, insights: Sequence[InsightCandidate]) -> AnalysisResult:
        """Score a resume against the insight corpus, or return the sample analysis."""
        if not insights:
            logger.warning("Insight corpus is empty; using sample analysis")
            return fallback_analysis()

        result = run_provider_chain(
            self.providers,
            system=prompts.RESUME_ANALYSIS_SYSTEM,
            user=prompts.get_prompt(
                prompts.RESUME_ANALYSIS_USER_TEMPLATE,
                resume_text=resume_text,
                insights_text=format_insights(insights),
            ),
            max_tokens=self.max_tokens,
            decode=decode_analysis,
        )
        if result is None:
            logger.warning("All providers exhausted for resume analysis; using sample analysis")
            return fallback_analysis()

        payload = result.value
        logger.info(f"Resume analyzed via {result.provider}: {len(payload.feedback)} feedback items")
        return AnalysisResult(
            feedback=payload.feedback, scores=payload.scores, mock=False, provider=result.provider
        )
