"""Decode generative-provider output into validated pipeline payloads.

Model replies are free text that is expected to contain JSON. Decoding never
raises: it returns a `Decoded` value that is either ok (carrying the payload) or
failed (carrying a `PayloadParseError`), so the provider chain has a single
transition to make on bad output.
"""
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, TypeVar, Union

from pydantic import ValidationError

from resume_feedback.core.exceptions import PayloadParseError
from resume_feedback.schemas.analysis import AnalysisPayload, FeedbackItem, ScoreSet
from resume_feedback.schemas.insight import InsightCandidate

logger = logging.getLogger(__name__)

T = TypeVar("T")

EXPECTED_INSIGHTS = 10
MAX_FEEDBACK_ITEMS = 10

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


@dataclass(frozen=True)
class Decoded(Generic[T]):
    value: Optional[T] = None
    error: Optional[PayloadParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Decoded[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, message: str, raw: str = "") -> "Decoded[T]":
        return cls(error=PayloadParseError(message, raw=raw[:500]))


def extract_json(text: str) -> Union[dict, list]:
    """Pull the first JSON document out of a model reply.

    Tries the whole text, then a fenced ```json block, then the outermost
    object or array span. Raises ValueError when nothing parses.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError("Empty model response")
    text = text.strip()

    candidates = [text]
    fenced = _FENCE_RE.search(text)
    if fenced:
        candidates.append(fenced.group(1).strip())
    for opener, closer in (("{", "}"), ("[", "]")):
        start, end = text.find(opener), text.rfind(closer)
        if start != -1 and end > start:
            candidates.append(text[start:end + 1])

    for candidate in candidates:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue
    raise ValueError(f"Could not extract JSON from text: {text[:200]}...")


def _insight_items(data: Any) -> Optional[list]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        if isinstance(data.get("insights"), list):
            return data["insights"]
        # Some models wrap the array under an arbitrary key
        for value in data.values():
            if isinstance(value, list):
                return value
    return None


def decode_insights(text: str) -> Decoded[List[InsightCandidate]]:
    try:
        data = extract_json(text)
    except ValueError as e:
        return Decoded.failure(str(e), raw=text or "")

    items = _insight_items(data)
    if items is None:
        return Decoded.failure("Insight payload is not a JSON array", raw=text)

    insights: List[InsightCandidate] = []
    for item in items:
        try:
            insights.append(InsightCandidate.model_validate(item))
        except ValidationError as e:
            logger.debug(f"Dropping malformed insight: {e.errors()[0]['msg']}")

    if len(insights) < EXPECTED_INSIGHTS:
        return Decoded.failure(
            f"Expected {EXPECTED_INSIGHTS} insights, got {len(insights)} valid", raw=text
        )
    return Decoded.success(insights[:EXPECTED_INSIGHTS])


def decode_analysis(text: str) -> Decoded[AnalysisPayload]:
    try:
        data = extract_json(text)
    except ValueError as e:
        return Decoded.failure(str(e), raw=text or "")

    if not isinstance(data, dict):
        return Decoded.failure("Analysis payload is not a JSON object", raw=text)

    try:
        scores = ScoreSet.model_validate(data.get("scores"))
    except ValidationError as e:
        return Decoded.failure(f"Analysis scores failed validation: {e.error_count()} errors", raw=text)

    raw_items = data.get("feedback")
    feedback: List[FeedbackItem] = []
    for item in raw_items if isinstance(raw_items, list) else []:
        try:
            feedback.append(FeedbackItem.model_validate(item))
        except ValidationError as e:
            logger.debug(f"Dropping malformed feedback item: {e.errors()[0]['msg']}")

    if not feedback:
        return Decoded.failure("Analysis payload has no valid feedback items", raw=text)
    return Decoded.success(AnalysisPayload(feedback=feedback[:MAX_FEEDBACK_ITEMS], scores=scores))
