"""Chat-completion providers and the ordered fallback chain over them."""
import logging
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, TypeVar

import requests
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from resume_feedback.core.config import AISettings
from resume_feedback.core.exceptions import PayloadParseError, ProviderError
from resume_feedback.services.payload import Decoded

logger = logging.getLogger(__name__)

PERPLEXITY_URL = "https://api.perplexity.ai/chat/completions"
GROQ_URL = "https://api.groq.com/openai/v1/chat/completions"

T = TypeVar("T")

# Only transport failures are retried; HTTP errors move on to the next provider
_TRANSIENT = (requests.exceptions.ConnectionError, requests.exceptions.Timeout)


class ChatProvider:
    """One OpenAI-compatible chat endpoint (Perplexity and Groq share the shape)."""

    def __init__(
        self,
        name: str,
        url: str,
        api_key: Optional[str],
        model: str,
        temperature: float = 0.7,
        timeout: float = 30,
        max_attempts: int = 2,
        session: Optional[requests.Session] = None,
    ):
        self.name = name
        self.url = url
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _post(self, payload: dict) -> requests.Response:
        for attempt in Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=8),
            retry=retry_if_exception_type(_TRANSIENT),
            reraise=True,
        ):
            with attempt:
                return self.session.post(
                    self.url,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                    timeout=self.timeout,
                )

    def complete(self, system: str, user: str, max_tokens: int) -> str:
        """
        Send one chat request and return the first message's text.

        Raises:
            ProviderError: missing key, transport failure, non-2xx, or an
                unexpected response envelope.
        """
        if not self.configured:
            raise ProviderError(self.name, "API key is not configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": self.temperature,
            "max_tokens": max_tokens,
        }
        logger.info(f"Calling {self.name} model {self.model}")

        try:
            response = self._post(payload)
        except requests.exceptions.Timeout:
            raise ProviderError(self.name, f"timed out after {self.timeout}s")
        except requests.exceptions.RequestException as e:
            raise ProviderError(self.name, f"request failed: {e}")

        if not 200 <= response.status_code < 300:
            logger.error(f"{self.name} API error ({response.status_code}): {response.text[:300]}")
            raise ProviderError(self.name, f"API error: {response.status_code}")

        try:
            return response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError):
            raise ProviderError(self.name, "response envelope missing choices[0].message.content")


def select_providers(ai: AISettings, session: Optional[requests.Session] = None) -> List[ChatProvider]:
    """Primary (Perplexity) then secondary (Groq), keeping only configured ones."""
    common = dict(
        temperature=ai.temperature,
        timeout=ai.timeout_seconds,
        max_attempts=ai.max_attempts,
        session=session,
    )
    providers = [
        ChatProvider("perplexity", PERPLEXITY_URL, ai.perplexity_api_key, ai.perplexity_model, **common),
        ChatProvider("groq", GROQ_URL, ai.groq_api_key, ai.groq_model, **common),
    ]
    return [p for p in providers if p.configured]


@dataclass
class ChainResult(Generic[T]):
    value: T
    provider: str


def run_provider_chain(
    providers: List[ChatProvider],
    system: str,
    user: str,
    max_tokens: int,
    decode: Callable[[str], Decoded[T]],
) -> Optional[ChainResult[T]]:
    """
    Try each provider in order until one returns a payload that decodes.

    Provider failures and decode failures are treated alike: logged, then the
    next provider is tried. Returns None when every provider is exhausted.
    """
    for provider in providers:
        try:
            text = provider.complete(system, user, max_tokens)
        except ProviderError as e:
            logger.warning(f"Provider {provider.name} unavailable: {e.message}")
            continue

        decoded = decode(text)
        if decoded.ok:
            return ChainResult(value=decoded.value, provider=provider.name)

        err: PayloadParseError = decoded.error
        logger.warning(f"Provider {provider.name} returned unparseable payload: {err.message}")
        logger.debug(f"Raw content: {err.raw}")

    return None
