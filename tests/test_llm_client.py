import pytest
import requests

from resume_feedback.core.config import AISettings
from resume_feedback.core.exceptions import ProviderError
from resume_feedback.services.llm_client import (
    GROQ_URL, PERPLEXITY_URL, ChatProvider, run_provider_chain, select_providers
)
from resume_feedback.services.payload import decode_analysis

from fakes import FakeResponse, FakeSession, analysis_json, chat_response


def _provider(name, session, api_key="key", max_attempts=1):
    url = PERPLEXITY_URL if name == "perplexity" else GROQ_URL
    return ChatProvider(name, url, api_key, f"{name}-model", max_attempts=max_attempts, session=session)


class TestChatProvider:
    def test_request_shape(self):
        session = FakeSession({"perplexity": chat_response("hello")})
        provider = _provider("perplexity", session)

        assert provider.complete("sys", "user", max_tokens=2048) == "hello"

        method, url, kwargs = session.calls[0]
        assert method == "POST"
        assert url == PERPLEXITY_URL
        assert kwargs["headers"]["Authorization"] == "Bearer key"
        assert kwargs["json"]["temperature"] == 0.7
        assert kwargs["json"]["max_tokens"] == 2048
        assert kwargs["json"]["messages"][0] == {"role": "system", "content": "sys"}
        assert kwargs["json"]["messages"][1] == {"role": "user", "content": "user"}
        assert kwargs["timeout"] == 30

    def test_missing_key_raises_without_network(self):
        session = FakeSession()
        provider = _provider("groq", session, api_key=None)
        with pytest.raises(ProviderError, match="not configured"):
            provider.complete("sys", "user", 100)
        assert session.calls == []

    def test_non_2xx_raises(self):
        session = FakeSession({"groq": FakeResponse(429, text="slow down")})
        with pytest.raises(ProviderError, match="429"):
            _provider("groq", session).complete("sys", "user", 100)

    def test_bad_envelope_raises(self):
        session = FakeSession({"groq": FakeResponse(200, {"unexpected": True})})
        with pytest.raises(ProviderError, match="envelope"):
            _provider("groq", session).complete("sys", "user", 100)

    def test_timeout_raises_provider_error(self):
        session = FakeSession({"groq": requests.exceptions.Timeout("read timeout")})
        with pytest.raises(ProviderError, match="timed out"):
            _provider("groq", session).complete("sys", "user", 100)

    def test_connection_errors_are_retried(self):
        session = FakeSession({"groq": requests.exceptions.ConnectionError("refused")})
        with pytest.raises(ProviderError):
            _provider("groq", session, max_attempts=2).complete("sys", "user", 100)
        assert len(session.calls) == 2


class TestSelectProviders:
    def test_no_keys_means_no_providers(self):
        assert select_providers(AISettings(perplexity_api_key=None, groq_api_key=None)) == []

    def test_order_is_primary_then_secondary(self):
        providers = select_providers(AISettings(perplexity_api_key="p", groq_api_key="g"))
        assert [p.name for p in providers] == ["perplexity", "groq"]

    def test_secondary_only(self):
        providers = select_providers(AISettings(perplexity_api_key=None, groq_api_key="g"))
        assert [p.name for p in providers] == ["groq"]


class TestProviderChain:
    def test_primary_failure_falls_through_to_secondary(self):
        session = FakeSession({
            "perplexity": FakeResponse(500, text="boom"),
            "groq": chat_response(analysis_json(overall=0.9)),
        })
        providers = [_provider("perplexity", session), _provider("groq", session)]

        result = run_provider_chain(providers, "sys", "user", 100, decode_analysis)

        assert result.provider == "groq"
        assert result.value.scores.overall == pytest.approx(0.9)

    def test_unparseable_primary_output_falls_through(self):
        session = FakeSession({
            "perplexity": chat_response("Here is my analysis: it is good."),
            "groq": chat_response(analysis_json()),
        })
        providers = [_provider("perplexity", session), _provider("groq", session)]

        result = run_provider_chain(providers, "sys", "user", 100, decode_analysis)

        assert result.provider == "groq"
        assert len(session.calls) == 2

    def test_primary_success_skips_secondary(self):
        session = FakeSession({
            "perplexity": chat_response(analysis_json()),
            "groq": chat_response(analysis_json()),
        })
        providers = [_provider("perplexity", session), _provider("groq", session)]

        result = run_provider_chain(providers, "sys", "user", 100, decode_analysis)

        assert result.provider == "perplexity"
        assert session.calls_to("groq") == []

    def test_exhausted_chain_returns_none(self):
        session = FakeSession({
            "perplexity": FakeResponse(503, text="down"),
            "groq": chat_response("not json"),
        })
        providers = [_provider("perplexity", session), _provider("groq", session)]
        assert run_provider_chain(providers, "sys", "user", 100, decode_analysis) is None

    def test_empty_chain_returns_none(self):
        assert run_provider_chain([], "sys", "user", 100, decode_analysis) is None
