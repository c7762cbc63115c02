import json

import pytest

from resume_feedback.core.config import AISettings
from resume_feedback.schemas.insight import InsightCandidate
from resume_feedback.services.fallback import fallback_feedback
from resume_feedback.services.llm_client import GROQ_URL, PERPLEXITY_URL, ChatProvider
from resume_feedback.services.resume_analyzer import ResumeAnalyzer, format_insights

from fakes import FakeResponse, FakeSession, analysis_json, chat_response

CORPUS = [
    InsightCandidate(insight="Quantify achievements", section="Work Experience",
                     category="Impact Statements", sentiment="positive"),
    InsightCandidate(insight="Drop the objective", section="Summary",
                     category="Content Quality", sentiment="negative"),
]

FALLBACK_SCORES = {"overall": 0.72, "content": 0.68, "formatting": 0.85, "impact": 0.55, "ats": 0.65}


def _providers(session):
    return [
        ChatProvider("perplexity", PERPLEXITY_URL, "pk", "p-model", max_attempts=1, session=session),
        ChatProvider("groq", GROQ_URL, "gk", "g-model", max_attempts=1, session=session),
    ]


def test_empty_corpus_returns_fixed_fallback(resume_text):
    session = FakeSession()
    result = ResumeAnalyzer(_providers(session), AISettings()).analyze(resume_text, [])

    assert result.mock is True
    assert result.scores.model_dump() == FALLBACK_SCORES
    assert result.feedback == fallback_feedback()
    assert len(result.feedback) == 10
    assert session.calls == []


def test_no_providers_returns_fixed_fallback(resume_text):
    result = ResumeAnalyzer([], AISettings()).analyze(resume_text, CORPUS)
    assert result.mock is True
    assert result.scores.model_dump() == FALLBACK_SCORES


def test_failing_primary_uses_secondary(resume_text):
    session = FakeSession({
        "perplexity": FakeResponse(502, text="bad gateway"),
        "groq": chat_response(analysis_json(overall=0.64, title="Groq")),
    })
    result = ResumeAnalyzer(_providers(session), AISettings()).analyze(resume_text, CORPUS)

    assert result.mock is False
    assert result.provider == "groq"
    assert result.scores.overall == pytest.approx(0.64)
    assert result.feedback[0].title == "Groq 0"


def test_all_providers_failing_returns_fixed_fallback(resume_text):
    session = FakeSession({
        "perplexity": chat_response("{not json"),
        "groq": FakeResponse(500, text="down"),
    })
    result = ResumeAnalyzer(_providers(session), AISettings()).analyze(resume_text, CORPUS)
    assert result.mock is True
    assert result.scores.model_dump() == FALLBACK_SCORES


def test_scores_within_unit_range(resume_text):
    session = FakeSession({"perplexity": chat_response(analysis_json(overall=1.0))})
    result = ResumeAnalyzer(_providers(session), AISettings()).analyze(resume_text, CORPUS)
    for value in result.scores.model_dump().values():
        assert 0.0 <= value <= 1.0


def test_prompt_contains_resume_and_bulleted_insights(resume_text):
    session = FakeSession({"perplexity": chat_response(analysis_json())})
    ResumeAnalyzer(_providers(session), AISettings()).analyze(resume_text, CORPUS)

    user_message = session.calls[0][2]["json"]["messages"][1]["content"]
    assert resume_text in user_message
    assert format_insights(CORPUS) in user_message
    assert session.calls[0][2]["json"]["max_tokens"] == 4096


def test_format_insights():
    text = format_insights(CORPUS)
    assert text.splitlines()[0] == (
        '- Section: Work Experience, Category: Impact Statements, '
        'Insight: "Quantify achievements", Sentiment: positive'
    )
    assert len(text.splitlines()) == 2


def test_one_untitled_item_keeps_provider_answer(resume_text):
    reply = json.loads(analysis_json(overall=0.9, title="Perplexity"))
    reply["feedback"][9]["title"] = ""
    session = FakeSession({"perplexity": chat_response(json.dumps(reply))})
    result = ResumeAnalyzer(_providers(session), AISettings()).analyze(resume_text, CORPUS)

    assert result.mock is False
    assert result.provider == "perplexity"
    assert len(result.feedback) == 9
    assert result.scores.overall == pytest.approx(0.9)
