import pytest

from resume_feedback.schemas.analysis import ScoreSet, letter_grade
from resume_feedback.services.fallback import fallback_feedback, fallback_insights, fallback_scores


@pytest.mark.parametrize("overall, grade", [
    (0.95, "A+"), (0.9, "A+"), (0.85, "A"), (0.72, "B"), (0.6, "C"), (0.55, "D"), (0.2, "F"),
])
def test_letter_grade(overall, grade):
    assert letter_grade(overall) == grade


def test_score_set_accepts_both_key_styles():
    short = ScoreSet(overall=0.5, content=0.5, formatting=0.5, impact=0.5, ats=0.5)
    long = ScoreSet.model_validate({
        "overall_score": 0.5, "content_score": 0.5, "formatting_score": 0.5,
        "impact_score": 0.5, "ats_score": 0.5,
    })
    assert short == long
    assert set(long.model_dump()) == {"overall", "content", "formatting", "impact", "ats"}


def test_fallback_payloads_are_fixed():
    assert len(fallback_insights()) == 10
    assert len(fallback_feedback()) == 10
    assert fallback_scores().model_dump() == {
        "overall": 0.72, "content": 0.68, "formatting": 0.85, "impact": 0.55, "ats": 0.65,
    }
    assert fallback_insights() == fallback_insights()


def test_fallback_copies_are_independent():
    first = fallback_feedback()
    first[0].title = "changed"
    assert fallback_feedback()[0].title == "Add Quantifiable Achievements"
