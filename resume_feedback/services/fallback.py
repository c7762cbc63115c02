"""
Static sample data used whenever live collection or inference is unavailable.

The lists are fixed and topic-independent so an unconfigured deployment still
renders a complete dashboard. Callers receive fresh copies.
"""
from typing import List

from resume_feedback.schemas.analysis import FeedbackItem, ScoreSet
from resume_feedback.schemas.insight import InsightCandidate

# Topic used to seed the corpus when every configured community came back empty
SYNTHETIC_TOPIC = "resume_tips"

_FALLBACK_INSIGHTS = [
    {
        "insight": "Use quantifiable achievements in your work experience section rather than just listing job duties",
        "section": "Work Experience",
        "category": "Impact Statements",
        "sentiment": "positive",
    },
    {
        "insight": "Keep your resume to one page if you have less than 10 years of experience",
        "section": "Format",
        "category": "Content Quality",
        "sentiment": "neutral",
    },
    {
        "insight": "Include relevant keywords from the job description to pass ATS filters",
        "section": "General",
        "category": "ATS Optimization",
        "sentiment": "positive",
    },
    {
        "insight": "Remove the objective statement and replace it with a professional summary",
        "section": "Summary",
        "category": "Content Quality",
        "sentiment": "negative",
    },
    {
        "insight": "Use bullet points instead of paragraphs for better readability",
        "section": "Format",
        "category": "Formatting",
        "sentiment": "positive",
    },
    {
        "insight": "Start every bullet point with a strong action verb",
        "section": "Work Experience",
        "category": "Impact Statements",
        "sentiment": "positive",
    },
    {
        "insight": "Avoid tables, text boxes and images because many ATS parsers cannot read them",
        "section": "Format",
        "category": "ATS Optimization",
        "sentiment": "negative",
    },
    {
        "insight": "List technical skills grouped by category instead of one long comma separated line",
        "section": "Skills",
        "category": "Formatting",
        "sentiment": "neutral",
    },
    {
        "insight": "Move education below experience once you have a few years of professional work",
        "section": "Education",
        "category": "Content Quality",
        "sentiment": "neutral",
    },
    {
        "insight": "Tailor your resume for each application instead of sending the same generic version",
        "section": "General",
        "category": "Content Quality",
        "sentiment": "positive",
    },
]

_FALLBACK_FEEDBACK = [
    {
        "type": "improvement",
        "title": "Add Quantifiable Achievements",
        "section": "Work Experience",
        "description": "Your work experience section lists job duties but lacks measurable achievements. Add metrics and results to demonstrate your impact.",
        "source": "resumes",
    },
    {
        "type": "strength",
        "title": "Clean Formatting",
        "section": "Format",
        "description": "Your resume has a clean, professional layout that makes good use of whitespace and is easy to scan.",
        "source": "Resume",
    },
    {
        "type": "warning",
        "title": "Missing Keywords",
        "section": "Skills",
        "description": "Your resume may not pass ATS filters. Include more industry-specific keywords relevant to your target roles.",
        "source": "jobs",
    },
    {
        "type": "suggestion",
        "title": "Upgrade Your Summary",
        "section": "Summary",
        "description": "Replace your objective statement with a professional summary that highlights your unique value proposition.",
        "source": "Resume",
    },
    {
        "type": "improvement",
        "title": "Use Bullet Points",
        "section": "Work Experience",
        "description": "Convert paragraph descriptions to bullet points to improve readability and make your achievements stand out.",
        "source": "resumes",
    },
    {
        "type": "insight",
        "title": "Education Section Placement",
        "section": "Education",
        "description": "If you're an experienced professional, move your education section below your work experience to emphasize your career achievements.",
        "source": "jobs",
    },
    {
        "type": "suggestion",
        "title": "Remove References",
        "section": "General",
        "description": "Remove 'References available upon request' to save space. Employers will ask for references if needed.",
        "source": "resumes",
    },
    {
        "type": "improvement",
        "title": "Action Verbs",
        "section": "Work Experience",
        "description": "Start each bullet point with strong action verbs in the past tense for previous positions and present tense for current roles.",
        "source": "Resume",
    },
    {
        "type": "warning",
        "title": "Too Much Personal Information",
        "section": "Contact",
        "description": "Remove personal details like age, marital status, or photos to avoid potential discrimination issues.",
        "source": "jobs",
    },
    {
        "type": "strength",
        "title": "Consistent Formatting",
        "section": "Format",
        "description": "Your resume maintains consistent formatting throughout, which creates a professional appearance.",
        "source": "resumes",
    },
]

_FALLBACK_SCORES = {
    "overall": 0.72,
    "content": 0.68,
    "formatting": 0.85,
    "impact": 0.55,
    "ats": 0.65,
}


def fallback_insights() -> List[InsightCandidate]:
    return [InsightCandidate(**item) for item in _FALLBACK_INSIGHTS]


def fallback_feedback() -> List[FeedbackItem]:
    return [FeedbackItem(**item) for item in _FALLBACK_FEEDBACK]


def fallback_scores() -> ScoreSet:
    return ScoreSet(**_FALLBACK_SCORES)
