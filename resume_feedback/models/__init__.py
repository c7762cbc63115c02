# Importing modules here ensures they are registered with SQLAlchemy Base
from . import resume, insight, feedback, score

from .resume import Resume
from .insight import RedditInsight
from .feedback import ResumeFeedback
from .score import ResumeScore

__all__ = [
    "Resume",
    "RedditInsight",
    "ResumeFeedback",
    "ResumeScore",
]
