"""
Quiz records for game-guru
"""

from .schema import Question, QuestionFormatError, parse_questions

__all__ = [
    "Question",
    "QuestionFormatError",
    "parse_questions",
]
