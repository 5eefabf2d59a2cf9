"""
Question stores for game-guru

Stores share a common interface so the engine never knows where questions come from.
Stores: HTTP (quiz backend), static (in-memory / JSON file)
"""

from .base import QuestionStore, QuestionStoreError, LoadFailure
from .http import HttpQuestionStore
from .static import StaticQuestionStore, SAMPLE_QUESTIONS

__all__ = [
    "QuestionStore",
    "QuestionStoreError",
    "LoadFailure",
    "HttpQuestionStore",
    "StaticQuestionStore",
    "SAMPLE_QUESTIONS",
]


def get_store(name: str, sport: str = "football", **kwargs) -> QuestionStore:
    """
    Factory function to get a question store by name.

    Args:
        name: Store name ('http', 'static')
        sport: Sport whose questions to serve
        **kwargs: Store-specific options

    Returns:
        Configured QuestionStore instance

    Raises:
        ValueError: If store name is unknown
    """
    if name == "http":
        return HttpQuestionStore(sport=sport, **kwargs)
    if name == "static":
        return StaticQuestionStore.for_sport(sport, **kwargs)

    raise ValueError(f"Unknown store: {name}. Valid options: ['http', 'static']")
