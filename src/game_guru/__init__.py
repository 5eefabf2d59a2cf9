"""
game-guru: sports trivia quiz engine with on-chain score minting.

Answer until the first miss; the final score is minted as a chain artifact.
"""

__version__ = "0.1.0"

from .catalog import SPORTS, Sport, get_sport, verdict
from .config import config
from .engine import (
    QuizEngine,
    QuestionPool,
    Session,
    EngineStatus,
    MintStatus,
)
from .quiz.schema import Question, QuestionFormatError

__all__ = [
    # Engine
    "QuizEngine",
    "QuestionPool",
    "Session",
    "EngineStatus",
    "MintStatus",
    # Questions
    "Question",
    "QuestionFormatError",
    # Catalog
    "SPORTS",
    "Sport",
    "get_sport",
    "verdict",
    # Config
    "config",
]
