"""
Static question store

Serves questions from memory without network calls. Ships a small sample
set per sport so the game runs offline and in tests.
"""

import asyncio
import json
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..quiz.schema import Question, QuestionFormatError, parse_questions
from .base import QuestionStore, LoadFailure


SAMPLE_QUESTIONS = {
    "football": [
        {
            "id": 1,
            "question": "Which country won the 2018 FIFA World Cup?",
            "options": ["Croatia", "France", "Brazil", "Germany"],
            "answer": "France",
        },
        {
            "id": 2,
            "question": "How many players does each team have on the pitch?",
            "options": ["9", "10", "11", "12"],
            "answer": "11",
        },
        {
            "id": 3,
            "question": "Which club has won the most UEFA Champions League titles?",
            "options": ["AC Milan", "Bayern Munich", "Liverpool", "Real Madrid"],
            "answer": "Real Madrid",
        },
        {
            "id": 4,
            "question": "Who is the all-time top scorer of the Premier League?",
            "options": ["Wayne Rooney", "Alan Shearer", "Harry Kane", "Thierry Henry"],
            "answer": "Alan Shearer",
        },
        {
            "id": 5,
            "question": "How long is a regulation football match?",
            "options": ["80 minutes", "90 minutes", "100 minutes", "120 minutes"],
            "answer": "90 minutes",
        },
        {
            "id": 6,
            "question": "Which country hosted the first FIFA World Cup in 1930?",
            "options": ["Italy", "Brazil", "Uruguay", "England"],
            "answer": "Uruguay",
        },
    ],
    "cricket": [
        {
            "id": 1,
            "question": "How many balls are in a standard over?",
            "options": ["4", "5", "6", "8"],
            "answer": "6",
        },
        {
            "id": 2,
            "question": "Which country won the first Cricket World Cup in 1975?",
            "options": ["Australia", "West Indies", "England", "India"],
            "answer": "West Indies",
        },
        {
            "id": 3,
            "question": "What is the length of a cricket pitch in yards?",
            "options": ["20", "22", "24", "26"],
            "answer": "22",
        },
    ],
}


@dataclass
class StaticQuestionStore(QuestionStore):
    """
    In-memory question store.

    With shuffle=True each fetch returns a freshly shuffled copy, and
    limit caps its size, like the backend's random subset route.
    """

    questions: List[Question] = field(default_factory=list)
    shuffle: bool = False
    limit: Optional[int] = None
    delay_seconds: float = 0.0
    fail: bool = False  # Raise LoadFailure on every fetch
    rng: random.Random = field(default_factory=random.Random)
    fetch_count: int = 0

    @property
    def name(self) -> str:
        return "static"

    async def fetch(self, count: Optional[int] = None) -> List[Question]:
        """Return the stored questions."""
        self.fetch_count += 1

        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        if self.fail:
            raise LoadFailure("Simulated question store failure")

        questions = list(self.questions)
        if self.shuffle:
            self.rng.shuffle(questions)

        bound = min(x for x in (count, self.limit, len(questions)) if x is not None)
        return questions[:max(bound, 0)]

    @classmethod
    def for_sport(cls, sport: str, **kwargs) -> "StaticQuestionStore":
        """Store preloaded with the bundled sample questions for a sport."""
        records = SAMPLE_QUESTIONS.get(sport.lower(), [])
        return cls(questions=parse_questions(records), **kwargs)

    @classmethod
    def from_json_file(cls, path: Path, **kwargs) -> "StaticQuestionStore":
        """
        Load questions from a JSON file.

        Raises:
            LoadFailure: If the file is missing or malformed
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                questions = parse_questions(json.load(f))
        except (OSError, json.JSONDecodeError, QuestionFormatError) as e:
            raise LoadFailure(f"Could not load questions from {path}: {e}")
        return cls(questions=questions, **kwargs)
