"""
Sport catalog

The sports offered on the home screen, and the end-of-game verdict.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Sport:
    """A sport with its own question set."""
    key: str
    name: str
    icon: str
    description: str
    available: bool = False

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "name": self.name,
            "icon": self.icon,
            "description": self.description,
            "available": self.available,
        }


SPORTS = [
    Sport("football", "Football", "star", "The world's most popular sport", available=True),
    Sport("cricket", "Cricket", "heart", "A bat-and-ball game played between two teams"),
    Sport("tennis", "Tennis", "check", "A racket sport played individually or in pairs"),
    Sport("basketball", "Basketball", "plus", "A team sport played on a rectangular court"),
]


def get_sport(key: str) -> Optional[Sport]:
    """Look up a sport by key, case-insensitive."""
    key = key.lower()
    for sport in SPORTS:
        if sport.key == key:
            return sport
    return None


def verdict(score: int, sport: str = "football") -> str:
    """Closing message for a finished play-through."""
    if score > 5:
        return f"Great job! You're a {sport.lower()} expert!"
    if score > 2:
        return "Good effort! Keep learning!"
    return "Keep practicing to improve your knowledge!"
