"""
Base protocol for question stores

Defines the interface every question source must implement.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..quiz.schema import Question


class QuestionStoreError(Exception):
    """Base exception for question store errors."""
    pass


class LoadFailure(QuestionStoreError):
    """Store unreachable, or it returned malformed data."""
    pass


class QuestionStore(ABC):
    """
    Abstract base class for question stores.

    A store hands out read-only questions. Responses are not guaranteed to be
    stable between calls: some stores return a shuffled, size-limited subset
    each time.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Store name (e.g., 'http', 'static')."""
        pass

    @abstractmethod
    async def fetch(self, count: Optional[int] = None) -> List[Question]:
        """
        Fetch the question sequence.

        Args:
            count: Optional upper bound on the number of questions

        Returns:
            Ordered list of questions (may be empty)

        Raises:
            LoadFailure: When the store is unreachable or the payload is malformed
        """
        pass

    async def close(self):
        """Release any held resources."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
