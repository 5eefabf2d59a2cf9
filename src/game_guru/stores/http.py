"""
HTTP question store

Reads questions from the quiz backend's `/{sport}-questions` route.
"""

import logging
from typing import List, Optional

import httpx

from ..config import config
from ..quiz.schema import Question, QuestionFormatError, parse_questions
from .base import QuestionStore, LoadFailure

logger = logging.getLogger(__name__)


class HttpQuestionStore(QuestionStore):
    """
    Question store backed by the quiz REST API.

    Base URL is read from:
    1. Constructor argument
    2. GAME_GURU_API_URL environment variable (via config)
    """

    def __init__(
        self,
        sport: str = "football",
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize HTTP store.

        Args:
            sport: Sport whose question route to read
            base_url: API base URL (falls back to config)
            timeout: Request timeout in seconds
            client: Pre-built client, mostly for tests
        """
        self.sport = sport.lower()
        self._base_url = (base_url or config.store.api_base_url).rstrip("/")
        self._timeout = timeout or config.store.timeout_seconds
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        """Lazy initialization of HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        return self._client

    @property
    def name(self) -> str:
        return "http"

    @property
    def url(self) -> str:
        return f"{self._base_url}/{self.sport}-questions"

    async def fetch(self, count: Optional[int] = None) -> List[Question]:
        """Fetch questions from the backend."""
        client = self._get_client()
        params = {"count": count} if count is not None else None

        try:
            response = await client.get(self.url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise LoadFailure(f"Question API returned {e.response.status_code}: {e}")
        except httpx.HTTPError as e:
            raise LoadFailure(f"Question API unreachable: {e}")
        except ValueError as e:
            raise LoadFailure(f"Question API returned invalid JSON: {e}")

        try:
            questions = parse_questions(payload)
        except QuestionFormatError as e:
            raise LoadFailure(f"Malformed question data: {e}")

        logger.debug(f"Fetched {len(questions)} {self.sport} questions from {self.url}")
        return questions

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
