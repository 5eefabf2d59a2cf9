"""
Tests for question stores.
"""

import json
import random

import httpx
import pytest

from game_guru.quiz.schema import Question
from game_guru.stores import (
    HttpQuestionStore,
    StaticQuestionStore,
    LoadFailure,
    SAMPLE_QUESTIONS,
    get_store,
)


RECORDS = [
    {"id": 1, "question": "One?", "options": ["a", "b"], "answer": "a"},
    {"id": 2, "question": "Two?", "options": ["c", "d"], "answer": "d"},
    {"id": 3, "question": "Three?", "options": ["e", "f"], "answer": "e"},
]


def make_http_store(handler, sport: str = "football") -> HttpQuestionStore:
    """HTTP store wired to an in-process transport."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpQuestionStore(sport=sport, base_url="http://quiz.test/", client=client)


class TestHttpQuestionStore:
    """Tests for HttpQuestionStore."""

    @pytest.mark.asyncio
    async def test_fetch(self):
        """Test fetching and parsing questions."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=RECORDS)

        store = make_http_store(handler)
        questions = await store.fetch()

        assert [q.id for q in questions] == [1, 2, 3]
        assert seen[0].url.path == "/football-questions"
        assert "count" not in seen[0].url.params
        await store.close()

    @pytest.mark.asyncio
    async def test_fetch_with_count(self):
        """Test the count parameter is forwarded."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=RECORDS[:2])

        store = make_http_store(handler, sport="Cricket")
        questions = await store.fetch(count=2)

        assert len(questions) == 2
        assert seen[0].url.path == "/cricket-questions"
        assert seen[0].url.params["count"] == "2"

    @pytest.mark.asyncio
    async def test_wrapped_payload(self):
        """Test an object with a questions list is accepted."""
        store = make_http_store(lambda request: httpx.Response(200, json={"questions": RECORDS}))

        questions = await store.fetch()

        assert len(questions) == 3

    @pytest.mark.asyncio
    async def test_server_error(self):
        """Test HTTP errors become LoadFailure."""
        store = make_http_store(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(LoadFailure, match="500"):
            await store.fetch()

    @pytest.mark.asyncio
    async def test_unreachable(self):
        """Test transport errors become LoadFailure."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        store = make_http_store(handler)

        with pytest.raises(LoadFailure, match="unreachable"):
            await store.fetch()

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        """Test a non-JSON body becomes LoadFailure."""
        store = make_http_store(lambda request: httpx.Response(200, content=b"<html>"))

        with pytest.raises(LoadFailure, match="invalid JSON"):
            await store.fetch()

    @pytest.mark.asyncio
    async def test_malformed_question(self):
        """Test a record whose answer is not an option becomes LoadFailure."""
        bad = [{"id": 1, "question": "Q", "options": ["a"], "answer": "z"}]
        store = make_http_store(lambda request: httpx.Response(200, json=bad))

        with pytest.raises(LoadFailure, match="Malformed"):
            await store.fetch()

    @pytest.mark.asyncio
    async def test_unhashable_id(self):
        """Test a list-valued id becomes LoadFailure."""
        bad = [{"id": [1], "question": "Q", "options": ["a", "b"], "answer": "a"}]
        store = make_http_store(lambda request: httpx.Response(200, json=bad))

        with pytest.raises(LoadFailure, match="Malformed"):
            await store.fetch()

    def test_url(self):
        """Test route construction."""
        store = HttpQuestionStore(sport="Football", base_url="http://quiz.test/")

        assert store.url == "http://quiz.test/football-questions"
        assert store.name == "http"


class TestStaticQuestionStore:
    """Tests for StaticQuestionStore."""

    @pytest.mark.asyncio
    async def test_fetch_returns_copy_in_order(self):
        """Test questions come back in stored order."""
        store = StaticQuestionStore.for_sport("football")
        questions = await store.fetch()

        assert [q.id for q in questions] == [r["id"] for r in SAMPLE_QUESTIONS["football"]]
        questions.clear()
        assert len(await store.fetch()) == len(SAMPLE_QUESTIONS["football"])

    @pytest.mark.asyncio
    async def test_count_and_limit(self):
        """Test count and limit both bound the result."""
        store = StaticQuestionStore.for_sport("football", limit=4)

        assert len(await store.fetch()) == 4
        assert len(await store.fetch(count=2)) == 2
        assert len(await store.fetch(count=10)) == 4

    @pytest.mark.asyncio
    async def test_shuffle_subset(self):
        """Test shuffled fetches draw from the full set."""
        store = StaticQuestionStore.for_sport("football", shuffle=True, rng=random.Random(3))
        all_ids = {r["id"] for r in SAMPLE_QUESTIONS["football"]}

        for _ in range(5):
            questions = await store.fetch(count=3)
            assert len(questions) == 3
            assert {q.id for q in questions} <= all_ids

    @pytest.mark.asyncio
    async def test_simulated_failure(self):
        """Test simulated failures."""
        store = StaticQuestionStore.for_sport("football", fail=True)

        with pytest.raises(LoadFailure):
            await store.fetch()
        assert store.fetch_count == 1

    @pytest.mark.asyncio
    async def test_unknown_sport_is_empty(self):
        """Test a sport without samples yields no questions."""
        store = StaticQuestionStore.for_sport("curling")

        assert await store.fetch() == []

    @pytest.mark.asyncio
    async def test_from_json_file(self, tmp_path):
        """Test loading questions from disk."""
        path = tmp_path / "questions.json"
        path.write_text(json.dumps(RECORDS), encoding="utf-8")

        store = StaticQuestionStore.from_json_file(path)
        questions = await store.fetch()

        assert all(isinstance(q, Question) for q in questions)
        assert len(questions) == 3

    def test_from_missing_file(self, tmp_path):
        """Test a missing file raises LoadFailure."""
        with pytest.raises(LoadFailure, match="Could not load"):
            StaticQuestionStore.from_json_file(tmp_path / "nope.json")


class TestGetStore:
    """Tests for the store factory."""

    def test_static(self):
        """Test building a static store."""
        store = get_store("static", sport="cricket")

        assert isinstance(store, StaticQuestionStore)
        assert len(store.questions) == len(SAMPLE_QUESTIONS["cricket"])

    def test_http(self):
        """Test building an HTTP store."""
        store = get_store("http", sport="football", base_url="http://quiz.test")

        assert isinstance(store, HttpQuestionStore)

    def test_unknown(self):
        """Test unknown store names are rejected."""
        with pytest.raises(ValueError, match="Unknown store"):
            get_store("mongo")
