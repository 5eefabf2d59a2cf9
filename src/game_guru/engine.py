"""
Quiz Engine

Owns one play-through of the quiz:
1. Loading the question pool from a store
2. Drawing questions without repeats inside a cycle
3. Scoring answers until the first miss
4. Emitting a mint command when the game ends, and tracking its outcome

Every user action is a plain method. Actions that don't apply in the current
state are ignored and return False.
"""

import logging
import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from .config import config
from .quiz.schema import Question
from .stores.base import QuestionStore, QuestionStoreError
from .minting.base import MintDispatcher, MintRequest, MintResult, MintReceipt

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_play_id() -> str:
    return uuid.uuid4().hex


class EngineStatus(str, Enum):
    """What the presentation layer should show."""
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"
    GAME_OVER = "game_over"


class MintStatus(str, Enum):
    """Progress of the score mint for a play-through."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass
class QuestionPool:
    """All fetched questions plus the ids shown in the current cycle."""
    all: list[Question] = field(default_factory=list)
    used: set = field(default_factory=set)

    @property
    def size(self) -> int:
        return len(self.all)

    @property
    def is_empty(self) -> bool:
        return not self.all

    def reset(self):
        """Start a new cycle."""
        self.used.clear()

    def draw_first(self, rng: random.Random) -> Question:
        """Pick the opening question and start a fresh cycle with it."""
        question = rng.choice(self.all)
        self.used = {question.id}
        return question

    def draw_next(self, rng: random.Random) -> Question:
        """
        Pick a question not yet shown this cycle.

        Once every question has been shown the cycle starts over, so the
        question just answered may come straight back.
        """
        if len(self.used) >= len(self.all):
            self.reset()

        available = [q for q in self.all if q.id not in self.used]
        if not available:
            available = list(self.all)

        question = rng.choice(available)
        self.used.add(question.id)
        return question


@dataclass
class Session:
    """State of one play-through."""
    play_id: str = field(default_factory=new_play_id)
    current_question: Optional[Question] = None
    selected_option: Optional[int] = None
    is_answered: bool = False
    is_correct: bool = False
    score: int = 0
    is_game_over: bool = False
    questions_answered: int = 0
    mint_status: MintStatus = MintStatus.NOT_STARTED
    mint_error: Optional[str] = None
    mint_receipt: Optional[MintReceipt] = None
    started_at: str = field(default_factory=_now)
    finished_at: Optional[str] = None

    @property
    def can_retry_mint(self) -> bool:
        return self.is_game_over and self.mint_status == MintStatus.FAILED

    def to_dict(self) -> dict:
        return {
            "play_id": self.play_id,
            "current_question": self.current_question.to_dict() if self.current_question else None,
            "selected_option": self.selected_option,
            "is_answered": self.is_answered,
            "is_correct": self.is_correct,
            "score": self.score,
            "is_game_over": self.is_game_over,
            "questions_answered": self.questions_answered,
            "mint_status": self.mint_status.value,
            "mint_error": self.mint_error,
            "mint_tx_hash": self.mint_receipt.tx_hash if self.mint_receipt else None,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
        }


class QuizEngine:
    """
    State machine for a quiz play-through.

    Collaborators are injected: the question store, the mint dispatcher and
    the random source. Without a dispatcher the game still ends normally but
    nothing is minted.
    """

    def __init__(
        self,
        store: QuestionStore,
        dispatcher: Optional[MintDispatcher] = None,
        rng: Optional[random.Random] = None,
        wallet_address: Optional[str] = None,
        sport: Optional[str] = None,
        question_count: Optional[int] = None,
    ):
        """
        Initialize engine.

        Args:
            store: Where questions come from
            dispatcher: Receives the mint command when the game ends
            rng: Random source for question draws (seed it for reproducible games)
            wallet_address: Wallet credited with the minted score
            sport: Sport label recorded in mint metadata
            question_count: Size hint passed to the store on fetch
        """
        self.store = store
        self.dispatcher = dispatcher
        self.rng = rng or random.Random(config.game.seed)
        self.wallet_address = wallet_address if wallet_address is not None else config.game.wallet_address
        self.sport = sport or config.game.default_sport
        self.question_count = question_count if question_count is not None else config.store.question_count

        self.pool = QuestionPool()
        self.session = Session()
        self.error: Optional[str] = None
        self._status = EngineStatus.LOADING
        self._loading = False

    @property
    def status(self) -> EngineStatus:
        if self._status == EngineStatus.READY and self.session.is_game_over:
            return EngineStatus.GAME_OVER
        return self._status

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load_questions(self) -> bool:
        """
        Fetch the question pool and open the first question.

        Valid before the first load and after a failed one. A failure leaves
        the engine in ERROR until this is called again.

        Returns:
            True if the engine is READY afterwards
        """
        if self._loading:
            return self._ignored("load_questions", "load already in progress")
        if self._status not in (EngineStatus.LOADING, EngineStatus.ERROR):
            return self._ignored("load_questions", "questions already loaded; use restart()")
        return await self._load()

    async def _load(self) -> bool:
        self._loading = True
        self._status = EngineStatus.LOADING
        self.error = None

        try:
            questions = await self.store.fetch(self.question_count)
        except QuestionStoreError as e:
            return self._fail_load(f"Failed to load questions. Please try again later. ({e})")
        finally:
            self._loading = False

        if not questions:
            return self._fail_load("No questions available.")

        self.pool = QuestionPool(all=list(questions))
        self.session = Session(current_question=self.pool.draw_first(self.rng))
        self._status = EngineStatus.READY

        logger.info(
            f"Loaded {self.pool.size} questions from {self.store.name} store, play {self.session.play_id}",
            extra={
                'event_type': 'questions_loaded',
                'play_id': self.session.play_id,
                'pool_size': self.pool.size,
            }
        )
        return True

    def _fail_load(self, message: str) -> bool:
        logger.warning(f"Question load failed: {message}")
        self.pool = QuestionPool()
        self.session = Session()
        self.error = message
        self._status = EngineStatus.ERROR
        return False

    # ------------------------------------------------------------------
    # Answering
    # ------------------------------------------------------------------

    def select_option(self, index: int) -> bool:
        """Highlight an option. Ignored once the answer is submitted."""
        session = self.session
        if session.current_question is None:
            return self._ignored("select_option", "no current question")
        if session.is_answered:
            return self._ignored("select_option", "question already answered")
        if not 0 <= index < len(session.current_question.options):
            return self._ignored("select_option", f"option {index} out of range")

        session.selected_option = index
        return True

    def submit_answer(self) -> bool:
        """
        Lock in the selected option.

        A correct answer adds a point. A wrong one ends the game and sends
        the mint command.
        """
        session = self.session
        if session.current_question is None:
            return self._ignored("submit_answer", "no current question")
        if session.is_answered:
            return self._ignored("submit_answer", "already submitted")
        if session.selected_option is None:
            return self._ignored("submit_answer", "no option selected")

        correct = session.current_question.is_correct(session.selected_option)
        session.is_answered = True
        session.is_correct = correct
        session.questions_answered += 1

        if correct:
            session.score += 1
            logger.debug(f"Play {session.play_id}: correct, score {session.score}")
        else:
            session.is_game_over = True
            session.finished_at = _now()
            logger.info(
                f"Play {session.play_id}: game over with score {session.score}",
                extra={
                    'event_type': 'game_over',
                    'play_id': session.play_id,
                    'score': session.score,
                }
            )
            self._dispatch_mint()

        return True

    def next_question(self) -> bool:
        """Move on after a correct answer."""
        session = self.session
        if not session.is_answered or not session.is_correct or session.is_game_over:
            return self._ignored("next_question", "no correct answer to move on from")
        if self.pool.is_empty:
            return self._ignored("next_question", "question pool is empty")

        session.current_question = self.pool.draw_next(self.rng)
        session.selected_option = None
        session.is_answered = False
        session.is_correct = False
        return True

    async def restart(self) -> bool:
        """
        Start a new play-through.

        Reuses the loaded pool when there is one, otherwise loads it. A mint
        still running for the previous play-through is left alone; its result
        will not touch the new session.
        """
        if self._loading:
            return self._ignored("restart", "load in progress")
        if self.pool.is_empty:
            return await self._load()

        previous = self.session
        self.pool.reset()
        self.session = Session(current_question=self.pool.draw_first(self.rng))
        self._status = EngineStatus.READY

        if previous.mint_status == MintStatus.IN_PROGRESS:
            logger.info(f"Restarted while mint for play {previous.play_id} is pending; detaching")
        return True

    # ------------------------------------------------------------------
    # Minting
    # ------------------------------------------------------------------

    def mint_request(self) -> MintRequest:
        """Mint command for the current play-through."""
        session = self.session
        return MintRequest(
            play_id=session.play_id,
            score=session.score,
            wallet_address=self.wallet_address,
            metadata={
                "name": f"Game Guru {self.sport.title()} Score",
                "sport": self.sport,
                "score": session.score,
                "questions_answered": session.questions_answered,
                "play_id": session.play_id,
                "finished_at": session.finished_at,
            },
        )

    def _dispatch_mint(self):
        if self.dispatcher is None:
            logger.debug("No mint dispatcher configured; skipping mint")
            return

        session = self.session
        session.mint_status = MintStatus.IN_PROGRESS
        session.mint_error = None
        try:
            self.dispatcher.dispatch(self.mint_request(), self.report_mint_result)
        except Exception as e:
            logger.exception(f"Could not dispatch mint for play {session.play_id}")
            session.mint_status = MintStatus.FAILED
            session.mint_error = f"Mint could not be started: {e}"

    def retry_mint(self) -> bool:
        """Try the mint again after it failed."""
        if self.dispatcher is None:
            return self._ignored("retry_mint", "no mint dispatcher configured")
        if not self.session.can_retry_mint:
            return self._ignored("retry_mint", f"mint is {self.session.mint_status.value}")

        logger.info(f"Retrying mint for play {self.session.play_id}")
        self._dispatch_mint()
        return True

    def report_mint_result(self, result: MintResult) -> bool:
        """
        Apply a mint outcome.

        Results for an earlier play-through are dropped.
        """
        session = self.session
        if result.play_id != session.play_id:
            logger.info(f"Discarding mint result for stale play {result.play_id}")
            return False
        if session.mint_status != MintStatus.IN_PROGRESS:
            return self._ignored("report_mint_result", f"mint is {session.mint_status.value}")

        if result.ok:
            session.mint_status = MintStatus.COMPLETE
            session.mint_receipt = result.receipt
            session.mint_error = None
        else:
            session.mint_status = MintStatus.FAILED
            session.mint_error = result.error
        return True

    def _ignored(self, operation: str, reason: str) -> bool:
        logger.debug(f"Ignored {operation}: {reason}")
        return False
