"""
Base protocol for score minting

A mint trigger records a final score as an on-chain artifact. The engine never
talks to a trigger directly: it emits a MintRequest to a MintDispatcher, which
reports a MintResult back through a callback.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Optional


class MintError(Exception):
    """Base exception for mint errors."""
    pass


class MintFailure(MintError):
    """Mint call was rejected."""
    pass


class MintTimeout(MintFailure):
    """Mint call did not resolve in time."""
    pass


@dataclass
class MintReceipt:
    """Transaction handle returned by a successful mint."""
    tx_hash: str
    chain: str = ""
    raw_response: Optional[Any] = None


@dataclass
class MintRequest:
    """Command emitted by the engine when a play-through ends."""
    play_id: str
    score: int
    wallet_address: str
    metadata: dict = field(default_factory=dict)


@dataclass
class MintResult:
    """Outcome of a mint request, reported back to the engine."""
    play_id: str
    receipt: Optional[MintReceipt] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


MintCallback = Callable[[MintResult], None]


class MintTrigger(ABC):
    """Abstract base class for mint backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Trigger name (e.g., 'http', 'mock')."""
        pass

    @abstractmethod
    async def mint(
        self,
        score: int,
        wallet_address: str,
        metadata: dict,
    ) -> MintReceipt:
        """
        Mint a score artifact.

        Args:
            score: Final score of the play-through
            wallet_address: Recipient wallet
            metadata: JSON-serializable record stored with the artifact

        Returns:
            MintReceipt for the submitted transaction

        Raises:
            MintFailure: When the mint is rejected
            MintError: On any other mint error
        """
        pass

    async def close(self):
        """Release any held resources."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class MintDispatcher(ABC):
    """Accepts mint commands from the engine and reports their outcome later."""

    @abstractmethod
    def dispatch(self, request: MintRequest, callback: MintCallback) -> None:
        """
        Start a mint without waiting for it.

        The callback must be called exactly once with the result.
        """
        pass
