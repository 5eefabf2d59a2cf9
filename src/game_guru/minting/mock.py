"""
Mock mint trigger for testing

Records every call and returns fake receipts without touching a chain.
"""

import asyncio
import hashlib
from dataclasses import dataclass, field
from typing import Optional

from .base import MintTrigger, MintReceipt, MintFailure


def fake_tx_hash(score: int, wallet_address: str, attempt: int) -> str:
    """Deterministic hex string shaped like a transaction hash."""
    digest = hashlib.sha256(f"{wallet_address}:{score}:{attempt}".encode()).hexdigest()
    return f"0x{digest}"


@dataclass
class MockMintTrigger(MintTrigger):
    """
    Mock mint trigger.

    fail_times makes the first N calls fail, so retries can be exercised.
    With wait_for_release=True every call blocks until release() is called.
    """

    chain: str = "celo"
    delay_seconds: float = 0.0
    fail_times: int = 0
    error_message: str = "Simulated mint failure"
    wait_for_release: bool = False
    calls: list = field(default_factory=list)
    _release: Optional[asyncio.Event] = field(default=None, repr=False)

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def release(self):
        """Let blocked mint calls finish."""
        self._get_release().set()

    def _get_release(self) -> asyncio.Event:
        if self._release is None:
            self._release = asyncio.Event()
        return self._release

    async def mint(
        self,
        score: int,
        wallet_address: str,
        metadata: dict,
    ) -> MintReceipt:
        """Record the call and return a fake receipt."""
        self.calls.append({
            "score": score,
            "wallet_address": wallet_address,
            "metadata": dict(metadata),
        })
        attempt = len(self.calls)

        if self.wait_for_release:
            await self._get_release().wait()
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        if attempt <= self.fail_times:
            raise MintFailure(self.error_message)

        return MintReceipt(
            tx_hash=fake_tx_hash(score, wallet_address, attempt),
            chain=self.chain,
        )
