"""
Mint worker

Runs mint requests as background asyncio tasks and reports the outcome back
to whoever dispatched them. The dispatcher returns immediately; the callback
fires once the trigger resolves, fails, or times out.
"""

import asyncio
import logging
from typing import Optional, Set

from ..config import config
from .base import (
    MintDispatcher, MintTrigger, MintRequest, MintResult, MintCallback,
    MintError, MintTimeout,
)

logger = logging.getLogger(__name__)

_UNSET = object()


class MintWorker(MintDispatcher):
    """
    asyncio-backed mint dispatcher.

    Must be used from inside a running event loop.
    """

    def __init__(self, trigger: MintTrigger, timeout=_UNSET):
        """
        Initialize worker.

        Args:
            trigger: Mint backend to call
            timeout: Seconds before a mint is reported as failed; None waits forever.
                Defaults to config.mint.timeout_seconds.
        """
        self.trigger = trigger
        self.timeout: Optional[float] = config.mint.timeout_seconds if timeout is _UNSET else timeout
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of mints still running."""
        return len(self._tasks)

    def dispatch(self, request: MintRequest, callback: MintCallback) -> None:
        """Schedule a mint and return without waiting."""
        logger.info(
            f"Dispatching mint for play {request.play_id}: score {request.score}",
            extra={
                'event_type': 'mint_dispatched',
                'play_id': request.play_id,
                'score': request.score,
            }
        )
        task = asyncio.get_running_loop().create_task(self._run(request, callback))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, request: MintRequest, callback: MintCallback) -> None:
        try:
            receipt = await asyncio.wait_for(
                self.trigger.mint(request.score, request.wallet_address, request.metadata),
                timeout=self.timeout,
            )
            result = MintResult(play_id=request.play_id, receipt=receipt)
        except asyncio.TimeoutError:
            error = str(MintTimeout(f"Mint did not complete within {self.timeout}s"))
            result = MintResult(play_id=request.play_id, error=error)
        except MintError as e:
            result = MintResult(play_id=request.play_id, error=str(e))
        except Exception as e:
            logger.exception(f"Unexpected error from {self.trigger!r}")
            result = MintResult(play_id=request.play_id, error=f"Mint error: {e}")

        if result.ok:
            logger.info(f"Mint for play {request.play_id} complete: {result.receipt.tx_hash}")
        else:
            logger.warning(f"Mint for play {request.play_id} failed: {result.error}")

        callback(result)

    async def drain(self):
        """Wait for every dispatched mint to report back."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def close(self):
        """Cancel outstanding mints and close the trigger."""
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        await self.trigger.close()
