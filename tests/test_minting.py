"""
Tests for mint triggers and the mint worker.
"""

import asyncio
import json

import httpx
import pytest

from game_guru.minting import (
    HttpMintTrigger,
    MockMintTrigger,
    MintWorker,
    MintRequest,
    MintResult,
    MintReceipt,
    MintTrigger,
    MintError,
    MintFailure,
    MintTimeout,
    get_mint_trigger,
)


def make_http_trigger(handler) -> HttpMintTrigger:
    """HTTP trigger wired to an in-process transport."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpMintTrigger(
        endpoint="http://relayer.test",
        chain="celo",
        contract_address="0xcontract",
        client=client,
    )


def make_request(play_id: str = "play-1", score: int = 3) -> MintRequest:
    return MintRequest(play_id=play_id, score=score, wallet_address="0xwallet", metadata={"score": score})


class TestHttpMintTrigger:
    """Tests for HttpMintTrigger."""

    @pytest.mark.asyncio
    async def test_mint(self):
        """Test a successful mint."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"txHash": "0xabc"})

        trigger = make_http_trigger(handler)
        receipt = await trigger.mint(4, "0xwallet", {"sport": "football"})

        assert receipt.tx_hash == "0xabc"
        assert receipt.chain == "celo"
        assert seen[0] == {
            "score": 4,
            "walletAddress": "0xwallet",
            "metadata": {"sport": "football"},
            "chain": "celo",
            "contractAddress": "0xcontract",
        }
        await trigger.close()

    @pytest.mark.asyncio
    async def test_rejected(self):
        """Test relayer rejections become MintFailure with the error text."""
        trigger = make_http_trigger(
            lambda request: httpx.Response(400, json={"error": "insufficient funds"})
        )

        with pytest.raises(MintFailure, match="insufficient funds"):
            await trigger.mint(1, "0xwallet", {})

    @pytest.mark.asyncio
    async def test_no_wallet(self):
        """Test a missing wallet fails before any request."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("should not be called")

        trigger = make_http_trigger(handler)

        with pytest.raises(MintFailure, match="No wallet"):
            await trigger.mint(1, "", {})

    @pytest.mark.asyncio
    async def test_missing_tx_hash(self):
        """Test a response without a hash is a failure."""
        trigger = make_http_trigger(lambda request: httpx.Response(200, json={"ok": True}))

        with pytest.raises(MintFailure, match="no transaction hash"):
            await trigger.mint(1, "0xwallet", {})

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test transport timeouts become MintTimeout."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        trigger = make_http_trigger(handler)

        with pytest.raises(MintTimeout):
            await trigger.mint(1, "0xwallet", {})

    @pytest.mark.asyncio
    async def test_unreachable(self):
        """Test connection errors become MintError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        trigger = make_http_trigger(handler)

        with pytest.raises(MintError, match="unreachable"):
            await trigger.mint(1, "0xwallet", {})


class TestMockMintTrigger:
    """Tests for MockMintTrigger."""

    @pytest.mark.asyncio
    async def test_records_calls(self):
        """Test calls are recorded and receipts returned."""
        trigger = MockMintTrigger()
        receipt = await trigger.mint(2, "0xwallet", {"sport": "football"})

        assert receipt.tx_hash.startswith("0x")
        assert trigger.call_count == 1
        assert trigger.calls[0]["score"] == 2

    @pytest.mark.asyncio
    async def test_fail_times(self):
        """Test the first N calls fail."""
        trigger = MockMintTrigger(fail_times=1)

        with pytest.raises(MintFailure):
            await trigger.mint(2, "0xwallet", {})
        receipt = await trigger.mint(2, "0xwallet", {})

        assert receipt.tx_hash
        assert trigger.call_count == 2


class TestMintWorker:
    """Tests for MintWorker."""

    @pytest.mark.asyncio
    async def test_dispatch_reports_success(self):
        """Test a dispatched mint reports back once."""
        trigger = MockMintTrigger()
        worker = MintWorker(trigger, timeout=None)
        results = []

        worker.dispatch(make_request(), results.append)
        assert results == []
        assert worker.pending == 1

        await worker.drain()

        assert len(results) == 1
        assert results[0].ok
        assert results[0].play_id == "play-1"
        assert isinstance(results[0].receipt, MintReceipt)
        assert worker.pending == 0

    @pytest.mark.asyncio
    async def test_dispatch_reports_failure(self):
        """Test mint failures are reported, not raised."""
        worker = MintWorker(MockMintTrigger(fail_times=1, error_message="reverted"), timeout=None)
        results = []

        worker.dispatch(make_request(), results.append)
        await worker.drain()

        assert results[0].ok is False
        assert results[0].error == "reverted"

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test a mint that never resolves is reported as failed."""
        trigger = MockMintTrigger(wait_for_release=True)
        worker = MintWorker(trigger, timeout=0.05)
        results = []

        worker.dispatch(make_request(), results.append)
        await worker.drain()

        assert results[0].ok is False
        assert "did not complete" in results[0].error

    @pytest.mark.asyncio
    async def test_unexpected_error(self):
        """Test unexpected trigger errors still report back."""
        class BrokenTrigger(MintTrigger):
            @property
            def name(self) -> str:
                return "broken"

            async def mint(self, score, wallet_address, metadata):
                raise RuntimeError("kaboom")

        worker = MintWorker(BrokenTrigger(), timeout=None)
        results = []

        worker.dispatch(make_request(), results.append)
        await worker.drain()

        assert results[0].ok is False
        assert "kaboom" in results[0].error

    @pytest.mark.asyncio
    async def test_close_cancels_pending(self):
        """Test closing the worker cancels outstanding mints."""
        worker = MintWorker(MockMintTrigger(wait_for_release=True), timeout=None)
        results = []

        worker.dispatch(make_request(), results.append)
        await asyncio.sleep(0)
        await worker.close()

        assert results == []
        assert worker.pending == 0


class TestMintResult:
    """Tests for MintResult."""

    def test_ok(self):
        """Test ok reflects the error field."""
        assert MintResult(play_id="p", receipt=MintReceipt(tx_hash="0x1")).ok is True
        assert MintResult(play_id="p", error="nope").ok is False


class TestGetMintTrigger:
    """Tests for the trigger factory."""

    def test_mock(self):
        """Test building a mock trigger."""
        assert isinstance(get_mint_trigger("mock"), MockMintTrigger)

    def test_http(self):
        """Test building an HTTP trigger with overrides."""
        trigger = get_mint_trigger("http", endpoint="http://relayer.test", chain="alfajores")

        assert isinstance(trigger, HttpMintTrigger)
        assert trigger.chain == "alfajores"

    def test_unknown(self):
        """Test unknown trigger names are rejected."""
        with pytest.raises(ValueError, match="Unknown mint trigger"):
            get_mint_trigger("paper")
