"""
HTTP mint trigger

Hands mint requests to a relayer service that submits the transaction on the
configured chain (CELO by default) and answers with the transaction hash.
"""

import logging
from typing import Optional

import httpx

from ..config import config
from .base import MintTrigger, MintReceipt, MintError, MintFailure, MintTimeout

logger = logging.getLogger(__name__)


class HttpMintTrigger(MintTrigger):
    """
    Mint trigger backed by a relayer REST endpoint.

    Endpoint, chain and contract are read from:
    1. Constructor arguments
    2. MINT_ENDPOINT / MINT_CHAIN / MINT_CONTRACT_ADDRESS environment variables (via config)
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        chain: Optional[str] = None,
        contract_address: Optional[str] = None,
        api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._endpoint = (endpoint or config.mint.endpoint).rstrip("/")
        self.chain = chain or config.mint.chain
        self.contract_address = contract_address or config.mint.contract_address
        self._api_key = api_key or config.mint.api_key
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        """Lazy initialization of HTTP client."""
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            if self._api_key:
                headers["Authorization"] = f"Bearer {self._api_key}"
            self._client = httpx.AsyncClient(headers=headers, timeout=None)
        return self._client

    @property
    def name(self) -> str:
        return "http"

    async def mint(
        self,
        score: int,
        wallet_address: str,
        metadata: dict,
    ) -> MintReceipt:
        """Submit a mint request to the relayer."""
        if not wallet_address:
            raise MintFailure("No wallet connected")

        client = self._get_client()
        payload = {
            "score": score,
            "walletAddress": wallet_address,
            "metadata": metadata,
            "chain": self.chain,
            "contractAddress": self.contract_address,
        }

        try:
            response = await client.post(f"{self._endpoint}/mint", json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise MintTimeout(f"Mint relayer timed out: {e}")
        except httpx.HTTPStatusError as e:
            detail = _error_detail(e.response)
            raise MintFailure(f"Mint rejected ({e.response.status_code}): {detail}")
        except httpx.HTTPError as e:
            raise MintError(f"Mint relayer unreachable: {e}")
        except ValueError as e:
            raise MintError(f"Mint relayer returned invalid JSON: {e}")

        tx_hash = data.get("txHash") if isinstance(data, dict) else None
        if not tx_hash:
            raise MintFailure(f"Mint relayer returned no transaction hash: {data}")

        logger.info(f"Mint submitted on {self.chain}: {tx_hash}")
        return MintReceipt(tx_hash=tx_hash, chain=self.chain, raw_response=data)

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None


def _error_detail(response: httpx.Response) -> str:
    """Best-effort human-readable error from a relayer response."""
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return str(data)
