"""
Score minting for game-guru

Mint triggers share a common interface; the worker runs them in the background.
Triggers: HTTP relayer, mock
"""

from .base import (
    MintTrigger, MintDispatcher, MintRequest, MintResult, MintReceipt,
    MintError, MintFailure, MintTimeout,
)
from .http import HttpMintTrigger
from .mock import MockMintTrigger
from .worker import MintWorker

__all__ = [
    # Base classes and types
    "MintTrigger",
    "MintDispatcher",
    "MintRequest",
    "MintResult",
    "MintReceipt",
    "MintError",
    "MintFailure",
    "MintTimeout",
    # Triggers
    "HttpMintTrigger",
    "MockMintTrigger",
    # Worker
    "MintWorker",
]


def get_mint_trigger(name: str, **kwargs) -> MintTrigger:
    """
    Factory function to get a mint trigger by name.

    Args:
        name: Trigger name ('http', 'mock')
        **kwargs: Trigger-specific options

    Returns:
        Configured MintTrigger instance

    Raises:
        ValueError: If trigger name is unknown
    """
    triggers = {
        "http": HttpMintTrigger,
        "mock": MockMintTrigger,
    }

    if name not in triggers:
        raise ValueError(f"Unknown mint trigger: {name}. Valid options: {list(triggers.keys())}")

    return triggers[name](**kwargs)
