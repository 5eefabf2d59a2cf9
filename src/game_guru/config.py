"""
game-guru configuration

Endpoints, chain settings, timeouts and game defaults live here.
Environment variables override defaults for deployment flexibility.
"""

import os
from dataclasses import dataclass, field
from typing import Literal, Optional


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name, "")
    return int(value) if value else None


def _optional_float(name: str, default: str) -> Optional[float]:
    value = os.getenv(name, default)
    return float(value) if value else None


@dataclass
class StoreConfig:
    """Where questions come from"""
    api_base_url: str = os.getenv("GAME_GURU_API_URL", "http://localhost:8080")
    question_count: Optional[int] = field(default_factory=lambda: _optional_int("QUESTION_COUNT"))
    timeout_seconds: float = float(os.getenv("STORE_TIMEOUT", "10.0"))


@dataclass
class MintConfig:
    """Score minting settings"""
    endpoint: str = os.getenv("MINT_ENDPOINT", "http://localhost:8080")
    chain: str = os.getenv("MINT_CHAIN", "celo")
    contract_address: str = os.getenv("MINT_CONTRACT_ADDRESS", "")
    api_key: str = os.getenv("MINT_API_KEY", "")
    # Empty = wait for the relayer forever
    timeout_seconds: Optional[float] = field(default_factory=lambda: _optional_float("MINT_TIMEOUT", "60.0"))


@dataclass
class GameConfig:
    """Game behavior"""
    default_sport: str = os.getenv("DEFAULT_SPORT", "football")
    seed: Optional[int] = field(default_factory=lambda: _optional_int("GAME_SEED"))
    wallet_address: str = os.getenv("WALLET_ADDRESS", "")
    store_provider: Literal["http", "static"] = os.getenv("STORE_PROVIDER", "http")
    mint_provider: Literal["http", "mock"] = os.getenv("MINT_PROVIDER", "http")


@dataclass
class Config:
    """Master config, import this"""
    store: StoreConfig = field(default_factory=StoreConfig)
    mint: MintConfig = field(default_factory=MintConfig)
    game: GameConfig = field(default_factory=GameConfig)

    @classmethod
    def fast_mode(cls) -> "Config":
        """For development and testing: local data, no network"""
        cfg = cls()
        cfg.game.store_provider = "static"
        cfg.game.mint_provider = "mock"
        cfg.store.timeout_seconds = 2.0
        cfg.mint.timeout_seconds = 5.0
        return cfg


# Singleton
config = Config()
