"""Synthetic market feed."""

from quantflow.market.generator import GeneratorCheckpoint, MarketGenerator, MarketState
from quantflow.market.instruments import (
    DEFAULT_SYMBOL,
    PAIR_PRICES,
    SUPPORTED_PAIRS,
    get_start_price,
)
from quantflow.market.random_source import RandomSource, SystemRandomSource

__all__ = [
    "GeneratorCheckpoint",
    "MarketGenerator",
    "MarketState",
    "DEFAULT_SYMBOL",
    "PAIR_PRICES",
    "SUPPORTED_PAIRS",
    "get_start_price",
    "RandomSource",
    "SystemRandomSource",
]
