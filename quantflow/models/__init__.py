"""Data models for QuantFlow."""

from quantflow.models.analysis import AIAnalysisResult
from quantflow.models.bot import BotConfig
from quantflow.models.candle import Candle, CandleSeries
from quantflow.models.indicators import (
    BollingerBands,
    IndicatorSnapshot,
    MACDValues,
    StochasticValues,
)
from quantflow.models.trade import Trade, TradeType

__all__ = [
    "AIAnalysisResult",
    "BotConfig",
    "Candle",
    "CandleSeries",
    "BollingerBands",
    "IndicatorSnapshot",
    "MACDValues",
    "StochasticValues",
    "Trade",
    "TradeType",
]
