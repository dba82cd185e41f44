"""Technical indicators module."""

from quantflow.indicators.technical import (
    calculate_bollinger_bands,
    calculate_ema,
    calculate_macd,
    calculate_rsi,
    calculate_stochastic,
    calculate_stochastic_smoothed,
    compute_indicators,
    ema_series,
)

__all__ = [
    "calculate_bollinger_bands",
    "calculate_ema",
    "calculate_macd",
    "calculate_rsi",
    "calculate_stochastic",
    "calculate_stochastic_smoothed",
    "compute_indicators",
    "ema_series",
]
