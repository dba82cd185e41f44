"""Rule-based trading bot for the simulated feed."""

from quantflow.bot.executor import SimulatedExecutor
from quantflow.bot.signals import (
    evaluate_signal,
    macd_signal,
    rsi_signal,
    stochastic_signal,
)

__all__ = [
    "SimulatedExecutor",
    "evaluate_signal",
    "macd_signal",
    "rsi_signal",
    "stochastic_signal",
]
