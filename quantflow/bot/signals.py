"""Signal rules derived from an indicator snapshot."""

from typing import Literal

from quantflow.models import IndicatorSnapshot

CardSignal = Literal["BUY", "SELL", "NEUTRAL"]


def evaluate_signal(snapshot: IndicatorSnapshot, strategy: str, price: float) -> int:
    """Turn the latest indicators into a trade signal.

    SCALPING only fires on extremes confirmed by a Bollinger breakout; every
    other strategy uses plain RSI thresholds.

    Args:
        snapshot: Latest indicator snapshot.
        strategy: Bot strategy tag.
        price: Latest price.

    Returns:
        Signal from -2 (strong sell) to +2 (strong buy); 0 means no trade.
    """
    rsi = snapshot.rsi
    bands = snapshot.bollinger

    if strategy == "SCALPING":
        if rsi < 25 and price < bands.lower:
            return 2
        if rsi > 75 and price > bands.upper:
            return -2
        return 0

    if rsi < 30:
        return 1
    if rsi > 70:
        return -1
    return 0


def rsi_signal(value: float) -> CardSignal:
    """Overbought above 70, oversold below 30."""
    if value > 70:
        return "SELL"
    if value < 30:
        return "BUY"
    return "NEUTRAL"


def macd_signal(histogram: float) -> CardSignal:
    return "BUY" if histogram > 0 else "SELL"


def stochastic_signal(k: float) -> CardSignal:
    """Overbought above 80, oversold below 20."""
    if k > 80:
        return "SELL"
    if k < 20:
        return "BUY"
    return "NEUTRAL"
