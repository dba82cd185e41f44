"""Technical indicator calculations for the simulated feed.

Every function takes the candle series oldest first and returns only the
latest reading. Nothing is cached between calls: each call refolds the data
it is given. Short series never raise; they return a neutral default so the
dashboard and bot can run from the first tick.
"""

from typing import Sequence

from quantflow.models import (
    BollingerBands,
    Candle,
    IndicatorSnapshot,
    MACDValues,
    StochasticValues,
)


def _closes(candles: Sequence[Candle]) -> list[float]:
    return [c.close for c in candles]


def ema_series(values: Sequence[float], period: int) -> list[float]:
    """Calculate the full Exponential Moving Average series.

    Seeded with the first value (not an SMA), with ``k = 2 / (period + 1)``.
    Matches pandas ``ewm(span=period, adjust=False)``.

    Args:
        values: Input values, oldest first.
        period: EMA period.

    Returns:
        List of EMA values, same length as ``values``.
    """
    if not values:
        return []

    k = 2 / (period + 1)
    ema = values[0]
    result = [ema]

    for value in values[1:]:
        ema = value * k + ema * (1 - k)
        result.append(ema)

    return result


def calculate_rsi(candles: Sequence[Candle], period: int = 14) -> float:
    """Calculate the Relative Strength Index over the last ``period`` deltas.

    Uses a simple (non-smoothed) average of gains and losses in the window,
    not Wilder's smoothing.

    Args:
        candles: Candle series.
        period: RSI period (default 14).

    Returns:
        RSI in [0, 100]. 50 when fewer than ``period + 1`` candles exist or
        when the window is perfectly flat; 100 when there are no losses.
    """
    if len(candles) < period + 1:
        return 50.0

    closes = _closes(candles)
    gains = 0.0
    losses = 0.0

    for i in range(len(closes) - period, len(closes)):
        diff = closes[i] - closes[i - 1]
        if diff >= 0:
            gains += diff
        else:
            losses -= diff

    avg_gain = gains / period
    avg_loss = losses / period

    if avg_loss == 0:
        return 50.0 if avg_gain == 0 else 100.0

    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def calculate_ema(candles: Sequence[Candle], period: int = 20) -> float:
    """Calculate the latest EMA, folded over the entire series.

    Args:
        candles: Candle series.
        period: EMA period (default 20).

    Returns:
        Latest EMA value; the last close if fewer than ``period`` candles,
        0.0 for an empty series.
    """
    closes = _closes(candles)
    if not closes:
        return 0.0
    if len(closes) < period:
        return closes[-1]

    return ema_series(closes, period)[-1]


def calculate_bollinger_bands(
    candles: Sequence[Candle],
    period: int = 20,
    std_dev: float = 2.0,
) -> BollingerBands:
    """Calculate Bollinger Bands over the last ``period`` closes.

    Args:
        candles: Candle series.
        period: SMA period (default 20).
        std_dev: Standard deviation multiplier (default 2.0).

    Returns:
        BollingerBands; all zeros if fewer than ``period`` candles.
    """
    if len(candles) < period:
        return BollingerBands(upper=0.0, middle=0.0, lower=0.0)

    window = _closes(candles[-period:])
    mean = sum(window) / period

    # Population standard deviation
    variance = sum((x - mean) ** 2 for x in window) / period
    std = variance ** 0.5

    return BollingerBands(
        upper=mean + std_dev * std,
        middle=mean,
        lower=mean - std_dev * std,
    )


def calculate_macd(
    candles: Sequence[Candle],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> MACDValues:
    """Calculate MACD (Moving Average Convergence Divergence).

    Both EMAs and the signal EMA are seeded from the first element and
    folded over the whole series.

    Args:
        candles: Candle series.
        fast: Fast EMA period (default 12).
        slow: Slow EMA period (default 26).
        signal: Signal line period (default 9).

    Returns:
        MACDValues for the latest candle; all zeros if fewer than ``slow``
        candles.
    """
    if len(candles) < slow:
        return MACDValues(macd=0.0, signal=0.0, histogram=0.0)

    closes = _closes(candles)
    fast_ema = ema_series(closes, fast)
    slow_ema = ema_series(closes, slow)

    macd_line = [f - s for f, s in zip(fast_ema, slow_ema)]
    signal_line = ema_series(macd_line, signal)

    current_macd = macd_line[-1]
    current_signal = signal_line[-1]

    return MACDValues(
        macd=current_macd,
        signal=current_signal,
        histogram=current_macd - current_signal,
    )


def _stochastic_k(window: Sequence[Candle]) -> float:
    """%K of the last close within the window's high-low range."""
    lowest_low = min(c.low for c in window)
    highest_high = max(c.high for c in window)

    if highest_high == lowest_low:
        return 50.0  # Neutral when no range

    return (window[-1].close - lowest_low) / (highest_high - lowest_low) * 100


def calculate_stochastic(candles: Sequence[Candle], period: int = 14) -> StochasticValues:
    """Calculate the Stochastic Oscillator.

    %D here is the simplified proxy ``%K * 0.9``, not a moving average of
    %K. See ``calculate_stochastic_smoothed`` for the textbook %D.

    Args:
        candles: Candle series.
        period: Lookback period (default 14).

    Returns:
        StochasticValues; k=50, d=50 if fewer than ``period`` candles.
    """
    if len(candles) < period:
        return StochasticValues(k=50.0, d=50.0)

    k = _stochastic_k(candles[-period:])
    return StochasticValues(k=k, d=k * 0.9)


def calculate_stochastic_smoothed(
    candles: Sequence[Candle],
    period: int = 14,
    d_period: int = 3,
) -> StochasticValues:
    """Calculate the Stochastic Oscillator with %D as an SMA of %K.

    Args:
        candles: Candle series.
        period: %K lookback period (default 14).
        d_period: %D smoothing period (default 3).

    Returns:
        StochasticValues; k=50, d=50 if fewer than ``period`` candles. While
        fewer than ``d_period`` %K values exist, %D averages what is there.
    """
    n = len(candles)
    if n < period:
        return StochasticValues(k=50.0, d=50.0)

    k_values = [
        _stochastic_k(candles[i - period + 1:i + 1])
        for i in range(max(period - 1, n - d_period), n)
    ]

    return StochasticValues(k=k_values[-1], d=sum(k_values) / len(k_values))


def compute_indicators(candles: Sequence[Candle]) -> IndicatorSnapshot:
    """Calculate every dashboard indicator for a candle series.

    Args:
        candles: Candle series, oldest first.

    Returns:
        IndicatorSnapshot with RSI(14), EMA(20), Bollinger(20, 2),
        MACD(12, 26, 9) and Stochastic(14).
    """
    return IndicatorSnapshot(
        rsi=calculate_rsi(candles),
        ema=calculate_ema(candles, 20),
        bollinger=calculate_bollinger_bands(candles),
        macd=calculate_macd(candles),
        stochastic=calculate_stochastic(candles),
    )
