"""Property-based tests for technical indicators.

EMA and MACD are validated against pandas ``ewm(adjust=False)``, which uses
the same first-value seeding.
"""

import math
import statistics

import pandas as pd
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from conftest import make_candles
from quantflow.indicators import (
    calculate_bollinger_bands,
    calculate_ema,
    calculate_macd,
    calculate_rsi,
    calculate_stochastic,
    calculate_stochastic_smoothed,
    compute_indicators,
    ema_series,
)


# Strategy for generating realistic price series
@st.composite
def price_series(draw, min_length: int = 30, max_length: int = 200):
    """Generate a positive price series with varied movements."""
    length = draw(st.integers(min_value=min_length, max_value=max_length))
    base_price = draw(st.floats(min_value=0.5, max_value=5000.0))

    changes = draw(st.lists(
        st.sampled_from([-0.01, -0.005, -0.002, -0.001, 0.0,
                         0.001, 0.002, 0.005, 0.01]),
        min_size=length - 1,
        max_size=length - 1,
    ))

    prices = [base_price]
    for change in changes:
        prices.append(prices[-1] * (1 + change))

    return prices


def ramp(start: float, step: float, count: int) -> list[float]:
    return [start + step * i for i in range(count)]


class TestRSI:
    """RSI over a simple (non-smoothed) window of the last 14 deltas."""

    @pytest.mark.parametrize("count", [0, 1, 10, 14])
    def test_insufficient_history_is_neutral(self, count):
        assert calculate_rsi(make_candles(ramp(1.0, 0.001, count))) == 50

    def test_strictly_increasing_is_100(self):
        assert calculate_rsi(make_candles(ramp(1.0, 0.001, 15))) == 100

    def test_strictly_decreasing_is_0(self):
        assert calculate_rsi(make_candles(ramp(2.0, -0.001, 30))) == 0

    def test_flat_window_is_neutral(self):
        assert calculate_rsi(make_candles([1.1] * 30)) == 50

    def test_balanced_gains_and_losses(self):
        closes = [1.0 if i % 2 == 0 else 2.0 for i in range(15)]
        assert calculate_rsi(make_candles(closes)) == pytest.approx(50.0)

    def test_only_last_window_counts(self):
        # Early crash is outside the 14-delta window
        closes = [10.0, 1.0] + ramp(1.0, 0.01, 15)
        assert calculate_rsi(make_candles(closes)) == 100

    def test_known_value(self):
        # 10 gains of 0.02 and 4 losses of 0.01 in the window
        closes = [1.0]
        for i in range(14):
            closes.append(closes[-1] + (0.02 if i < 10 else -0.01))
        expected = 100 - 100 / (1 + (0.2 / 14) / (0.04 / 14))
        assert calculate_rsi(make_candles(closes)) == pytest.approx(expected)

    @given(prices=price_series())
    @settings(max_examples=100, deadline=None)
    def test_rsi_in_range(self, prices: list[float]):
        rsi = calculate_rsi(make_candles(prices))
        assert 0 <= rsi <= 100


class TestEMA:
    """EMA folded over the entire series, seeded with the first close."""

    def test_empty_series(self):
        assert calculate_ema([]) == 0.0

    def test_short_series_returns_last_close(self):
        candles = make_candles(ramp(1.0, 0.01, 19))
        assert calculate_ema(candles, 20) == candles[-1].close

    def test_flat_series(self):
        assert calculate_ema(make_candles([1.25] * 40)) == pytest.approx(1.25)

    def test_series_seeded_with_first_value(self):
        values = [2.0, 4.0, 6.0]
        k = 2 / 4
        assert ema_series(values, 3) == pytest.approx([2.0, 3.0, 6.0 * k + 3.0 * (1 - k)])

    def test_ema_series_empty(self):
        assert ema_series([], 20) == []

    @given(prices=price_series(min_length=20))
    @settings(max_examples=100, deadline=None)
    def test_ema_matches_pandas(self, prices: list[float]):
        ours = calculate_ema(make_candles(prices), 20)
        ref = pd.Series(prices).ewm(span=20, adjust=False).mean().iloc[-1]
        assert ours == pytest.approx(ref, rel=1e-9)

    @given(prices=price_series())
    @settings(max_examples=50, deadline=None)
    def test_ema_is_idempotent(self, prices: list[float]):
        candles = make_candles(prices)
        assert calculate_ema(candles) == calculate_ema(candles)


class TestBollingerBands:
    """Population standard deviation over the last 20 closes."""

    def test_insufficient_history_is_zero(self):
        bands = calculate_bollinger_bands(make_candles(ramp(1.0, 0.01, 19)))
        assert (bands.upper, bands.middle, bands.lower) == (0, 0, 0)

    def test_flat_series_collapses(self):
        bands = calculate_bollinger_bands(make_candles([1.1] * 25))
        assert bands.middle == pytest.approx(1.1)
        assert bands.upper == pytest.approx(bands.middle)
        assert bands.lower == pytest.approx(bands.middle)

    def test_population_std(self):
        closes = ramp(1.0, 1.0, 20)
        bands = calculate_bollinger_bands(make_candles(closes))
        std = statistics.pstdev(closes)
        assert bands.middle == pytest.approx(10.5)
        assert bands.upper == pytest.approx(10.5 + 2 * std)
        assert bands.lower == pytest.approx(10.5 - 2 * std)

    def test_uses_last_window_only(self):
        closes = [100.0] * 10 + [1.0] * 20
        bands = calculate_bollinger_bands(make_candles(closes))
        assert bands.middle == pytest.approx(1.0)
        assert bands.upper == pytest.approx(1.0)

    @given(prices=price_series())
    @settings(max_examples=100, deadline=None)
    def test_band_ordering(self, prices: list[float]):
        bands = calculate_bollinger_bands(make_candles(prices))
        assert bands.lower <= bands.middle + 1e-9
        assert bands.middle <= bands.upper + 1e-9
        assert bands.upper - bands.middle == pytest.approx(bands.middle - bands.lower, abs=1e-9)


class TestMACD:
    """MACD (12, 26, 9) with first-value seeded EMAs."""

    def test_insufficient_history_is_zero(self):
        macd = calculate_macd(make_candles(ramp(1.0, 0.01, 25)))
        assert (macd.macd, macd.signal, macd.histogram) == (0, 0, 0)

    def test_flat_series(self):
        macd = calculate_macd(make_candles([1.1] * 26))
        assert macd.macd == pytest.approx(0.0, abs=1e-12)
        assert macd.histogram == pytest.approx(0.0, abs=1e-12)

    def test_uptrend_has_positive_histogram(self):
        macd = calculate_macd(make_candles(ramp(1.0, 0.001, 40)))
        assert macd.macd > 0
        assert macd.histogram > 0

    @given(prices=price_series())
    @settings(max_examples=100, deadline=None)
    def test_macd_matches_pandas(self, prices: list[float]):
        ours = calculate_macd(make_candles(prices))

        closes = pd.Series(prices)
        macd_line = (
            closes.ewm(span=12, adjust=False).mean()
            - closes.ewm(span=26, adjust=False).mean()
        )
        signal_line = macd_line.ewm(span=9, adjust=False).mean()

        scale = max(prices)
        assert ours.macd == pytest.approx(macd_line.iloc[-1], abs=1e-9 * scale)
        assert ours.signal == pytest.approx(signal_line.iloc[-1], abs=1e-9 * scale)
        assert ours.histogram == pytest.approx(ours.macd - ours.signal)

    @given(prices=price_series())
    @settings(max_examples=50, deadline=None)
    def test_macd_is_idempotent(self, prices: list[float]):
        candles = make_candles(prices)
        assert calculate_macd(candles) == calculate_macd(candles)


class TestStochastic:
    """Stochastic %K with the simplified %D = %K * 0.9."""

    def test_insufficient_history_is_neutral(self):
        stoch = calculate_stochastic(make_candles(ramp(1.0, 0.01, 13)))
        assert (stoch.k, stoch.d) == (50, 50)

    def test_flat_window_is_guarded(self):
        stoch = calculate_stochastic(make_candles([1.1] * 14))
        assert stoch.k == 50
        assert math.isfinite(stoch.d)

    def test_close_at_high(self):
        stoch = calculate_stochastic(make_candles(ramp(1.0, 0.001, 20)))
        assert stoch.k == pytest.approx(100)
        assert stoch.d == pytest.approx(90)

    def test_close_at_low(self):
        stoch = calculate_stochastic(make_candles(ramp(2.0, -0.001, 20)))
        assert stoch.k == pytest.approx(0)

    def test_uses_highs_and_lows(self):
        closes = [1.0] * 14
        highs = [1.0] * 13 + [1.2]
        lows = [0.8] + [1.0] * 13
        stoch = calculate_stochastic(make_candles(closes, highs=highs, lows=lows))
        assert stoch.k == pytest.approx(50)

    @given(prices=price_series())
    @settings(max_examples=100, deadline=None)
    def test_k_in_range(self, prices: list[float]):
        stoch = calculate_stochastic(make_candles(prices))
        assert -1e-9 <= stoch.k <= 100 + 1e-9
        assert stoch.d == pytest.approx(stoch.k * 0.9)


class TestStochasticSmoothed:
    """%D as a real 3-period SMA of %K."""

    def test_insufficient_history_is_neutral(self):
        stoch = calculate_stochastic_smoothed(make_candles(ramp(1.0, 0.01, 10)))
        assert (stoch.k, stoch.d) == (50, 50)

    def test_d_is_mean_of_last_three_k(self):
        closes = ramp(1.0, 0.001, 16) + [1.010]
        candles = make_candles(closes)
        expected_k = [calculate_stochastic(candles[:n]).k for n in (15, 16, 17)]

        stoch = calculate_stochastic_smoothed(candles)

        assert stoch.k == pytest.approx(expected_k[-1])
        assert stoch.d == pytest.approx(sum(expected_k) / 3)

    def test_partial_d_window(self):
        stoch = calculate_stochastic_smoothed(make_candles(ramp(1.0, 0.001, 14)))
        assert stoch.d == pytest.approx(stoch.k)


class TestIndicatorSnapshot:
    """End-to-end snapshots of the five indicators."""

    def test_flat_market(self):
        snapshot = compute_indicators(make_candles([1.10000] * 26))

        assert snapshot.macd.histogram == pytest.approx(0.0, abs=1e-12)
        assert snapshot.rsi == 50
        assert snapshot.bollinger.upper == pytest.approx(1.1)
        assert snapshot.bollinger.lower == pytest.approx(1.1)
        assert snapshot.bollinger.middle == pytest.approx(1.1)
        assert snapshot.ema == pytest.approx(1.1)
        assert snapshot.stochastic.k == 50
        assert all(math.isfinite(v) for v in (snapshot.stochastic.k, snapshot.stochastic.d))

    def test_rising_market(self):
        # Flat lead-in so MACD has its 26 points, then 20 rising steps
        closes = [1.0000] * 10 + ramp(1.0001, 0.0001, 20)
        assert closes[-1] == pytest.approx(1.0020)

        snapshot = compute_indicators(make_candles(closes))

        assert snapshot.rsi == 100
        assert snapshot.macd.histogram > 0
        assert snapshot.stochastic.k == pytest.approx(100)

    def test_empty_series(self):
        snapshot = compute_indicators([])
        assert snapshot.rsi == 50
        assert snapshot.ema == 0
        assert snapshot.stochastic.k == 50

    @given(prices=price_series())
    @settings(max_examples=50, deadline=None)
    def test_snapshot_is_deterministic(self, prices: list[float]):
        candles = make_candles(prices)
        assert compute_indicators(candles) == compute_indicators(candles)
