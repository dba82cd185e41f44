"""Tests for the bot signal rules and simulated execution."""

import pytest

from conftest import ScriptedRandomSource
from quantflow.bot import (
    SimulatedExecutor,
    evaluate_signal,
    macd_signal,
    rsi_signal,
    stochastic_signal,
)
from quantflow.models import BollingerBands, BotConfig, IndicatorSnapshot, TradeType


def snapshot(rsi: float, lower: float = 1.0, upper: float = 2.0) -> IndicatorSnapshot:
    return IndicatorSnapshot(
        rsi=rsi,
        bollinger=BollingerBands(upper=upper, middle=(upper + lower) / 2, lower=lower),
    )


class TestEvaluateSignal:
    """Signal table per strategy."""

    @pytest.mark.parametrize(
        "rsi, price, expected",
        [
            (20, 0.9, 2),  # oversold below the lower band
            (20, 1.5, 0),  # oversold but inside the bands
            (28, 0.9, 0),  # below band but not oversold enough
            (80, 2.1, -2),  # overbought above the upper band
            (80, 1.5, 0),
            (50, 0.5, 0),
        ],
    )
    def test_scalping(self, rsi, price, expected):
        assert evaluate_signal(snapshot(rsi), "SCALPING", price) == expected

    @pytest.mark.parametrize("strategy", ["RSI_MACD", "MA_CROSS", "AI_ADAPTIVE"])
    @pytest.mark.parametrize(
        "rsi, expected",
        [(29.9, 1), (30, 0), (50, 0), (70, 0), (70.1, -1)],
    )
    def test_trend_strategies(self, strategy, rsi, expected):
        assert evaluate_signal(snapshot(rsi), strategy, 1.5) == expected

    def test_neutral_startup_snapshot_has_no_signal(self):
        assert evaluate_signal(IndicatorSnapshot(), "SCALPING", 1.0) == 0
        assert evaluate_signal(IndicatorSnapshot(), "RSI_MACD", 1.0) == 0


class TestCardSignals:
    """Indicator card reads."""

    @pytest.mark.parametrize("value, expected", [(75, "SELL"), (25, "BUY"), (50, "NEUTRAL")])
    def test_rsi(self, value, expected):
        assert rsi_signal(value) == expected

    @pytest.mark.parametrize("hist, expected", [(0.0001, "BUY"), (0.0, "SELL"), (-1, "SELL")])
    def test_macd(self, hist, expected):
        assert macd_signal(hist) == expected

    @pytest.mark.parametrize("k, expected", [(85, "SELL"), (15, "BUY"), (50, "NEUTRAL")])
    def test_stochastic(self, k, expected):
        assert stochastic_signal(k) == expected


class TestSimulatedExecutor:
    """Random fills with a small pip result."""

    def test_no_signal_draws_nothing(self):
        source = ScriptedRandomSource(uniforms=[0.9, 0.9])
        executor = SimulatedExecutor(source)

        assert executor.maybe_execute(0, BotConfig(), 1.1, 0) is None
        assert len(source.uniforms) == 2

    def test_unfilled_signal(self):
        executor = SimulatedExecutor(ScriptedRandomSource(uniforms=[0.5]))
        assert executor.maybe_execute(2, BotConfig(), 1.1, 0) is None

    def test_filled_buy(self):
        executor = SimulatedExecutor(ScriptedRandomSource(uniforms=[0.6, 0.95]))
        config = BotConfig(symbol="XAUUSD", lot_size=0.1)

        trade = executor.maybe_execute(2, config, 2350.5, 1_700_000_000_000)

        assert trade is not None
        assert trade.type == TradeType.BUY
        assert trade.symbol == "XAUUSD"
        assert trade.entry_price == 2350.5
        assert trade.status == "CLOSED"
        assert trade.timestamp == 1_700_000_000_000
        assert trade.profit == pytest.approx((0.95 - 0.45) * 10 * 0.1 * 10)

    def test_filled_sell_with_loss(self):
        executor = SimulatedExecutor(ScriptedRandomSource(uniforms=[0.99, 0.0]))

        trade = executor.maybe_execute(-1, BotConfig(lot_size=1.0), 1.1, 0)

        assert trade.type == TradeType.SELL
        assert trade.profit == pytest.approx(-45.0)

    def test_trade_ids_are_unique(self):
        executor = SimulatedExecutor(ScriptedRandomSource(uniform_default=0.9))
        ids = {executor.maybe_execute(1, BotConfig(), 1.1, 0).id for _ in range(50)}
        assert len(ids) == 50
