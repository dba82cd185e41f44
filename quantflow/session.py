"""Market session: one instrument's feed, indicators, bot and trade log.

The session is the single consumer of the generator. Each tick produces a
new price, a candle series snapshot and an indicator snapshot; readers only
ever see the latest complete trio.
"""

import logging
import time
from collections import deque
from datetime import datetime
from typing import Optional

from quantflow.bot import SimulatedExecutor, evaluate_signal
from quantflow.config import AppConfig
from quantflow.indicators import compute_indicators
from quantflow.market import MarketGenerator, get_start_price
from quantflow.models import BotConfig, CandleSeries, IndicatorSnapshot, Trade

logger = logging.getLogger(__name__)


class MarketSession:
    """Drives the simulated market for one selected instrument."""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        generator: Optional[MarketGenerator] = None,
        executor: Optional[SimulatedExecutor] = None,
    ):
        """Initialize the session and bootstrap the history.

        Args:
            config: Application configuration. Defaults to AppConfig().
            generator: Market generator. Defaults to one built from config.
            executor: Bot trade executor. Defaults to SimulatedExecutor().
        """
        self._config = config or AppConfig()
        self._generator = generator or MarketGenerator(config=self._config.simulation)
        self._executor = executor or SimulatedExecutor()
        self.bot_config: BotConfig = self._config.bot
        self.trades: deque[Trade] = deque(maxlen=self._config.simulation.max_trades)
        self.trade_count = 0
        self._total_profit = 0.0
        self.last_price: float = get_start_price(self.bot_config.symbol)
        self.candles: CandleSeries = ()
        self.indicators: IndicatorSnapshot = IndicatorSnapshot()
        self.reset()

    @property
    def symbol(self) -> str:
        return self.bot_config.symbol

    def reset(self, end_time: Optional[datetime] = None) -> None:
        """Bootstrap a fresh history for the current symbol."""
        sim = self._config.simulation
        start_price = get_start_price(self.symbol)

        self._generator.generate_history(
            start_price,
            sim.history_count,
            sim.bucket_duration_ms,
            end_time=end_time,
        )
        self.candles = self._generator.series
        self.last_price = self.candles[-1].close if self.candles else start_price
        self.indicators = compute_indicators(self.candles)
        logger.info("Session reset for %s at %.5f", self.symbol, self.last_price)

    def switch_symbol(self, symbol: str) -> None:
        """Change instrument; history and simulation state start over."""
        self.bot_config = self.bot_config.model_copy(update={"symbol": symbol.upper()})
        self.reset()

    def toggle_bot(self) -> bool:
        """Flip the bot on or off and return the new state."""
        self.bot_config = self.bot_config.model_copy(
            update={"is_active": not self.bot_config.is_active}
        )
        return self.bot_config.is_active

    def set_strategy(self, strategy: str) -> None:
        self.bot_config = BotConfig.model_validate(
            {**self.bot_config.model_dump(), "strategy": strategy}
        )

    def tick(self, now: Optional[datetime] = None) -> IndicatorSnapshot:
        """Advance the feed one tick and recompute the indicators.

        The price, series and snapshot are only replaced after both steps
        succeed; if either raises, the generator is rolled back and the
        previous values stay in place.

        Returns:
            The new indicator snapshot.
        """
        checkpoint = self._generator.checkpoint()
        try:
            new_price, candles = self._generator.advance(self.last_price, now=now)
            indicators = compute_indicators(candles)
        except Exception:
            self._generator.restore(checkpoint)
            raise

        self.last_price = new_price
        self.candles = candles
        self.indicators = indicators
        return indicators

    def run_bot(self, now_ms: Optional[int] = None) -> Optional[Trade]:
        """Evaluate the bot rules once, recording any filled trade.

        Returns:
            The new trade, or None when inactive, without signal, or unfilled.
        """
        if not self.bot_config.is_active:
            return None

        signal = evaluate_signal(self.indicators, self.bot_config.strategy, self.last_price)
        trade = self._executor.maybe_execute(
            signal,
            self.bot_config,
            self.last_price,
            now_ms if now_ms is not None else int(time.time() * 1000),
        )
        if trade is not None:
            self.trades.appendleft(trade)
            self.trade_count += 1
            self._total_profit += trade.profit
        return trade

    @property
    def total_profit(self) -> float:
        """P&L of every trade this session, including ones dropped from the log."""
        return self._total_profit
