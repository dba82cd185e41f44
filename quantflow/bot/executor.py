"""Simulated order execution for the bot."""

import logging
import uuid
from typing import Optional

from quantflow.market.random_source import RandomSource, SystemRandomSource
from quantflow.models import BotConfig, Trade, TradeType

logger = logging.getLogger(__name__)


class SimulatedExecutor:
    """Fills bot signals against the simulated price.

    A signal is filled half of the time to mimic missed fills. Filled trades
    close immediately with a small random pip result that is slightly
    skewed towards profit.
    """

    FILL_THRESHOLD = 0.5
    PROFIT_SKEW = 0.45
    PIP_RANGE = 10
    PIP_VALUE_PER_LOT = 10

    def __init__(self, random_source: Optional[RandomSource] = None):
        """Initialize the executor.

        Args:
            random_source: Source of uniform draws. Defaults to SystemRandomSource.
        """
        self._random = random_source or SystemRandomSource()

    def maybe_execute(
        self,
        signal: int,
        config: BotConfig,
        price: float,
        now_ms: int,
    ) -> Optional[Trade]:
        """Try to fill a trade for a signal.

        Args:
            signal: Signal from ``evaluate_signal``.
            config: Bot configuration (symbol, lot size).
            price: Entry price.
            now_ms: Fill timestamp in epoch milliseconds.

        Returns:
            The closed Trade, or None if there was no signal or no fill.
        """
        if signal == 0:
            return None

        if self._random.uniform() <= self.FILL_THRESHOLD:
            logger.debug("Signal %d not filled", signal)
            return None

        trade_type = TradeType.BUY if signal > 0 else TradeType.SELL
        profit_pips = (self._random.uniform() - self.PROFIT_SKEW) * self.PIP_RANGE
        profit = profit_pips * config.lot_size * self.PIP_VALUE_PER_LOT

        trade = Trade(
            id=uuid.uuid4().hex[:9],
            symbol=config.symbol,
            type=trade_type,
            entry_price=price,
            lot_size=config.lot_size,
            profit=profit,
            status="CLOSED",
            timestamp=now_ms,
        )
        logger.info(
            "Bot %s %s %.2f lots @ %.5f, P&L %.2f",
            trade_type.value, config.symbol, config.lot_size, price, profit,
        )
        return trade
