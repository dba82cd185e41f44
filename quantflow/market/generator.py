"""Synthetic market generator.

Produces a bootstrap candle history and live price ticks from a random walk
with a persistent, decaying trend and clustered volatility.
"""

import logging
from collections import deque
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Optional

from quantflow.config import SimulationConfig
from quantflow.market.random_source import RandomSource, SystemRandomSource
from quantflow.models import Candle, CandleSeries

logger = logging.getLogger(__name__)

TIME_LABEL_FORMAT = "%H:%M"


@dataclass
class MarketState:
    """Persistent drift and diffusion of the live random walk."""

    trend: float = 0.0
    volatility: float = 0.0001


@dataclass(frozen=True)
class GeneratorCheckpoint:
    """Saved walk state and candle series, restorable after a failed tick."""

    state: MarketState
    candles: CandleSeries


def format_time_label(moment: datetime) -> str:
    """Format a timestamp as a candle display label."""
    return moment.strftime(TIME_LABEL_FORMAT)


def bucket_start(moment: datetime, bucket_duration_ms: int) -> datetime:
    """Floor a timestamp to the start of its bucket, counted from midnight."""
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    bucket = timedelta(milliseconds=bucket_duration_ms)
    return midnight + ((moment - midnight) // bucket) * bucket


class MarketGenerator:
    """Owns the simulated candle series and the random walk state.

    The generator is the only writer of its series. ``series`` and the
    return value of ``advance`` are immutable tuples, so consumers can hold
    on to a snapshot while the next tick is produced.
    """

    def __init__(
        self,
        random_source: Optional[RandomSource] = None,
        config: Optional[SimulationConfig] = None,
    ):
        """Initialize the generator.

        Args:
            random_source: Source of uniform and normal draws. Defaults to an
                unseeded SystemRandomSource.
            config: Simulation constants. Defaults to SimulationConfig().
        """
        self._random = random_source or SystemRandomSource()
        self._config = config or SimulationConfig()
        self._state = MarketState(volatility=self._config.initial_volatility)
        self._candles: deque[Candle] = deque(maxlen=self._config.max_history)

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def state(self) -> MarketState:
        """Copy of the current trend/volatility state."""
        return replace(self._state)

    @property
    def series(self) -> CandleSeries:
        """Snapshot of the current candle series, oldest first."""
        return tuple(self._candles)

    def reset_state(self) -> None:
        """Reset trend and volatility to their initial values."""
        self._state = MarketState(volatility=self._config.initial_volatility)

    def checkpoint(self) -> GeneratorCheckpoint:
        """Capture the walk state and series so a tick can be rolled back."""
        return GeneratorCheckpoint(state=replace(self._state), candles=self.series)

    def restore(self, checkpoint: GeneratorCheckpoint) -> None:
        """Roll the walk state and series back to a checkpoint."""
        self._state = replace(checkpoint.state)
        self._candles = deque(checkpoint.candles, maxlen=self._config.max_history)

    def generate_history(
        self,
        start_price: float,
        count: int,
        bucket_duration_ms: Optional[int] = None,
        end_time: Optional[datetime] = None,
    ) -> CandleSeries:
        """Generate a bootstrap candle history.

        The walk keeps a local trend that decays by ``history_trend_decay``
        each step and is nudged by a normal draw. Each candle opens at the
        previous close; wicks extend a random fraction of half the body
        beyond it, so the OHLC ordering holds by construction.

        Calling this resets the live trend/volatility state and replaces the
        live series with the returned candles (trimmed to ``max_history``).

        Args:
            start_price: Open of the first candle. Non-positive values are
                clamped to ``min_price``.
            count: Number of candles. ``count <= 0`` yields an empty series.
            bucket_duration_ms: Bucket length. Defaults to the config value.
            end_time: Time the history leads up to, floored to its bucket.
                Defaults to now.

        Returns:
            The generated candles, oldest first.

        Raises:
            ValueError: If the bucket length is not positive.
        """
        cfg = self._config
        bucket_ms = cfg.bucket_duration_ms if bucket_duration_ms is None else bucket_duration_ms
        if bucket_ms <= 0:
            raise ValueError(f"bucket_duration_ms must be positive, got {bucket_ms}")
        end = bucket_start(end_time or datetime.now(), bucket_ms)

        self.reset_state()
        self._candles.clear()

        if count <= 0:
            logger.debug("Empty history requested (count=%d)", count)
            return ()

        price = start_price
        if price <= 0:
            logger.warning("Non-positive start price %r clamped to %g", start_price, cfg.min_price)
            price = cfg.min_price

        moment = end - timedelta(milliseconds=count * bucket_ms)
        trend = 0.0
        candles: list[Candle] = []

        for _ in range(count):
            trend = trend * cfg.history_trend_decay + self._random.normal() * cfg.history_trend_noise
            change = price * (trend + self._random.normal() * cfg.history_diffusion)

            open_ = price
            close = max(cfg.min_price, price + change)
            wick = abs(change) * cfg.wick_factor
            high = max(open_, close) + self._random.uniform() * wick
            low = max(cfg.min_price, min(open_, close) - self._random.uniform() * wick)
            volume = int(self._random.uniform() * cfg.volume_range) + cfg.min_volume

            candles.append(Candle(
                time=format_time_label(moment),
                open=open_,
                high=high,
                low=low,
                close=close,
                volume=volume,
            ))

            price = close
            moment += timedelta(milliseconds=bucket_ms)

        self._candles.extend(candles)
        logger.debug("Generated %d history candles from %.5f to %.5f", count, start_price, price)
        return tuple(candles)

    def _step_state(self) -> None:
        """Evolve trend and volatility by one tick."""
        cfg = self._config
        state = self._state

        state.trend = state.trend * cfg.trend_decay + self._random.normal() * cfg.trend_noise
        state.volatility = max(
            cfg.volatility_floor,
            state.volatility * cfg.volatility_decay + self._random.uniform() * cfg.volatility_noise,
        )
        # News event: the spike is not undone, it decays with the next ticks.
        if self._random.uniform() > 1 - cfg.spike_probability:
            state.volatility *= cfg.spike_multiplier
            logger.debug("Volatility spike to %.6f", state.volatility)

    def advance(
        self,
        prev_price: float,
        now: Optional[datetime] = None,
    ) -> tuple[float, CandleSeries]:
        """Advance the simulation by one tick.

        Draw order per tick: trend normal, volatility uniform, spike uniform,
        price normal, early-close uniform.

        The tick time is floored to ``bucket_duration_ms`` before labelling.
        A new candle is opened when that label differs from the last
        candle's label OR the random early close fires; otherwise the
        last candle is extended with the new price. The series is capped at
        ``max_history`` by evicting the oldest candle.

        Args:
            prev_price: Price of the previous tick.
            now: Wall-clock time of this tick. Defaults to now.

        Returns:
            Tuple of (new price, candle series snapshot).
        """
        cfg = self._config
        self._step_state()

        drift = self._state.trend
        diffusion = self._state.volatility * self._random.normal()
        new_price = prev_price + prev_price * (drift + diffusion)
        if new_price < cfg.min_price:
            logger.warning("Price %r clamped to floor %g", new_price, cfg.min_price)
            new_price = cfg.min_price

        label = format_time_label(bucket_start(now or datetime.now(), cfg.bucket_duration_ms))
        early_close = self._random.uniform() > 1 - cfg.early_close_probability

        if not self._candles or early_close or self._candles[-1].time != label:
            self._candles.append(Candle(
                time=label,
                open=new_price,
                high=new_price,
                low=new_price,
                close=new_price,
                volume=1,
            ))
        else:
            last = self._candles[-1]
            self._candles[-1] = last.model_copy(update={
                "close": new_price,
                "high": max(last.high, new_price),
                "low": min(last.low, new_price),
                "volume": last.volume + 1,
            })

        return new_price, tuple(self._candles)
