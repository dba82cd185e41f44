"""Candle (OHLCV) data model."""

from pydantic import BaseModel, Field, model_validator


class Candle(BaseModel):
    """Represents a single time-bucketed OHLCV candle."""

    time: str = Field(..., description="Display label of the time bucket (HH:MM)")
    open: float = Field(..., gt=0, description="Opening price")
    high: float = Field(..., gt=0, description="High price")
    low: float = Field(..., gt=0, description="Low price")
    close: float = Field(..., gt=0, description="Closing price")
    volume: int = Field(..., ge=0, description="Tick count within the bucket")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_range(self) -> "Candle":
        if not self.low <= min(self.open, self.close) <= max(self.open, self.close) <= self.high:
            raise ValueError(
                f"OHLC out of range: open={self.open} high={self.high} "
                f"low={self.low} close={self.close}"
            )
        return self


# Immutable snapshot handed to consumers, oldest candle first.
CandleSeries = tuple[Candle, ...]
