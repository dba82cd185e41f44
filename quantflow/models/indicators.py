"""Indicator snapshot models."""

from pydantic import BaseModel, Field


class BollingerBands(BaseModel):
    """Bollinger Band envelope for the latest window."""

    upper: float = Field(default=0.0, description="Mean + k standard deviations")
    middle: float = Field(default=0.0, description="Simple mean of the window")
    lower: float = Field(default=0.0, description="Mean - k standard deviations")

    model_config = {"frozen": True}


class MACDValues(BaseModel):
    """Latest MACD line, signal line and histogram."""

    macd: float = Field(default=0.0, description="Fast EMA minus slow EMA")
    signal: float = Field(default=0.0, description="EMA of the MACD line")
    histogram: float = Field(default=0.0, description="MACD minus signal")

    model_config = {"frozen": True}


class StochasticValues(BaseModel):
    """Stochastic oscillator %K and %D."""

    k: float = Field(default=50.0, description="%K, position of close in the range")
    d: float = Field(default=50.0, description="%D")

    model_config = {"frozen": True}


class IndicatorSnapshot(BaseModel):
    """All indicator readings computed from one candle series."""

    rsi: float = Field(default=50.0, ge=0, le=100, description="RSI(14)")
    ema: float = Field(default=0.0, description="EMA(20)")
    bollinger: BollingerBands = Field(default_factory=BollingerBands)
    macd: MACDValues = Field(default_factory=MACDValues)
    stochastic: StochasticValues = Field(default_factory=StochasticValues)

    model_config = {"frozen": True}
