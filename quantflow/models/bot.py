"""Bot configuration model."""

from typing import Literal

from pydantic import BaseModel, Field

Strategy = Literal["SCALPING", "RSI_MACD", "MA_CROSS", "AI_ADAPTIVE"]
RiskLevel = Literal["LOW", "MEDIUM", "HIGH"]

STRATEGIES: tuple[str, ...] = ("SCALPING", "RSI_MACD", "MA_CROSS", "AI_ADAPTIVE")


class BotConfig(BaseModel):
    """User-selected bot settings."""

    symbol: str = Field(default="EURUSD", min_length=1, description="Instrument symbol")
    lot_size: float = Field(default=0.1, gt=0, description="Lot size per trade")
    stop_loss: float = Field(default=50, ge=0, description="Stop loss in pips")
    take_profit: float = Field(default=100, ge=0, description="Take profit in pips")
    strategy: Strategy = Field(default="SCALPING", description="Signal strategy")
    risk_level: RiskLevel = Field(default="HIGH", description="Risk appetite")
    is_active: bool = Field(default=False, description="Whether the bot trades")

    model_config = {"frozen": True}
