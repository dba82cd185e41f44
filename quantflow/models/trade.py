"""Trade data model."""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field


class TradeType(str, Enum):
    """Trade direction."""

    BUY = "BUY"
    SELL = "SELL"


class Trade(BaseModel):
    """Represents a simulated trade filled by the bot."""

    id: str = Field(..., min_length=1, description="Trade identifier")
    symbol: str = Field(..., min_length=1, description="Instrument symbol")
    type: TradeType = Field(..., description="Trade side")
    entry_price: float = Field(..., gt=0, description="Fill price")
    exit_price: Optional[float] = Field(default=None, gt=0, description="Exit price")
    lot_size: float = Field(..., gt=0, description="Lot size")
    profit: float = Field(..., description="Realized profit in account currency")
    status: Literal["OPEN", "CLOSED"] = Field(..., description="Trade status")
    timestamp: int = Field(..., ge=0, description="Epoch milliseconds")

    model_config = {"frozen": True}
