"""AI analysis result model."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class AIAnalysisResult(BaseModel):
    """Structured market read returned by the advisor agent."""

    sentiment: Literal["BULLISH", "BEARISH", "NEUTRAL"] = Field(
        ..., description="Overall market bias"
    )
    confidence: float = Field(..., description="Confidence 0-100")
    recommendation: str = Field(..., description="Action: Buy/Sell/Hold")
    reasoning: str = Field(..., description="Short concise explanation")

    model_config = {"frozen": True}

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        # Clamp to the 0-100 scale.
        return max(0.0, min(100.0, value))

    @classmethod
    def neutral(cls, recommendation: str, reasoning: str) -> "AIAnalysisResult":
        """Build the zero-confidence fallback result."""
        return cls(
            sentiment="NEUTRAL",
            confidence=0,
            recommendation=recommendation,
            reasoning=reasoning,
        )
