"""Market Advisor Agent for indicator-driven sentiment.

This agent reads the latest indicator snapshot and returns a structured
BULLISH/BEARISH/NEUTRAL call with a recommendation.
"""

import logging
from typing import Optional, Sequence

from agents import Agent

from quantflow.agents.base import create_agent, get_api_key, run_agent_sync
from quantflow.models import AIAnalysisResult, BotConfig, Candle, IndicatorSnapshot

logger = logging.getLogger(__name__)


MARKET_ADVISOR_INSTRUCTIONS = """You are an expert high-frequency trading bot for MT5.
You read technical indicator values for a forex, metals or crypto pair and
give a short, decisive market read.

Always answer with:
- sentiment: BULLISH, BEARISH or NEUTRAL
- confidence: a number from 0 to 100
- recommendation: the action (Buy/Sell/Hold)
- reasoning: one or two short sentences
"""

SCALPING_FOCUS = "(Focus on quick, short-term entries)"
SCALPING_TASK = (
    "Since strategy is SCALPING, look for small price deviations at Bollinger "
    "bands combined with Stochastic crossovers."
)
TREND_TASK = "Look for trend confirmation."


def build_analysis_prompt(
    candles: Sequence[Candle],
    config: BotConfig,
    indicators: IndicatorSnapshot,
) -> str:
    """Build the analysis prompt from the latest market state.

    Args:
        candles: Candle series, oldest first. Must not be empty.
        config: Bot configuration (symbol, strategy).
        indicators: Latest indicator snapshot.

    Returns:
        Prompt text.
    """
    price = candles[-1].close
    scalping = config.strategy == "SCALPING"
    focus = f" {SCALPING_FOCUS}" if scalping else ""
    task = SCALPING_TASK if scalping else TREND_TASK

    return f"""Current Configuration:
- Symbol: {config.symbol}
- Price: {price:.5f}
- Strategy: {config.strategy}{focus}

Technical Indicators (Calculated):
1. RSI (14): {indicators.rsi:.2f}
2. MACD Histogram: {indicators.macd.histogram:.6f}
3. Bollinger Bands: Upper {indicators.bollinger.upper:.5f}, Lower {indicators.bollinger.lower:.5f}.
4. EMA (20): {indicators.ema:.5f}
5. Stochastic: %K {indicators.stochastic.k:.1f}

Task:
Analyze these 5 indicators.
{task}"""


class MarketAdvisorAgent:
    """Agent producing a structured market read from indicators."""

    def __init__(self, model: Optional[str] = None):
        """Initialize the Market Advisor Agent.

        Args:
            model: Optional model override.
        """
        self.model = model
        self._agent: Optional[Agent] = None

    def _get_agent(self) -> Agent:
        if self._agent is None:
            self._agent = create_agent(
                name="Market Advisor Agent",
                instructions=MARKET_ADVISOR_INSTRUCTIONS,
                model=self.model,
                output_type=AIAnalysisResult,
            )
        return self._agent

    def analyze(
        self,
        candles: Sequence[Candle],
        config: BotConfig,
        indicators: IndicatorSnapshot,
    ) -> AIAnalysisResult:
        """Ask the model for a market read.

        Never raises: a missing API key, empty data or a failed call all
        return a neutral, zero-confidence result.

        Args:
            candles: Candle series, oldest first.
            config: Bot configuration.
            indicators: Latest indicator snapshot.

        Returns:
            AIAnalysisResult from the model, or a neutral fallback.
        """
        if not get_api_key():
            return AIAnalysisResult.neutral("API Key missing.", "Cannot connect to the AI service.")

        if not candles:
            return AIAnalysisResult.neutral("No market data.", "The candle series is empty.")

        prompt = build_analysis_prompt(candles, config, indicators)

        try:
            output = run_agent_sync(self._get_agent(), prompt)
            if isinstance(output, AIAnalysisResult):
                return output
            if isinstance(output, dict):
                return AIAnalysisResult.model_validate(output)
            if isinstance(output, str) and output.strip():
                return AIAnalysisResult.model_validate_json(output)
            raise ValueError("Empty response from AI")
        except Exception:
            logger.exception("Market analysis failed for %s", config.symbol)
            return AIAnalysisResult.neutral("Analysis Error", "Failed to process market data.")
