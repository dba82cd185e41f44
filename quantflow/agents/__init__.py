"""AI agents for QuantFlow.

This module provides the agents that talk to the hosted language model:
- MarketAdvisorAgent: Structured sentiment from indicator readings
- StrategyCoderAgent: MQL5 Expert Advisor generation and repair
"""

from quantflow.agents.base import (
    create_agent,
    get_api_key,
    get_model,
    run_agent_sync,
)
from quantflow.agents.advisor import MarketAdvisorAgent, build_analysis_prompt
from quantflow.agents.coder import StrategyCoderAgent, strip_code_fences

__all__ = [
    # Base utilities
    "create_agent",
    "get_api_key",
    "get_model",
    "run_agent_sync",
    # Agents
    "MarketAdvisorAgent",
    "StrategyCoderAgent",
    # Utility functions
    "build_analysis_prompt",
    "strip_code_fences",
]
