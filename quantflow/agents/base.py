"""Base utilities for AI agents.

This module provides common utilities for creating and running AI agents
using the OpenAI Agents SDK.
"""

import os
from typing import Any, Optional

# Disable tracing to avoid noisy 503 errors from telemetry
os.environ.setdefault("OPENAI_AGENTS_DISABLE_TRACING", "1")

from agents import Agent, Runner

from quantflow.config import DEFAULT_MODEL


def get_model(default: Optional[str] = None) -> str:
    """Get the model to use for agents.

    Checks the QUANTFLOW_MODEL environment variable, then the configured
    default, then the built-in default.

    Args:
        default: Configured model name, if any.

    Returns:
        Model name string.
    """
    return os.environ.get("QUANTFLOW_MODEL") or default or DEFAULT_MODEL


def get_api_key() -> Optional[str]:
    """Get the OpenAI API key.

    Returns:
        API key string or None if not configured.
    """
    return os.environ.get("OPENAI_API_KEY") or None


def create_agent(
    name: str,
    instructions: str,
    model: Optional[str] = None,
    output_type: Optional[type] = None,
) -> Agent:
    """Create an AI agent with the specified configuration.

    Args:
        name: Name of the agent.
        instructions: System instructions for the agent.
        model: Optional model override. Uses default if not specified.
        output_type: Optional pydantic model for structured output.

    Returns:
        Configured Agent instance.
    """
    return Agent(
        name=name,
        instructions=instructions,
        model=model or get_model(),
        output_type=output_type,
    )


def _log_agent_call(agent: Agent) -> None:
    """Log agent call info to terminal.

    Args:
        agent: The agent being called.
    """
    from rich.console import Console

    console = Console(stderr=True)
    console.print(f"[dim]🤖 Agent: {agent.name} | Model: {agent.model}[/dim]")


def run_agent_sync(
    agent: Agent,
    message: str,
    context: Optional[dict[str, Any]] = None,
) -> Any:
    """Run an agent synchronously and return its final output.

    Args:
        agent: The agent to run.
        message: User message to send to the agent.
        context: Optional context dictionary to pass to the agent.

    Returns:
        The agent's final output: a string, or an instance of the agent's
        ``output_type``.
    """
    _log_agent_call(agent)
    result = Runner.run_sync(agent, message, context=context)
    return result.final_output
