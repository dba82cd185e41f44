"""CLI commands for QuantFlow.

This package provides the command-line interface for QuantFlow,
including the simulated feed, indicators, live dashboard and AI commands.
"""

from quantflow.cli.main import cli, main

__all__ = ["cli", "main"]
