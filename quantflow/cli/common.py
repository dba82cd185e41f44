"""Helpers shared by the CLI commands."""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from quantflow.config import AppConfig, load_config
from quantflow.market import SUPPORTED_PAIRS
from quantflow.models import BotConfig

console = Console()

SYMBOL_CHOICE = click.Choice(SUPPORTED_PAIRS, case_sensitive=False)


def setup_logging(verbose: bool) -> None:
    """Route log records through rich; DEBUG when verbose, else WARNING."""
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def get_app_config(ctx: click.Context) -> AppConfig:
    """Load the configuration once per invocation and cache it on the context."""
    obj = ctx.ensure_object(dict)
    if "config" not in obj:
        config_path: Optional[Path] = obj.get("config_path")
        obj["config"] = load_config(config_path)
    return obj["config"]


def with_bot_overrides(
    config: AppConfig,
    symbol: Optional[str] = None,
    strategy: Optional[str] = None,
) -> AppConfig:
    """Apply command-line symbol/strategy overrides to the bot config."""
    updates = {}
    if symbol:
        updates["symbol"] = symbol.upper()
    if strategy:
        updates["strategy"] = strategy.upper()
    if not updates:
        return config

    bot = BotConfig.model_validate({**config.bot.model_dump(), **updates})
    return config.model_copy(update={"bot": bot})


def price_format(price: float) -> str:
    """Format a price with precision suited to its magnitude."""
    if price >= 1000:
        return f"{price:,.2f}"
    if price >= 100:
        return f"{price:.3f}"
    return f"{price:.5f}"
