"""Configuration loading for QuantFlow.

Settings live in a TOML file (``~/.config/quantflow/config.toml`` by default,
overridable with ``QUANTFLOW_CONFIG``). Every section is optional; missing
keys fall back to the defaults below.

Example::

    [simulation]
    tick_interval_ms = 250
    early_close_probability = 0.0

    [bot]
    strategy = "RSI_MACD"
    lot_size = 0.5

    [ai]
    model = "gpt-4o-mini"
"""

import logging
import os
from pathlib import Path
from typing import Optional

import click
from pydantic import BaseModel, Field, ValidationError

from quantflow.models import BotConfig

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "quantflow"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"

# Default model for the advisor agents
DEFAULT_MODEL = "gpt-4o-mini"


class ConfigError(click.ClickException):
    """Raised when the configuration file cannot be parsed or validated."""


class SimulationConfig(BaseModel):
    """Tunable constants of the synthetic market generator."""

    history_count: int = Field(default=300, ge=0, description="Bootstrap candle count")
    bucket_duration_ms: int = Field(default=60_000, gt=0, description="Candle bucket length")
    tick_interval_ms: int = Field(default=500, gt=0, description="Live tick period")
    bot_interval_ms: int = Field(default=1000, gt=0, description="Bot evaluation period")
    max_history: int = Field(default=500, ge=1, description="Retained candle cap")
    max_trades: int = Field(default=100, ge=1, description="Retained trade log entries")

    # Bootstrap random walk
    history_trend_decay: float = 0.9
    history_trend_noise: float = 0.002
    history_diffusion: float = 0.0005
    wick_factor: float = 0.5
    min_volume: int = 50
    volume_range: int = 500

    # Live tick random walk
    trend_decay: float = 0.98
    trend_noise: float = 0.00002
    initial_volatility: float = Field(default=0.0001, gt=0)
    volatility_floor: float = Field(default=0.00005, gt=0)
    volatility_decay: float = 0.99
    volatility_noise: float = 0.00001
    spike_probability: float = Field(default=0.02, ge=0, le=1)
    spike_multiplier: float = 2.0
    early_close_probability: float = Field(default=0.10, ge=0, le=1)

    min_price: float = Field(default=1e-8, gt=0, description="Price floor")

    model_config = {"frozen": True}


class AIConfig(BaseModel):
    """Settings for the hosted language model."""

    model: str = Field(default=DEFAULT_MODEL, description="Model name")

    model_config = {"frozen": True}


class AppConfig(BaseModel):
    """Top-level application configuration."""

    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    bot: BotConfig = Field(default_factory=BotConfig)
    ai: AIConfig = Field(default_factory=AIConfig)

    model_config = {"frozen": True}


def get_config_path() -> Path:
    """Get the configuration file path, honouring ``QUANTFLOW_CONFIG``."""
    override = os.environ.get("QUANTFLOW_CONFIG")
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load and validate the application configuration.

    Args:
        path: Optional explicit config path. Defaults to ``get_config_path()``.

    Returns:
        Validated AppConfig. Defaults are used when the file does not exist.

    Raises:
        ConfigError: If the file exists but is not valid TOML or fails validation.
    """
    import toml

    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return AppConfig()

    try:
        raw = toml.load(config_path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"Could not read config file {config_path}: {e}") from e

    try:
        config = AppConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {config_path}:\n{e}") from e

    logger.debug("Loaded config from %s", config_path)
    return config


def create_template_config(path: Optional[Path] = None) -> Path:
    """Write a template configuration file with the default values.

    Args:
        path: Optional destination path.

    Returns:
        Path of the written file.
    """
    import toml

    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    defaults = AppConfig()
    template = {
        "simulation": {
            "tick_interval_ms": defaults.simulation.tick_interval_ms,
            "bot_interval_ms": defaults.simulation.bot_interval_ms,
            "early_close_probability": defaults.simulation.early_close_probability,
            "max_history": defaults.simulation.max_history,
        },
        "bot": defaults.bot.model_dump(exclude={"is_active"}),
        "ai": defaults.ai.model_dump(),
    }

    with open(config_path, "w") as f:
        toml.dump(template, f)

    return config_path
