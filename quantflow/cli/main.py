"""Main CLI entry point for QuantFlow.

This module provides the main click group and lazy loading
for heavy imports to improve startup time.
"""

from pathlib import Path
from typing import Optional

import click

from quantflow.cli.common import setup_logging


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    This improves CLI startup time by only importing
    command modules when they are actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        attr = getattr(module, cmd_name, None)
        if not isinstance(attr, click.Command):
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(attr)
        return attr


# Define lazy subcommands mapping
LAZY_SUBCOMMANDS = {
    "init": "quantflow.cli.settings",
    # Simulated feed
    "pairs": "quantflow.cli.market",
    "history": "quantflow.cli.market",
    "indicators": "quantflow.cli.market",
    "live": "quantflow.cli.live",
    # AI Features
    "advise": "quantflow.cli.ai",
    "code": "quantflow.cli.ai",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="quantflow")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.toml (default: ~/.config/quantflow/config.toml).",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Optional[Path]) -> None:
    """QuantFlow - simulated trading dashboard with an AI strategy advisor.

    Simulates a live price feed, computes technical indicators, runs a
    rule-based bot against it and asks an AI model for a market read.

    \b
    Quick Start:
      quantflow live --bot          # Live dashboard with the bot running
      quantflow indicators          # Indicator snapshot
      quantflow advise              # AI sentiment on the current market
    """
    setup_logging(verbose)
    obj = ctx.ensure_object(dict)
    obj["config_path"] = config_path


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
