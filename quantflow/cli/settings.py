"""Configuration command for QuantFlow CLI."""

import click
from rich.panel import Panel

from quantflow.cli.common import console
from quantflow.config import create_template_config, get_config_path


@click.command()
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Create a template configuration file.

    The file is written to the --config path, the QUANTFLOW_CONFIG
    environment variable, or ~/.config/quantflow/config.toml.

    \b
    Examples:
      quantflow init
      quantflow init --force
    """
    config_path = ctx.ensure_object(dict).get("config_path") or get_config_path()

    if config_path.exists() and not force:
        console.print(
            f"[yellow]Config already exists at {config_path}[/yellow]\n"
            "Use [cyan]--force[/cyan] to overwrite."
        )
        return

    path = create_template_config(config_path)
    console.print(Panel(
        f"[green]Config written to[/green] {path}\n\n"
        "Edit it to change the simulation, bot defaults or AI model.",
        title="[bold green]Config Created[/bold green]",
        border_style="green",
    ))
