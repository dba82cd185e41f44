"""AI commands for QuantFlow CLI.

Sends the simulated market state to the advisor agent, and generates or
fixes MQL5 Expert Advisor code with the coder agent.
"""

from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel
from rich.syntax import Syntax

from quantflow.cli.common import SYMBOL_CHOICE, console, get_app_config, with_bot_overrides
from quantflow.models.bot import STRATEGIES


def _missing_key_hint() -> None:
    console.print(Panel(
        "[yellow]OPENAI_API_KEY is not set.[/yellow]\n\n"
        "Export it to enable AI features:\n"
        "[cyan]export OPENAI_API_KEY=sk-...[/cyan]",
        title="[bold yellow]AI Unavailable[/bold yellow]",
        border_style="yellow",
    ))


@click.command()
@click.option("--symbol", "-s", type=SYMBOL_CHOICE, default=None, help="Instrument symbol.")
@click.option("--strategy", type=click.Choice(STRATEGIES, case_sensitive=False), default=None,
              help="Strategy to tailor the analysis to.")
@click.option("--ticks", "-t", type=click.IntRange(min=0), default=0, show_default=True,
              help="Live ticks to simulate before asking.")
@click.pass_context
def advise(ctx: click.Context, symbol: Optional[str], strategy: Optional[str], ticks: int) -> None:
    """Ask the AI advisor for a read on the simulated market.

    \b
    Examples:
      quantflow advise
      quantflow advise -s BTCUSD --strategy RSI_MACD --ticks 20
    """
    from quantflow.agents import MarketAdvisorAgent, get_api_key, get_model
    from quantflow.cli.render import analysis_panel, indicator_table
    from quantflow.session import MarketSession

    config = with_bot_overrides(get_app_config(ctx), symbol=symbol, strategy=strategy)
    session = MarketSession(config)

    for _ in range(ticks):
        session.tick()

    console.print(indicator_table(session.indicators))

    if not get_api_key():
        _missing_key_hint()

    agent = MarketAdvisorAgent(model=get_model(config.ai.model))
    with console.status("[cyan]Analyzing market...[/cyan]"):
        result = agent.analyze(session.candles, session.bot_config, session.indicators)

    console.print(analysis_panel(result, session.symbol))


def _write_or_print(code: str, output: Optional[Path]) -> None:
    if output is None:
        console.print(Syntax(code, "cpp", theme="monokai", line_numbers=True))
        return

    output.write_text(code + "\n")
    console.print(f"[green]Saved to {output}[/green]")


@click.group()
def code() -> None:
    """Generate and fix MQL5 Expert Advisor code.

    \b
    Commands:
      generate  - Write an EA from a description
      fix       - Repair an EA given an error or change request
    """
    pass


@code.command()
@click.argument("description")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Write the code to a file instead of the terminal.")
@click.pass_context
def generate(ctx: click.Context, description: str, output: Optional[Path]) -> None:
    """Generate an MQL5 Expert Advisor from DESCRIPTION.

    \b
    Examples:
      quantflow code generate "RSI scalper on EURUSD M1 with 10 pip SL"
      quantflow code generate "MA cross" -o MACross.mq5
    """
    from quantflow.agents import StrategyCoderAgent, get_api_key, get_model

    if not get_api_key():
        _missing_key_hint()

    config = get_app_config(ctx)
    agent = StrategyCoderAgent(model=get_model(config.ai.model))
    with console.status("[cyan]Generating code...[/cyan]"):
        result = agent.generate(description)

    _write_or_print(result, output)


@code.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("error")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Write the fixed code to a file instead of the terminal.")
@click.pass_context
def fix(ctx: click.Context, source: Path, error: str, output: Optional[Path]) -> None:
    """Fix the MQL5 code in SOURCE given an ERROR or change request.

    \b
    Examples:
      quantflow code fix MACross.mq5 "'trade' - undeclared identifier"
      quantflow code fix MACross.mq5 "add a trailing stop" -o MACross.mq5
    """
    from quantflow.agents import StrategyCoderAgent, get_api_key, get_model

    try:
        current = source.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Could not read {source}: {e}") from e

    if not get_api_key():
        _missing_key_hint()

    config = get_app_config(ctx)
    agent = StrategyCoderAgent(model=get_model(config.ai.model))
    with console.status("[cyan]Fixing code...[/cyan]"):
        result = agent.fix(current, error)

    _write_or_print(result, output)
