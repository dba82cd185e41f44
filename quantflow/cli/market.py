"""Market data commands for QuantFlow CLI.

Handles listing instruments, printing bootstrap history and taking an
indicator snapshot of the simulated feed.
"""

from typing import Optional

import click
from rich.table import Table

from quantflow.cli.common import (
    SYMBOL_CHOICE,
    console,
    get_app_config,
    price_format,
    with_bot_overrides,
)
from quantflow.cli.render import candles_table, indicator_table
from quantflow.indicators import calculate_stochastic_smoothed
from quantflow.market import DEFAULT_SYMBOL, PAIR_PRICES, MarketGenerator, get_start_price
from quantflow.session import MarketSession


@click.command()
def pairs() -> None:
    """List the simulated instruments and their start prices.

    \b
    Examples:
      quantflow pairs
    """
    table = Table(title="Supported Pairs", show_header=True, header_style="bold cyan")
    table.add_column("Symbol", style="bold")
    table.add_column("Start Price", justify="right")

    for symbol, price in PAIR_PRICES.items():
        marker = " [dim](default)[/dim]" if symbol == DEFAULT_SYMBOL else ""
        table.add_row(f"{symbol}{marker}", price_format(price))

    console.print(table)


@click.command()
@click.option("--symbol", "-s", type=SYMBOL_CHOICE, default=None, help="Instrument symbol.")
@click.option("--count", "-n", type=int, default=None, help="Number of candles to generate.")
@click.option("--bucket-ms", type=click.IntRange(min=1), default=None, help="Candle length in ms.")
@click.option("--tail", type=click.IntRange(min=0), default=20, show_default=True,
              help="Show only the last N candles (0 = all).")
@click.pass_context
def history(
    ctx: click.Context,
    symbol: Optional[str],
    count: Optional[int],
    bucket_ms: Optional[int],
    tail: int,
) -> None:
    """Generate and print a bootstrap candle history.

    \b
    Examples:
      quantflow history
      quantflow history -s XAUUSD -n 100 --tail 0
      quantflow history --bucket-ms 300000
    """
    config = with_bot_overrides(get_app_config(ctx), symbol=symbol)
    sim = config.simulation
    symbol = config.bot.symbol

    generator = MarketGenerator(config=sim)
    candles = generator.generate_history(
        get_start_price(symbol),
        sim.history_count if count is None else count,
        bucket_ms or sim.bucket_duration_ms,
    )

    if not candles:
        console.print("[dim]No candles generated.[/dim]")
        return

    console.print(f"[bold cyan]{symbol}[/bold cyan] [dim]{len(candles)} candles generated[/dim]")
    console.print(candles_table(candles, limit=tail, title=f"{symbol} History"))


@click.command()
@click.option("--symbol", "-s", type=SYMBOL_CHOICE, default=None, help="Instrument symbol.")
@click.option("--ticks", "-t", type=click.IntRange(min=0), default=0, show_default=True,
              help="Live ticks to simulate before taking the snapshot.")
@click.option("--smoothed", is_flag=True, help="Also show %D as a 3-period SMA of %K.")
@click.pass_context
def indicators(ctx: click.Context, symbol: Optional[str], ticks: int, smoothed: bool) -> None:
    """Show an indicator snapshot of the simulated feed.

    \b
    Examples:
      quantflow indicators
      quantflow indicators -s BTCUSD --ticks 50
      quantflow indicators --smoothed
    """
    config = with_bot_overrides(get_app_config(ctx), symbol=symbol)
    session = MarketSession(config)

    for _ in range(ticks):
        session.tick()

    console.print(
        f"[bold cyan]{session.symbol}[/bold cyan] "
        f"{price_format(session.last_price)} "
        f"[dim]({len(session.candles)} candles, {ticks} ticks)[/dim]"
    )
    console.print(indicator_table(session.indicators))

    if smoothed:
        stoch = calculate_stochastic_smoothed(session.candles)
        console.print(f"Stochastic (SMA %D): %K={stoch.k:.1f}, %D={stoch.d:.1f}")
