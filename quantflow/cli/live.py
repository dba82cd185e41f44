"""Live dashboard command for QuantFlow CLI.

Runs the tick loop: every tick advances the simulated feed and recomputes
the indicators; the bot is evaluated on its own, slower period.
"""

import logging
import time
from typing import Callable, Optional

import click
from rich.panel import Panel

from quantflow.cli.common import SYMBOL_CHOICE, console, get_app_config, with_bot_overrides
from quantflow.cli.render import dashboard
from quantflow.models.bot import STRATEGIES
from quantflow.session import MarketSession

logger = logging.getLogger(__name__)


def run_loop(
    session: MarketSession,
    interval_ms: int,
    bot_interval_ms: int,
    ticks: int = 0,
    on_tick: Optional[Callable[[MarketSession], None]] = None,
    sleep=time.sleep,
) -> int:
    """Drive the session on a fixed tick period.

    Args:
        session: Session to drive.
        interval_ms: Tick period.
        bot_interval_ms: Bot evaluation period.
        ticks: Number of ticks to run; 0 runs until interrupted.
        on_tick: Optional callback invoked after every tick.
        sleep: Sleep function, injectable for tests.

    Returns:
        Number of ticks completed.
    """
    done = 0
    since_bot_ms = 0

    while ticks == 0 or done < ticks:
        sleep(interval_ms / 1000)
        session.tick()
        done += 1

        since_bot_ms += interval_ms
        if since_bot_ms >= bot_interval_ms:
            since_bot_ms = 0
            session.run_bot()

        if on_tick is not None:
            on_tick(session)

    return done


@click.command()
@click.option("--symbol", "-s", type=SYMBOL_CHOICE, default=None, help="Instrument symbol.")
@click.option("--strategy", type=click.Choice(STRATEGIES, case_sensitive=False), default=None,
              help="Bot strategy.")
@click.option("--bot/--no-bot", default=False, show_default=True, help="Start with the bot active.")
@click.option("--interval-ms", type=click.IntRange(min=1), default=None,
              help="Tick period in milliseconds.")
@click.option("--ticks", "-t", type=click.IntRange(min=0), default=0, show_default=True,
              help="Stop after N ticks (0 = run until Ctrl+C).")
@click.option("--rows", type=click.IntRange(min=1), default=12, show_default=True,
              help="Candle rows to display.")
@click.pass_context
def live(
    ctx: click.Context,
    symbol: Optional[str],
    strategy: Optional[str],
    bot: bool,
    interval_ms: Optional[int],
    ticks: int,
    rows: int,
) -> None:
    """Run the live simulated market dashboard.

    Press Ctrl+C to stop.

    \b
    Examples:
      quantflow live
      quantflow live -s XAUUSD --bot --strategy RSI_MACD
      quantflow live --interval-ms 250 --ticks 100
    """
    from rich.live import Live

    config = with_bot_overrides(get_app_config(ctx), symbol=symbol, strategy=strategy)
    sim = config.simulation

    session = MarketSession(config)
    if bot and not session.bot_config.is_active:
        session.toggle_bot()

    interval = interval_ms or sim.tick_interval_ms

    try:
        with Live(dashboard(session, rows), refresh_per_second=4, console=console) as live_display:
            completed = run_loop(
                session,
                interval,
                sim.bot_interval_ms,
                ticks=ticks,
                on_tick=lambda s: live_display.update(dashboard(s, rows)),
            )
        logger.debug("Simulation finished after %d ticks", completed)
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped simulation.[/dim]")

    console.print(Panel(
        f"Trades: {session.trade_count}  P&L: {session.total_profit:+.2f}  "
        f"Last price: {session.last_price:.5f}",
        title="[bold]Session Summary[/bold]",
        border_style="dim",
    ))
