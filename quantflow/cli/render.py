"""Rich renderables for candles, indicators, trades and AI results."""

from datetime import datetime
from itertools import islice
from typing import Collection, Optional, Sequence

from rich.console import Group
from rich.panel import Panel
from rich.table import Table

from quantflow.bot import macd_signal, rsi_signal, stochastic_signal
from quantflow.cli.common import price_format
from quantflow.models import AIAnalysisResult, Candle, IndicatorSnapshot, Trade
from quantflow.session import MarketSession

SIGNAL_COLORS = {"BUY": "green", "SELL": "red", "NEUTRAL": "dim"}
SENTIMENT_COLORS = {"BULLISH": "green", "BEARISH": "red", "NEUTRAL": "yellow"}


def _signal_cell(signal: str) -> str:
    color = SIGNAL_COLORS[signal]
    return f"[{color}]{signal}[/{color}]"


def candles_table(candles: Sequence[Candle], limit: int = 15, title: str = "Candles") -> Table:
    """Table of the most recent candles, newest at the bottom."""
    table = Table(title=title, show_header=True, header_style="bold cyan")

    table.add_column("Time", style="dim")
    table.add_column("Open", justify="right")
    table.add_column("High", justify="right", style="green")
    table.add_column("Low", justify="right", style="red")
    table.add_column("Close", justify="right", style="bold")
    table.add_column("Volume", justify="right", style="dim")

    for candle in candles[-limit:] if limit > 0 else candles:
        color = "green" if candle.close >= candle.open else "red"
        table.add_row(
            candle.time,
            price_format(candle.open),
            price_format(candle.high),
            price_format(candle.low),
            f"[{color}]{price_format(candle.close)}[/{color}]",
            str(candle.volume),
        )

    return table


def indicator_table(snapshot: IndicatorSnapshot) -> Table:
    """Indicator cards: value and simple BUY/SELL/NEUTRAL read."""
    table = Table(title="Indicators", show_header=True, header_style="bold")

    table.add_column("Indicator", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Signal", justify="center")

    hist = snapshot.macd.histogram
    hist_color = "green" if hist > 0 else "red"
    bands = snapshot.bollinger

    table.add_row("RSI (14)", f"{snapshot.rsi:.1f}", _signal_cell(rsi_signal(snapshot.rsi)))
    table.add_row(
        "MACD",
        f"[{hist_color}]{hist:.5f}[/{hist_color}]",
        _signal_cell(macd_signal(hist)),
    )
    table.add_row(
        "Stochastic",
        f"[magenta]{snapshot.stochastic.k:.1f}[/magenta] / {snapshot.stochastic.d:.1f}",
        _signal_cell(stochastic_signal(snapshot.stochastic.k)),
    )
    table.add_row("EMA (20)", f"[blue]{price_format(snapshot.ema)}[/blue]", _signal_cell("NEUTRAL"))
    table.add_row(
        "Bollinger",
        f"[orange3]{price_format(bands.lower)} - {price_format(bands.upper)}[/orange3]",
        _signal_cell("NEUTRAL"),
    )

    return table


def trade_log_table(
    trades: Collection[Trade],
    limit: int = 10,
    executed: Optional[int] = None,
) -> Table:
    """Trade history, newest first.

    ``executed`` is the session's total trade count when the log is bounded.
    """
    shown = list(islice(trades, limit))
    if executed is None:
        executed = len(trades)

    table = Table(
        title=f"Trade History ({executed} Executed)",
        show_header=True,
        header_style="bold",
    )

    table.add_column("Time", style="dim")
    table.add_column("Type", justify="center")
    table.add_column("Price", justify="right")
    table.add_column("Lot", justify="right")
    table.add_column("Profit", justify="right")

    for trade in shown:
        type_color = "green" if trade.type.value == "BUY" else "red"
        pnl_color = "green" if trade.profit >= 0 else "red"
        pnl_sign = "+" if trade.profit >= 0 else ""
        table.add_row(
            datetime.fromtimestamp(trade.timestamp / 1000).strftime("%H:%M:%S"),
            f"[{type_color}]{trade.type.value}[/{type_color}]",
            price_format(trade.entry_price),
            f"{trade.lot_size:g}",
            f"[{pnl_color}]{pnl_sign}{trade.profit:.2f}[/{pnl_color}]",
        )

    if not shown:
        table.add_row("[dim]No trades yet[/dim]", "", "", "", "")

    return table


def analysis_panel(result: AIAnalysisResult, symbol: str) -> Panel:
    """Panel showing an AI market read."""
    color = SENTIMENT_COLORS[result.sentiment]
    body = (
        f"[bold {color}]{result.sentiment}[/bold {color}]  "
        f"Confidence: [bold]{result.confidence:.0f}%[/bold]\n\n"
        f"[bold]Recommendation:[/bold] {result.recommendation}\n\n"
        f"{result.reasoning}"
    )
    return Panel(body, title=f"[bold]AI Advisor - {symbol}[/bold]", border_style=color)


def dashboard(session: MarketSession, candle_rows: int = 12) -> Group:
    """Full live dashboard for a session."""
    bot = session.bot_config
    candles = session.candles
    change = 0.0
    if candles:
        change = session.last_price - candles[0].open
    change_color = "green" if change >= 0 else "red"
    bot_state = "[green]ACTIVE[/green]" if bot.is_active else "[dim]PAUSED[/dim]"

    header = Panel(
        f"[bold]{session.symbol}[/bold]  "
        f"[{change_color}]{price_format(session.last_price)}[/{change_color}]  "
        f"[dim]|[/dim] Strategy: [cyan]{bot.strategy}[/cyan]  "
        f"[dim]|[/dim] Bot: {bot_state}  "
        f"[dim]|[/dim] P&L: {session.total_profit:+.2f}",
        title="[bold cyan]QuantFlow[/bold cyan] [blue]LIVE[/blue]",
        subtitle="[dim]Ctrl+C to stop[/dim]",
        border_style="cyan",
    )

    return Group(
        header,
        candles_table(candles, limit=candle_rows, title=f"{session.symbol} Candles"),
        indicator_table(session.indicators),
        trade_log_table(session.trades, executed=session.trade_count),
    )
