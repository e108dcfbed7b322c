"""Rich-based terminal rendering of the dashboard state.

Uses ``rich.console.Console`` for all output. Color scheme:
green = up, red = down, grey = flat.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from Stock_Pulse.dashboard.derive import change_indicator
from Stock_Pulse.models.dashboard import DashboardState
from Stock_Pulse.models.market_data import DailyBar, QuoteSnapshot
from Stock_Pulse.reporting.formatters import DIRECTION_STYLES, format_money, format_volume

logger = logging.getLogger(__name__)

# Shared console instance for terminal output
console = Console()

COLOR_HEADER: str = "bold cyan"
COLOR_ERROR: str = "bold red"
COLOR_FAVORITE: str = "yellow"


def _change_text(snapshot: QuoteSnapshot) -> Text:
    indicator = change_indicator(snapshot.close, snapshot.previous_close)
    if indicator is None:
        return Text("")
    return Text(indicator.text, style=f"bold {DIRECTION_STYLES[indicator.direction]}")


def render_history(history: tuple[str, ...], favorites: tuple[str, ...] = ()) -> None:
    """One line of recently searched symbols, favorites starred."""
    if not history:
        return
    line = Text("Search History: ", style="bold")
    for symbol in history:
        style = COLOR_FAVORITE if symbol in favorites else ""
        line.append(f"{symbol}{' ★' if symbol in favorites else ''}  ", style=style)
    console.print(line)


def render_snapshot(snapshot: QuoteSnapshot, *, favorite: bool = False) -> None:
    """Summary card: latest bar with the change indicator next to the close."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    close_cell = Text(format_money(snapshot.close) + " ")
    close_cell.append_text(_change_text(snapshot))

    table.add_row("Open", format_money(snapshot.open))
    table.add_row("High", format_money(snapshot.high))
    table.add_row("Low", format_money(snapshot.low))
    table.add_row("Close", close_cell)
    table.add_row("Volume", format_volume(snapshot.volume))

    star = " ★" if favorite else ""
    console.print(
        Panel(
            table,
            title=f"{snapshot.symbol} — {snapshot.date.isoformat()}{star}",
            style=COLOR_HEADER,
        )
    )


def render_series(series: tuple[DailyBar, ...]) -> None:
    """Recent days summary table, newest first."""
    if not series:
        return
    table = Table(title=f"Last {len(series)} Days Summary", show_lines=False)
    table.add_column("Date")
    for name in ("Open", "High", "Low", "Close"):
        table.add_column(name, justify="right")
    table.add_column("Volume", justify="right")

    for bar in series:
        table.add_row(
            bar.date.isoformat(),
            format_money(bar.open),
            format_money(bar.high),
            format_money(bar.low),
            format_money(bar.close),
            format_volume(bar.volume),
        )
    console.print(table)


def render_dashboard(state: DashboardState) -> None:
    """Render the whole dashboard: error, history, card, and recent days."""
    if state.error:
        console.print(state.error, style=COLOR_ERROR)
    render_history(state.history, state.favorites)
    if state.snapshot is not None:
        render_snapshot(state.snapshot, favorite=state.snapshot.symbol in state.favorites)
        render_series(state.series)
