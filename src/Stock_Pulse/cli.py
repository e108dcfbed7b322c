"""CLI entry point for Stock Pulse — a single-symbol stock quote dashboard.

Provides the ``stock-pulse`` command: ``serve`` runs the quote gateway, the
other subcommands drive the dashboard controller against a running gateway
and render the result in the terminal.

This is the ONLY module where console output is produced. All other modules
use ``logging``. Async internals are bridged to typer's synchronous
interface via ``asyncio.run()``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from Stock_Pulse.config import Settings
from Stock_Pulse.dashboard.controller import DashboardController
from Stock_Pulse.data.store import JsonFileStore
from Stock_Pulse.logging_config import configure_logging
from Stock_Pulse.models.dashboard import DashboardState
from Stock_Pulse.reporting.terminal import render_dashboard
from Stock_Pulse.services.gateway_client import QuoteGatewayClient

app = typer.Typer(name="stock-pulse", help="Stock quote dashboard and gateway")

console = Console()

DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 8000


def _settings(gateway_url: str | None) -> Settings:
    settings = Settings.from_env()
    if gateway_url:
        settings = settings.model_copy(update={"gateway_url": gateway_url})
    return settings


class _OfflineGateway:
    """Gateway stand-in for commands that only touch the persisted lists."""

    async def get_stock(self, symbol: str) -> tuple[int, Any]:
        msg = f"No gateway available to fetch {symbol}"
        raise RuntimeError(msg)


def _offline_controller(settings: Settings) -> DashboardController:
    """Controller for list-only commands; never issues a request."""
    controller = DashboardController(_OfflineGateway(), JsonFileStore(settings.state_path))
    controller.restore()
    return controller


GatewayOption = Annotated[
    str | None, typer.Option("--gateway-url", help="Base URL of the quote gateway")
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")]


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Interface to bind")] = DEFAULT_HOST,
    port: Annotated[int, typer.Option(help="Port to listen on")] = DEFAULT_PORT,
    log_level: Annotated[
        str, typer.Option(help="Root log level (default: LOG_LEVEL or INFO)")
    ] = "",
    verbose: VerboseOption = False,
) -> None:
    """Run the quote gateway (GET /api/stock?symbol=...)."""
    import uvicorn

    from Stock_Pulse.web.app import create_app

    gateway = create_app(log_level="DEBUG" if verbose else log_level)
    # log_config=None keeps the root handler create_app installed
    uvicorn.run(gateway, host=host, port=port, log_config=None)


# ---------------------------------------------------------------------------
# quote / open
# ---------------------------------------------------------------------------


async def _run_fetch(settings: Settings, symbol: str) -> DashboardState:
    async with QuoteGatewayClient(settings.gateway_url) as gateway:
        controller = DashboardController(gateway, JsonFileStore(settings.state_path))
        controller.restore()
        controller.set_symbol(symbol)
        return await controller.fetch()


async def _run_open(settings: Settings, url: str) -> DashboardState | None:
    async with QuoteGatewayClient(settings.gateway_url) as gateway:
        controller = DashboardController(gateway, JsonFileStore(settings.state_path))
        controller.restore()
        task = controller.schedule_initial_fetch(url)
        if task is None:
            return None
        return await task


@app.command()
def quote(
    symbol: Annotated[str, typer.Argument(help="Ticker symbol, e.g. AAPL")],
    gateway_url: GatewayOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Fetch a symbol and show its summary card and recent days."""
    configure_logging(verbose=verbose, quiet=not verbose)
    state = asyncio.run(_run_fetch(_settings(gateway_url), symbol))
    render_dashboard(state)
    if state.error:
        raise typer.Exit(code=1)


@app.command("open")
def open_link(
    url: Annotated[str, typer.Argument(help="Share link, e.g. http://host?symbol=AAPL")],
    gateway_url: GatewayOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Open a share link: adopt its ?symbol= and fetch it."""
    configure_logging(verbose=verbose, quiet=not verbose)
    state = asyncio.run(_run_open(_settings(gateway_url), url))
    if state is None:
        console.print("[yellow]No symbol in link.[/yellow]")
        raise typer.Exit(code=1)
    render_dashboard(state)
    if state.error:
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# export / share
# ---------------------------------------------------------------------------


@app.command()
def export(
    symbol: Annotated[str, typer.Argument(help="Ticker symbol to export")],
    output_dir: Annotated[Path, typer.Option(help="Directory for the CSV file")] = Path("."),
    gateway_url: GatewayOption = None,
) -> None:
    """Fetch a symbol and write its recent days to <SYMBOL>_data.csv."""
    configure_logging(quiet=True)
    settings = _settings(gateway_url)

    async def _export() -> tuple[DashboardState, Path | None]:
        async with QuoteGatewayClient(settings.gateway_url) as gateway:
            controller = DashboardController(gateway, JsonFileStore(settings.state_path))
            controller.restore()
            controller.set_symbol(symbol)
            state = await controller.fetch()
            return state, controller.export_csv(output_dir)

    state, path = asyncio.run(_export())
    if path is None:
        console.print(f"[red]{state.error or 'Nothing to export.'}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]Exported {len(state.series)} days to {path}[/green]")


@app.command()
def share(
    symbol: Annotated[str, typer.Argument(help="Ticker symbol")],
    origin: Annotated[str, typer.Option(help="Dashboard origin")] = "http://localhost:3000",
) -> None:
    """Print a link that reopens the dashboard on SYMBOL."""
    controller = _offline_controller(_settings(None))
    controller.set_symbol(symbol)
    console.print(controller.share_link(origin))


# ---------------------------------------------------------------------------
# history / favorites
# ---------------------------------------------------------------------------


@app.command()
def history() -> None:
    """Show recently searched symbols, newest first."""
    state = _offline_controller(_settings(None)).state
    if not state.history:
        console.print("[dim]No search history.[/dim]")
        return
    for symbol in state.history:
        star = " [yellow]★[/yellow]" if symbol in state.favorites else ""
        console.print(f"{symbol}{star}")


@app.command()
def favorite(
    symbol: Annotated[str, typer.Argument(help="Ticker symbol to add or remove")],
) -> None:
    """Toggle SYMBOL in favorites."""
    controller = _offline_controller(_settings(None))
    state = controller.toggle_favorite(symbol)
    normalized = symbol.strip().upper()
    if normalized in state.favorites:
        console.print(f"[green]{normalized} added to favorites[/green]")
    else:
        console.print(f"[yellow]{normalized} removed from favorites[/yellow]")


@app.command()
def favorites() -> None:
    """List favorite symbols."""
    state = _offline_controller(_settings(None)).state
    if not state.favorites:
        console.print("[dim]No favorites.[/dim]")
        return
    for symbol in state.favorites:
        console.print(f"[yellow]★[/yellow] {symbol}")
