"""Dashboard controller: owns the UI state and talks to the quote gateway.

The controller is the only place that performs I/O for the dashboard. It
applies events through ``reduce``, calls the gateway once per fetch, and
re-persists search history and favorites after every change to them.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Final, Protocol

import httpx

from Stock_Pulse.dashboard.derive import csv_filename, export_csv, share_link, symbol_from_url
from Stock_Pulse.dashboard.series import TIME_SERIES_KEY, parse_daily_series
from Stock_Pulse.dashboard.state import (
    DashboardEvent,
    FavoriteToggled,
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
    ListsRestored,
    SymbolChanged,
    ValidationFailed,
    normalize_symbol,
    reduce,
)
from Stock_Pulse.data.store import KeyValueStore
from Stock_Pulse.models.dashboard import DashboardState
from Stock_Pulse.models.market_data import DailyBar, QuoteSnapshot
from Stock_Pulse.utils.exceptions import (
    FetchError,
    NoDataError,
    QuoteError,
    SymbolValidationError,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

HISTORY_STORAGE_KEY: Final[str] = "stockSearchHistory"
FAVORITES_STORAGE_KEY: Final[str] = "stockFavorites"

# Delay before the fetch triggered by a symbol in the page URL.
INITIAL_FETCH_DELAY: Final[float] = 0.3

EMPTY_SYMBOL_MESSAGE: Final[str] = "Please enter a stock symbol"
NO_SERIES_MESSAGE: Final[str] = "No time series data available for this symbol"
GATEWAY_FAILED_MESSAGE: Final[str] = "Failed to fetch stock data"
FETCH_ERROR_MESSAGE: Final[str] = "Error fetching stock data"


class StockGateway(Protocol):
    """What the controller needs from the quote gateway."""

    async def get_stock(self, symbol: str) -> tuple[int, Any]: ...


# ---------------------------------------------------------------------------
# Fetch
# ---------------------------------------------------------------------------


async def load_quote(
    gateway: StockGateway, symbol: str
) -> tuple[QuoteSnapshot, tuple[DailyBar, ...]]:
    """Fetch ``symbol`` through the gateway and parse the daily series.

    Raises:
        SymbolValidationError: ``symbol`` is empty. The gateway is not called.
        NoDataError: Non-success status, or no time series key in the payload.
        FetchError: Network failure, or a time series that is empty or
            unparseable.
    """
    if not symbol:
        raise SymbolValidationError(EMPTY_SYMBOL_MESSAGE, source="dashboard")

    try:
        status_code, payload = await gateway.get_stock(symbol)
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Gateway request for %s failed: %s", symbol, exc)
        raise FetchError(FETCH_ERROR_MESSAGE, symbol=symbol, source="gateway") from exc

    body = payload if isinstance(payload, dict) else {}

    if not 200 <= status_code < 300:  # noqa: PLR2004
        message = body.get("error") or body.get("Error Message") or GATEWAY_FAILED_MESSAGE
        raise NoDataError(str(message), symbol=symbol, source="gateway", http_status=status_code)

    series = body.get(TIME_SERIES_KEY)
    if series is None:
        raise NoDataError(NO_SERIES_MESSAGE, symbol=symbol, source="gateway")

    # A present but empty or non-mapping series is malformed, not absent.
    try:
        return parse_daily_series(symbol, series)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        logger.warning("Malformed time series for %s: %s", symbol, exc)
        raise FetchError(FETCH_ERROR_MESSAGE, symbol=symbol, source="gateway") from exc


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------


class DashboardController:
    """Single owner of the dashboard state.

    Usage::

        async with QuoteGatewayClient("http://127.0.0.1:8000") as gateway:
            controller = DashboardController(gateway, JsonFileStore(path))
            controller.restore()
            controller.set_symbol("aapl")
            state = await controller.fetch()
    """

    def __init__(self, gateway: StockGateway, store: KeyValueStore) -> None:
        self._gateway = gateway
        self._store = store
        self._state = DashboardState()
        self._next_request_id = 0

    @property
    def state(self) -> DashboardState:
        return self._state

    def _apply(self, event: DashboardEvent) -> DashboardState:
        previous = self._state
        self._state = reduce(previous, event)
        if self._state.history != previous.history:
            self._persist(HISTORY_STORAGE_KEY, self._state.history)
        if self._state.favorites != previous.favorites:
            self._persist(FAVORITES_STORAGE_KEY, self._state.favorites)
        return self._state

    def _persist(self, key: str, values: tuple[str, ...]) -> None:
        self._store.set(key, json.dumps(list(values)))

    def _read_list(self, key: str) -> tuple[str, ...]:
        raw = self._store.get(key)
        if not raw:
            return ()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored %s is not valid JSON, starting empty", key)
            return ()
        if not isinstance(data, list):
            logger.warning("Stored %s is not a list, starting empty", key)
            return ()
        return tuple(item for item in data if isinstance(item, str) and item)

    # -- lifecycle -----------------------------------------------------------

    def restore(self) -> DashboardState:
        """Load history and favorites from the store."""
        history = self._read_list(HISTORY_STORAGE_KEY)
        favorites = self._read_list(FAVORITES_STORAGE_KEY)
        self._state = reduce(self._state, ListsRestored(history=history, favorites=favorites))
        logger.info(
            "Restored %d history and %d favorite symbols",
            len(self._state.history),
            len(self._state.favorites),
        )
        return self._state

    def schedule_initial_fetch(
        self, url: str, *, delay: float = INITIAL_FETCH_DELAY
    ) -> asyncio.Task[DashboardState] | None:
        """Adopt ``?symbol=`` from ``url`` and fetch it after ``delay`` seconds.

        Returns the scheduled task, or None when the URL carries no symbol.
        Must be called from a running event loop.
        """
        symbol = symbol_from_url(url)
        if not symbol:
            return None
        self.set_symbol(symbol)

        async def _delayed_fetch() -> DashboardState:
            await asyncio.sleep(delay)
            return await self.fetch()

        return asyncio.create_task(_delayed_fetch())

    # -- user actions --------------------------------------------------------

    def set_symbol(self, symbol: str) -> DashboardState:
        return self._apply(SymbolChanged(symbol=symbol))

    async def fetch(self) -> DashboardState:
        """Fetch the current symbol and apply the outcome.

        Errors never propagate; they end up in ``state.error``. Every call,
        including one rejected for an empty symbol, takes a new request id;
        an earlier fetch still in flight is then dropped when it completes.
        """
        symbol = self._state.symbol
        self._next_request_id += 1
        request_id = self._next_request_id

        if not symbol:
            logger.info("Fetch %d requested without a symbol", request_id)
            return self._apply(
                ValidationFailed(request_id=request_id, message=EMPTY_SYMBOL_MESSAGE)
            )

        self._apply(FetchStarted(request_id=request_id))

        try:
            snapshot, series = await load_quote(self._gateway, symbol)
        except QuoteError as exc:
            logger.info("Fetch %d for %s failed: %s", request_id, symbol, exc)
            return self._apply(FetchFailed(request_id=request_id, message=str(exc)))

        logger.info("Fetch %d for %s loaded %d days", request_id, symbol, len(series))
        return self._apply(
            FetchSucceeded(request_id=request_id, snapshot=snapshot, series=series)
        )

    async def select_history(self, symbol: str) -> DashboardState:
        """Re-run a search from the history list."""
        self.set_symbol(symbol)
        return await self.fetch()

    def toggle_favorite(self, symbol: str | None = None) -> DashboardState:
        """Toggle ``symbol`` (default: the current symbol) in favorites."""
        target = normalize_symbol(symbol if symbol is not None else self._state.symbol)
        if not target:
            return self._state
        return self._apply(FavoriteToggled(symbol=target))

    def export_csv(self, directory: Path) -> Path | None:
        """Write the recent series to ``<SYMBOL>_data.csv`` in ``directory``.

        Returns the written path, or None (and writes nothing) when there is
        no series to export.
        """
        text = export_csv(self._state.series)
        if text is None:
            return None
        symbol = self._state.snapshot.symbol if self._state.snapshot else self._state.symbol
        path = directory / csv_filename(symbol)
        directory.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        logger.info("Exported %d days to %s", len(self._state.series), path)
        return path

    def share_link(self, origin: str) -> str:
        return share_link(origin, self._state.symbol)
