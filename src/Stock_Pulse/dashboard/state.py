"""Dashboard state transitions.

Every change to ``DashboardState`` is an event applied by ``reduce``, which
returns a new state and never touches I/O. Fetch completions carry the id of
the request that produced them; a completion that is not for the latest
request leaves the state unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from Stock_Pulse.dashboard.derive import HISTORY_LIMIT, append_history, toggle_favorite
from Stock_Pulse.models.dashboard import DashboardState
from Stock_Pulse.models.market_data import DailyBar, QuoteSnapshot

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SymbolChanged:
    """The user typed or selected a symbol."""

    symbol: str


@dataclass(frozen=True)
class ValidationFailed:
    """Fetch ``request_id`` was rejected for want of a usable symbol."""

    request_id: int
    message: str


@dataclass(frozen=True)
class FetchStarted:
    """A fetch with ``request_id`` was issued."""

    request_id: int


@dataclass(frozen=True)
class FetchSucceeded:
    """Fetch ``request_id`` produced a snapshot and recent bars."""

    request_id: int
    snapshot: QuoteSnapshot
    series: tuple[DailyBar, ...]


@dataclass(frozen=True)
class FetchFailed:
    """Fetch ``request_id`` ended with a user-visible error."""

    request_id: int
    message: str


@dataclass(frozen=True)
class FavoriteToggled:
    symbol: str


@dataclass(frozen=True)
class ListsRestored:
    """History and favorites loaded from storage at startup."""

    history: tuple[str, ...]
    favorites: tuple[str, ...]


DashboardEvent = (
    SymbolChanged
    | ValidationFailed
    | FetchStarted
    | FetchSucceeded
    | FetchFailed
    | FavoriteToggled
    | ListsRestored
)


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def normalize_symbol(raw: str) -> str:
    return raw.strip().upper()


def _dedupe(items: Sequence[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


def _is_stale(state: DashboardState, request_id: int) -> bool:
    if request_id != state.latest_request_id:
        logger.debug(
            "Discarding result of request %d (latest is %d)",
            request_id,
            state.latest_request_id,
        )
        return True
    return False


def reduce(state: DashboardState, event: DashboardEvent) -> DashboardState:
    """Apply one event and return the resulting state."""
    match event:
        case SymbolChanged(symbol=symbol):
            return state.model_copy(update={"symbol": normalize_symbol(symbol)})

        case ValidationFailed(request_id=request_id, message=message):
            return state.model_copy(
                update={
                    "snapshot": None,
                    "series": (),
                    "error": message,
                    "loading": False,
                    "latest_request_id": request_id,
                }
            )

        case FetchStarted(request_id=request_id):
            return state.model_copy(
                update={
                    "snapshot": None,
                    "series": (),
                    "error": "",
                    "loading": True,
                    "latest_request_id": request_id,
                }
            )

        case FetchSucceeded(request_id=request_id, snapshot=snapshot, series=series):
            if _is_stale(state, request_id):
                return state
            return state.model_copy(
                update={
                    "snapshot": snapshot,
                    "series": series,
                    "error": "",
                    "loading": False,
                    "history": append_history(state.history, snapshot.symbol),
                }
            )

        case FetchFailed(request_id=request_id, message=message):
            if _is_stale(state, request_id):
                return state
            return state.model_copy(update={"error": message, "loading": False})

        case FavoriteToggled(symbol=symbol):
            return state.model_copy(
                update={"favorites": toggle_favorite(state.favorites, normalize_symbol(symbol))}
            )

        case ListsRestored(history=history, favorites=favorites):
            return state.model_copy(
                update={
                    "history": _dedupe(history)[:HISTORY_LIMIT],
                    "favorites": _dedupe(favorites),
                }
            )

    msg = f"Unknown dashboard event: {event!r}"
    raise TypeError(msg)
