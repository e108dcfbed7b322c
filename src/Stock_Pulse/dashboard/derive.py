"""Derived display values and list operations for the dashboard.

Everything here is a pure function of its arguments: the change indicator,
history and favorites updates, CSV text, and share links.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Final

import httpx

from Stock_Pulse.models.enums import ChangeDirection
from Stock_Pulse.models.market_data import ChangeIndicator, DailyBar

HISTORY_LIMIT: Final[int] = 10
CSV_HEADER: Final[str] = "Date,Open,High,Low,Close,Volume"

_CENT = Decimal("0.01")


def change_indicator(close: Decimal, previous_close: Decimal | None) -> ChangeIndicator | None:
    """Compare the close with the prior session's close.

    Returns None when there is no previous close, or when it is zero and no
    percentage can be formed.
    """
    if previous_close is None or previous_close == 0:
        return None

    delta = close - previous_close
    percent = delta / previous_close * 100

    if delta > 0:
        direction = ChangeDirection.UP
    elif delta < 0:
        direction = ChangeDirection.DOWN
    else:
        direction = ChangeDirection.FLAT

    return ChangeIndicator(
        delta=delta.quantize(_CENT, rounding=ROUND_HALF_UP),
        percent=percent.quantize(_CENT, rounding=ROUND_HALF_UP),
        direction=direction,
    )


def append_history(history: Sequence[str], symbol: str) -> tuple[str, ...]:
    """Move ``symbol`` to the front, dropping duplicates, capped at HISTORY_LIMIT."""
    return (symbol, *(h for h in history if h != symbol))[:HISTORY_LIMIT]


def toggle_favorite(favorites: Sequence[str], symbol: str) -> tuple[str, ...]:
    """Remove ``symbol`` if present, otherwise append it."""
    if symbol in favorites:
        return tuple(f for f in favorites if f != symbol)
    return (*favorites, symbol)


def _plain(value: Decimal) -> str:
    # 10.0000 -> "10", 9.5000 -> "9.5"
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def export_csv(series: Sequence[DailyBar]) -> str | None:
    """Render bars as CSV text in the given order. Returns None for no bars.

    Fields are dates and plain numbers, so no quoting is needed.
    """
    if not series:
        return None
    rows = [
        ",".join(
            (
                bar.date.isoformat(),
                _plain(bar.open),
                _plain(bar.high),
                _plain(bar.low),
                _plain(bar.close),
                str(bar.volume),
            )
        )
        for bar in series
    ]
    return "\n".join([CSV_HEADER, *rows])


def csv_filename(symbol: str) -> str:
    return f"{symbol}_data.csv"


def share_link(origin: str, symbol: str) -> str:
    """Link that reopens the dashboard on ``symbol``."""
    return f"{origin.rstrip('/')}?symbol={symbol}"


def symbol_from_url(url: str) -> str:
    """Upper-cased ``symbol`` query parameter of ``url``, or ``""``."""
    return httpx.URL(url).params.get("symbol", "").strip().upper()
