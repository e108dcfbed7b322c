"""Parse the provider's daily time series into a snapshot and recent bars.

The provider keys each day by ISO date and each field by a numeric-prefixed
name (``"1. open"`` ... ``"5. volume"``). Those names are a wire contract and
are used verbatim.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Mapping
from typing import Any, Final

from Stock_Pulse.models.market_data import DailyBar, QuoteSnapshot

logger = logging.getLogger(__name__)

TIME_SERIES_KEY: Final[str] = "Time Series (Daily)"

OPEN_FIELD: Final[str] = "1. open"
HIGH_FIELD: Final[str] = "2. high"
LOW_FIELD: Final[str] = "3. low"
CLOSE_FIELD: Final[str] = "4. close"
VOLUME_FIELD: Final[str] = "5. volume"

# Days kept for the summary table, chart, and CSV export.
RECENT_DAYS: Final[int] = 10


def parse_bar(date: str, fields: Mapping[str, Any]) -> DailyBar:
    """Build a DailyBar from one provider day entry.

    Raises:
        KeyError: A required field is missing.
        ValueError: A field is not numeric (pydantic ``ValidationError``).
    """
    return DailyBar(
        date=datetime.date.fromisoformat(date),
        open=fields[OPEN_FIELD],
        high=fields[HIGH_FIELD],
        low=fields[LOW_FIELD],
        close=fields[CLOSE_FIELD],
        volume=fields[VOLUME_FIELD],
    )


def parse_daily_series(
    symbol: str, series: Mapping[str, Mapping[str, Any]]
) -> tuple[QuoteSnapshot, tuple[DailyBar, ...]]:
    """Return the latest snapshot and up to ``RECENT_DAYS`` bars, newest first.

    ISO dates sort correctly as strings, so the keys are sorted descending
    without parsing. ``previous_close`` comes from the second-newest day and
    is None when only one day is present.

    Raises:
        ValueError: ``series`` is empty or a day entry is malformed.
        KeyError: A day entry lacks a required field.
    """
    dates = sorted(series, reverse=True)
    if not dates:
        msg = f"Empty time series for {symbol}"
        raise ValueError(msg)

    recent = tuple(parse_bar(date, series[date]) for date in dates[:RECENT_DAYS])
    latest = recent[0]
    previous_close = recent[1].close if len(recent) > 1 else None

    logger.debug(
        "Parsed %d of %d days for %s (latest %s)",
        len(recent),
        len(dates),
        symbol,
        latest.date.isoformat(),
    )
    return QuoteSnapshot.from_bar(symbol, latest, previous_close), recent
