"""Shared test fixtures for the Stock Pulse test suite.

Provides realistic Alpha Vantage payloads and parsed models so tests don't
need to inline large construction blocks.
"""

import datetime
from decimal import Decimal
from typing import Any

import pytest

from Stock_Pulse.models.market_data import DailyBar, QuoteSnapshot


def make_day(open_: str, high: str, low: str, close: str, volume: str) -> dict[str, str]:
    """One provider day entry with the numeric-prefixed field names."""
    return {
        "1. open": open_,
        "2. high": high,
        "3. low": low,
        "4. close": close,
        "5. volume": volume,
    }


def make_payload(days: int, *, start: datetime.date = datetime.date(2024, 1, 1)) -> dict[str, Any]:
    """A TIME_SERIES_DAILY payload with ``days`` consecutive dates.

    Day ``i`` closes at ``100 + i`` so the newest day has the highest close.
    """
    series = {}
    for i in range(days):
        date = start + datetime.timedelta(days=i)
        close = 100 + i
        series[date.isoformat()] = make_day(
            f"{close - 1}.0000",
            f"{close + 1}.0000",
            f"{close - 2}.0000",
            f"{close}.0000",
            str(1_000_000 + i),
        )
    return {
        "Meta Data": {"1. Information": "Daily Prices", "2. Symbol": "IBM"},
        "Time Series (Daily)": series,
    }


@pytest.fixture()
def two_day_payload() -> dict[str, Any]:
    """The two-day example: 2024-01-02 closes at 11 after 9.5."""
    return {
        "Time Series (Daily)": {
            "2024-01-02": make_day("10", "12", "9", "11", "100"),
            "2024-01-01": make_day("9", "10", "8", "9.5", "80"),
        }
    }


@pytest.fixture()
def sample_bar() -> DailyBar:
    """A valid DailyBar with realistic AAPL daily data."""
    return DailyBar(
        date=datetime.date(2025, 1, 15),
        open=Decimal("185.50"),
        high=Decimal("187.25"),
        low=Decimal("184.10"),
        close=Decimal("186.75"),
        volume=52_340_000,
    )


@pytest.fixture()
def sample_snapshot(sample_bar: DailyBar) -> QuoteSnapshot:
    """AAPL snapshot that closed up from 184.00."""
    return QuoteSnapshot.from_bar("AAPL", sample_bar, Decimal("184.00"))


@pytest.fixture()
def payload_factory() -> Any:
    """Callable building a payload with N consecutive days (see make_payload)."""
    return make_payload
