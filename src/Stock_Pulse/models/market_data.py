"""Market data models: daily bars, quote snapshots, and change indicators.

All price fields use Decimal (constructed from the provider's strings) with
custom serializers to prevent silent float conversion in JSON roundtrips.
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_serializer

from Stock_Pulse.models.enums import ChangeDirection

# Marker and color per direction, as shown next to the close price.
CHANGE_MARKERS: dict[ChangeDirection, str] = {
    ChangeDirection.UP: "▲",
    ChangeDirection.DOWN: "▼",
    ChangeDirection.FLAT: "",
}
CHANGE_COLORS: dict[ChangeDirection, str] = {
    ChangeDirection.UP: "#16a34a",
    ChangeDirection.DOWN: "#dc2626",
    ChangeDirection.FLAT: "#6b7280",
}


class DailyBar(BaseModel):
    """One trading day's open-high-low-close-volume record.

    Frozen because historical price data should never be mutated after creation.
    """

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: int

    @field_serializer("open", "high", "low", "close")
    def serialize_decimal(self, value: Decimal) -> str:
        """Serialize Decimal fields as strings to preserve precision."""
        return str(value)


class QuoteSnapshot(BaseModel):
    """The most recent bar for a symbol plus the prior session's close.

    ``previous_close`` is None when the provider returned a single day.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    date: datetime.date
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: int
    previous_close: Decimal | None = None

    @field_serializer("open", "high", "low", "close", "previous_close")
    def serialize_decimal(self, value: Decimal | None) -> str | None:
        """Serialize Decimal fields as strings to preserve precision."""
        return None if value is None else str(value)

    @classmethod
    def from_bar(
        cls, symbol: str, bar: DailyBar, previous_close: Decimal | None
    ) -> "QuoteSnapshot":
        """Build a snapshot from the latest bar and the previous close."""
        return cls(
            symbol=symbol,
            date=bar.date,
            open=bar.open,
            high=bar.high,
            low=bar.low,
            close=bar.close,
            volume=bar.volume,
            previous_close=previous_close,
        )


class ChangeIndicator(BaseModel):
    """Day-over-day change of the close, rounded to two decimals."""

    model_config = ConfigDict(frozen=True)

    delta: Decimal
    percent: Decimal
    direction: ChangeDirection

    @field_serializer("delta", "percent")
    def serialize_decimal(self, value: Decimal) -> str:
        """Serialize Decimal fields as strings to preserve precision."""
        return str(value)

    @property
    def marker(self) -> str:
        """Arrow glyph for the direction; empty when flat."""
        return CHANGE_MARKERS[self.direction]

    @property
    def color(self) -> str:
        """Hex color for the direction."""
        return CHANGE_COLORS[self.direction]

    @property
    def text(self) -> str:
        """Display form, e.g. ``'▲ 1.50 (15.79%)'``."""
        return f"{self.marker} {self.delta:.2f} ({self.percent:.2f}%)".strip()
