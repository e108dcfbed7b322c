"""Shared formatting helpers for terminal output."""

from __future__ import annotations

from decimal import Decimal

from Stock_Pulse.models.enums import ChangeDirection

# Terminal colors per change direction (the hex colors live on ChangeIndicator).
DIRECTION_STYLES: dict[ChangeDirection, str] = {
    ChangeDirection.UP: "green",
    ChangeDirection.DOWN: "red",
    ChangeDirection.FLAT: "grey50",
}


def format_money(value: Decimal | None) -> str:
    """Format a price as currency: Decimal('185.5') -> '$185.50'."""
    if value is None:
        return "—"
    return f"${value:,.2f}"


def format_volume(value: int) -> str:
    """Thousands-separated volume: 52340000 -> '52,340,000'."""
    return f"{value:,}"
