"""Pydantic v2 models, enums, and dashboard state.

Re-exports all public models so consumers can import directly:
    from Stock_Pulse.models import DailyBar, QuoteSnapshot, DashboardState
"""

from Stock_Pulse.models.dashboard import DashboardState
from Stock_Pulse.models.enums import ChangeDirection
from Stock_Pulse.models.market_data import ChangeIndicator, DailyBar, QuoteSnapshot

__all__ = [
    # Enums
    "ChangeDirection",
    # Market data
    "ChangeIndicator",
    "DailyBar",
    "QuoteSnapshot",
    # Dashboard
    "DashboardState",
]
