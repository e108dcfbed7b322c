"""Client-side dashboard logic: state transitions, derived values, controller.

Re-exports the public API:
    from Stock_Pulse.dashboard import DashboardController, change_indicator
"""

from Stock_Pulse.dashboard.controller import DashboardController, load_quote
from Stock_Pulse.dashboard.derive import (
    append_history,
    change_indicator,
    export_csv,
    share_link,
    toggle_favorite,
)
from Stock_Pulse.dashboard.series import parse_daily_series
from Stock_Pulse.dashboard.state import reduce

__all__ = [
    "DashboardController",
    "append_history",
    "change_indicator",
    "export_csv",
    "load_quote",
    "parse_daily_series",
    "reduce",
    "share_link",
    "toggle_favorite",
]
