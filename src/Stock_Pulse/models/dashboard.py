"""Dashboard state: everything the quote view renders from."""

from pydantic import BaseModel, ConfigDict

from Stock_Pulse.models.market_data import DailyBar, QuoteSnapshot


class DashboardState(BaseModel):
    """Immutable snapshot of the dashboard's UI state.

    Frozen because every change goes through a transition function that
    returns a new state. ``latest_request_id`` is the id of the most recently
    started fetch; completions carrying an older id are ignored.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = ""
    snapshot: QuoteSnapshot | None = None
    series: tuple[DailyBar, ...] = ()
    error: str = ""
    loading: bool = False
    history: tuple[str, ...] = ()
    favorites: tuple[str, ...] = ()
    latest_request_id: int = 0

    @property
    def is_favorite(self) -> bool:
        """Whether the current symbol is in favorites."""
        return bool(self.symbol) and self.symbol in self.favorites
