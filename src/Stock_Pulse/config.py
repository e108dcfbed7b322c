"""Runtime settings read from environment variables.

The gateway needs the Alpha Vantage API key; the dashboard controller needs
the gateway URL and the location of its persisted lists. Everything else has
a sensible default.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

ALPHA_VANTAGE_BASE_URL: Final[str] = "https://www.alphavantage.co/query"
DEFAULT_UPSTREAM_TIMEOUT: Final[float] = 10.0
DEFAULT_GATEWAY_URL: Final[str] = "http://127.0.0.1:8000"
DEFAULT_STATE_PATH: Final[Path] = Path("data/dashboard_state.json")


class Settings(BaseModel):
    """Application settings.

    Frozen because settings are resolved once at startup and shared.
    """

    model_config = ConfigDict(frozen=True)

    alpha_vantage_api_key: str | None = None
    alpha_vantage_base_url: str = ALPHA_VANTAGE_BASE_URL
    upstream_timeout: float = DEFAULT_UPSTREAM_TIMEOUT
    gateway_url: str = DEFAULT_GATEWAY_URL
    state_path: Path = DEFAULT_STATE_PATH

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from the process environment."""
        timeout_raw = os.environ.get("STOCK_PULSE_UPSTREAM_TIMEOUT", "")
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_UPSTREAM_TIMEOUT
        except ValueError:
            logger.warning(
                "Invalid STOCK_PULSE_UPSTREAM_TIMEOUT %r, using %.1fs",
                timeout_raw,
                DEFAULT_UPSTREAM_TIMEOUT,
            )
            timeout = DEFAULT_UPSTREAM_TIMEOUT

        return cls(
            alpha_vantage_api_key=os.environ.get("ALPHA_VANTAGE_API_KEY") or None,
            alpha_vantage_base_url=os.environ.get(
                "ALPHA_VANTAGE_BASE_URL", ALPHA_VANTAGE_BASE_URL
            ),
            upstream_timeout=timeout,
            gateway_url=os.environ.get("STOCK_PULSE_GATEWAY_URL", DEFAULT_GATEWAY_URL),
            state_path=Path(os.environ.get("STOCK_PULSE_STATE_PATH", str(DEFAULT_STATE_PATH))),
        )
