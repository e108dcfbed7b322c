"""Alpha Vantage daily time-series client used by the quote gateway.

Issues exactly one ``TIME_SERIES_DAILY`` request per call and classifies the
answer. Non-2xx responses, explicit error messages, and rate-limit advisories
are raised as domain exceptions; a clean payload is returned unmodified. No
retries and no caching: each call is independent.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Final

import httpx

from Stock_Pulse.config import ALPHA_VANTAGE_BASE_URL, DEFAULT_UPSTREAM_TIMEOUT
from Stock_Pulse.utils.exceptions import (
    ConfigurationError,
    FetchError,
    RateLimitExceededError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SOURCE: Final[str] = "alpha_vantage"
DAILY_FUNCTION: Final[str] = "TIME_SERIES_DAILY"

# Provider payload fields
ERROR_MESSAGE_KEY: Final[str] = "Error Message"
NOTE_KEY: Final[str] = "Note"
INFORMATION_KEY: Final[str] = "Information"

MISSING_API_KEY_MESSAGE: Final[str] = "API key not set in environment variables"
FETCH_FAILED_MESSAGE: Final[str] = "Failed to fetch data"


class AlphaVantageClient:
    """Fetch the raw daily time series for a symbol.

    Usage::

        client = AlphaVantageClient(api_key="demo")
        payload = await client.fetch_daily_series("IBM")
        await client.aclose()
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = ALPHA_VANTAGE_BASE_URL,
        timeout: float = DEFAULT_UPSTREAM_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=5.0),
            limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            transport=transport,
        )

        logger.info(
            "AlphaVantageClient initialized: api_key=%s",
            "configured" if api_key else "not configured",
        )

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def aclose(self) -> None:
        """Close the shared httpx client."""
        await self._client.aclose()

    async def fetch_daily_series(self, symbol: str) -> Any:
        """Return the provider's JSON payload for ``symbol`` unchanged.

        Raises:
            ConfigurationError: No API key is configured.
            UpstreamError: Non-2xx status (status propagated) or an
                ``Error Message`` field (status 500).
            RateLimitExceededError: A ``Note`` or ``Information`` advisory.
            FetchError: Any failure of the request itself (transport, timeout,
                invalid URL) or a body that does not decode as JSON.
        """
        if not self._api_key:
            raise ConfigurationError(
                MISSING_API_KEY_MESSAGE, symbol=symbol, source=SOURCE, http_status=500
            )

        params: dict[str, str] = {
            "function": DAILY_FUNCTION,
            "symbol": symbol,
            "apikey": self._api_key,
        }

        try:
            response = await asyncio.wait_for(
                self._client.get(self._base_url, params=params),
                timeout=self._timeout,
            )
        except Exception as exc:  # noqa: BLE001
            logger.error("Alpha Vantage request failed for %s: %s", symbol, exc)
            raise FetchError(
                FETCH_FAILED_MESSAGE, symbol=symbol, source=SOURCE, http_status=500
            ) from exc

        if not response.is_success:
            text = response.text
            logger.error("Alpha Vantage response not OK: %d %s", response.status_code, text)
            raise UpstreamError(
                text, symbol=symbol, source=SOURCE, http_status=response.status_code
            )

        try:
            data = response.json()
        except Exception as exc:  # noqa: BLE001
            logger.error("Alpha Vantage returned a non-JSON body for %s", symbol)
            raise FetchError(
                FETCH_FAILED_MESSAGE, symbol=symbol, source=SOURCE, http_status=500
            ) from exc

        if isinstance(data, dict):
            error_message = data.get(ERROR_MESSAGE_KEY)
            if error_message:
                raise UpstreamError(
                    str(error_message), symbol=symbol, source=SOURCE, http_status=500
                )

            advisory = data.get(NOTE_KEY) or data.get(INFORMATION_KEY)
            if advisory:
                raise RateLimitExceededError(
                    str(advisory), symbol=symbol, source=SOURCE, http_status=429
                )

        logger.debug("Alpha Vantage payload received for %s", symbol)
        return data
