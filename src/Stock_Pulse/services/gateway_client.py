"""HTTP client the dashboard uses to reach the quote gateway."""

from __future__ import annotations

import logging
from typing import Any, Final

import httpx

from Stock_Pulse.config import DEFAULT_GATEWAY_URL

logger = logging.getLogger(__name__)

STOCK_PATH: Final[str] = "/api/stock"


class QuoteGatewayClient:
    """Call ``GET /api/stock?symbol=...`` and hand back status and JSON body.

    Transport errors and non-JSON bodies propagate as ``httpx.HTTPError`` and
    ``ValueError``; interpreting the status is the caller's job.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_GATEWAY_URL,
        *,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout, connect=5.0),
            transport=transport,
        )

    async def __aenter__(self) -> QuoteGatewayClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client."""
        await self._client.aclose()

    async def get_stock(self, symbol: str) -> tuple[int, Any]:
        """Return ``(status_code, payload)`` for one gateway request."""
        response = await self._client.get(STOCK_PATH, params={"symbol": symbol})
        logger.debug("Gateway answered %d for %s", response.status_code, symbol)
        return response.status_code, response.json()
