"""Quote gateway route.

GET /api/stock?symbol=<SYMBOL> — proxy one Alpha Vantage daily time-series
request. A clean provider payload is returned unchanged; failures become
``{"error": ...}`` responses via the handlers in ``web.middleware``.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from Stock_Pulse.services.alpha_vantage import AlphaVantageClient
from Stock_Pulse.web.deps import get_alpha_vantage_client, require_symbol

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["stock"])


@router.get("/stock")
async def get_stock(
    symbol: Annotated[str, Depends(require_symbol)],
    client: Annotated[AlphaVantageClient, Depends(get_alpha_vantage_client)],
) -> JSONResponse:
    """Return the provider's daily time series for ``symbol``."""
    payload = await client.fetch_daily_series(symbol)
    logger.info("Proxied daily series for %s", symbol)
    return JSONResponse(content=payload)
