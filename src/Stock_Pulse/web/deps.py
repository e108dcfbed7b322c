"""Dependency injection providers for FastAPI route handlers.

Shared resources (settings, the Alpha Vantage client) live on ``app.state``
and are provided via FastAPI's ``Depends()`` mechanism. Route handlers never
construct these directly.
"""

import logging

from fastapi import Request

from Stock_Pulse.config import Settings
from Stock_Pulse.services.alpha_vantage import AlphaVantageClient
from Stock_Pulse.utils.exceptions import SymbolValidationError

logger = logging.getLogger(__name__)

MISSING_SYMBOL_MESSAGE = "Missing symbol parameter"


async def get_settings(request: Request) -> Settings:
    """Return the Settings the app was created with."""
    settings: Settings = request.app.state.settings
    return settings


async def get_alpha_vantage_client(request: Request) -> AlphaVantageClient:
    """Return the app-wide AlphaVantageClient.

    One client (and one connection pool) is shared by all requests and closed
    on application shutdown.
    """
    client: AlphaVantageClient = request.app.state.alpha_vantage
    return client


async def require_symbol(request: Request) -> str:
    """Return the single ``symbol`` query parameter.

    Raises SymbolValidationError (HTTP 400) when the parameter is absent,
    empty, or given more than once.
    """
    values = request.query_params.getlist("symbol")
    if len(values) != 1 or not values[0]:
        raise SymbolValidationError(MISSING_SYMBOL_MESSAGE, source="gateway")
    return values[0]
