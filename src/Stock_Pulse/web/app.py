"""FastAPI app factory for the quote gateway."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from Stock_Pulse.config import Settings
from Stock_Pulse.logging_config import configure_logging
from Stock_Pulse.services.alpha_vantage import AlphaVantageClient
from Stock_Pulse.web.middleware import RequestLoggingMiddleware, register_exception_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    await app.state.alpha_vantage.aclose()
    logger.info("Alpha Vantage client closed")


def create_app(
    settings: Settings | None = None,
    *,
    upstream_transport: httpx.AsyncBaseTransport | None = None,
    log_level: str = "",
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Explicit settings; read from the environment when omitted.
        upstream_transport: Optional httpx transport for the Alpha Vantage
            client, used by tests to stand in for the provider.
        log_level: Root log level name; falls back to ``LOG_LEVEL``.
    """
    effective_level = configure_logging(level=log_level)

    resolved = settings if settings is not None else Settings.from_env()
    if not resolved.alpha_vantage_api_key:
        logger.error("API key missing! /api/stock will answer 500 until it is set")

    app = FastAPI(title="Stock Pulse", docs_url=None, redoc_url=None, lifespan=_lifespan)
    app.state.settings = resolved
    app.state.alpha_vantage = AlphaVantageClient(
        resolved.alpha_vantage_api_key,
        base_url=resolved.alpha_vantage_base_url,
        timeout=resolved.upstream_timeout,
        transport=upstream_transport,
    )

    register_exception_handlers(app)
    app.add_middleware(RequestLoggingMiddleware)

    from Stock_Pulse.web.routes import stock_router

    app.include_router(stock_router)

    @app.get("/api/health")
    async def health_check() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    logger.info(
        "Stock Pulse gateway created (log level %s)", logging.getLevelName(effective_level)
    )
    return app
