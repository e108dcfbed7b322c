"""Exception handlers and request logging middleware.

Maps domain exceptions from ``Stock_Pulse.utils.exceptions`` to HTTP status
codes with an ``{"error": <message>}`` body. Every handler logs before
responding. Provides request logging middleware that logs method, path,
status code, and duration at INFO level.
"""

import logging
import time

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from Stock_Pulse.utils.exceptions import (
    ConfigurationError,
    FetchError,
    QuoteError,
    RateLimitExceededError,
    SymbolValidationError,
    UpstreamError,
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, exc: QuoteError) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc)})


# ---------------------------------------------------------------------------
# Domain exception -> HTTP status handlers
# ---------------------------------------------------------------------------


async def _symbol_validation_handler(request: Request, exc: SymbolValidationError) -> JSONResponse:
    """Map SymbolValidationError to HTTP 400."""
    logger.warning("Bad request: %s", exc)
    return _error_response(400, exc)


async def _configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    """Map ConfigurationError to HTTP 500."""
    logger.error("Server misconfigured: %s", exc)
    return _error_response(500, exc)


async def _rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceededError
) -> JSONResponse:
    """Map RateLimitExceededError to HTTP 429."""
    logger.warning("Alpha Vantage rate limit notice: %s", exc)
    return _error_response(429, exc)


async def _upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    """Map UpstreamError to the upstream status (500 for error messages)."""
    logger.error("Alpha Vantage error (%s): %s", exc.http_status, exc)
    return _error_response(exc.http_status or 500, exc)


async def _fetch_error_handler(request: Request, exc: FetchError) -> JSONResponse:
    """Map FetchError to HTTP 500."""
    logger.error("Fetch failed: %s", exc)
    return _error_response(500, exc)


async def _quote_error_handler(request: Request, exc: QuoteError) -> JSONResponse:
    """Catch-all for the remaining QuoteError subclasses."""
    logger.error("Quote error: %s", exc)
    return _error_response(exc.http_status or 500, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all domain exception handlers on the FastAPI application.

    Starlette resolves handlers along the exception's MRO, so the base
    QuoteError handler only catches what the specific handlers do not.
    """
    app.add_exception_handler(SymbolValidationError, _symbol_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ConfigurationError, _configuration_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RateLimitExceededError, _rate_limit_exceeded_handler)  # type: ignore[arg-type]
    app.add_exception_handler(UpstreamError, _upstream_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(FetchError, _fetch_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(QuoteError, _quote_error_handler)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Request logging middleware
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with method, path, status code, and duration."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Process request, log timing information, and return response."""
        start_time = time.monotonic()
        response = await call_next(request)
        duration_ms = (time.monotonic() - start_time) * 1000

        level = logging.DEBUG if request.url.path == "/api/health" else logging.INFO
        logger.log(
            level,
            "%s %s -> %d (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )

        return response
