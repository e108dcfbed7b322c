"""Logging setup shared by the gateway and the dashboard CLI.

``LOG_LEVEL`` sets the root level and ``LOG_LEVEL_<AREA>`` tunes one
Stock_Pulse package (``LOG_LEVEL_SERVICES``, ``LOG_LEVEL_WEB``, ...). The
httpx request log stays at WARNING: its request lines carry the Alpha
Vantage ``apikey`` query parameter.
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT: str = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

PACKAGE: str = "Stock_Pulse"
LOG_AREAS: tuple[str, ...] = ("services", "web", "dashboard", "data", "reporting")

# Held at WARNING regardless of the root level.
_QUIETED_LOGGERS: tuple[str, ...] = (
    "uvicorn.access",  # RequestLoggingMiddleware logs each request
    "httpx",
    "httpcore",
)


def parse_level(name: str | None) -> int | None:
    """Map a level name such as ``"debug"`` to its number, or None."""
    if not name:
        return None
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else None


def resolve_level(*, level: str = "", verbose: bool = False, quiet: bool = False) -> int:
    """Priority: verbose > quiet > ``level`` > ``LOG_LEVEL`` > INFO."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return parse_level(level) or parse_level(os.environ.get("LOG_LEVEL")) or logging.INFO


def configure_logging(
    *,
    level: str = "",
    verbose: bool = False,
    quiet: bool = False,
) -> int:
    """Install the root handler and return the effective root level.

    ``force=True`` replaces whatever uvicorn or a previous call installed.
    """
    effective = resolve_level(level=level, verbose=verbose, quiet=quiet)
    logging.basicConfig(level=effective, format=LOG_FORMAT, force=True)

    for name in _QUIETED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    for area in LOG_AREAS:
        override = parse_level(os.environ.get(f"LOG_LEVEL_{area.upper()}"))
        if override is not None:
            logging.getLogger(f"{PACKAGE}.{area}").setLevel(override)

    return effective
