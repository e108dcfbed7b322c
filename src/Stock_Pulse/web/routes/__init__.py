"""FastAPI route modules for Stock Pulse.

Re-exports all routers so the application factory can import them:
    from Stock_Pulse.web.routes import stock_router
"""

from Stock_Pulse.web.routes.stock import router as stock_router

__all__ = ["stock_router"]
