"""FastAPI web layer for Stock Pulse.

Re-exports the application factory so consumers can import directly:
    from Stock_Pulse.web import create_app
"""

from Stock_Pulse.web.app import create_app

__all__ = ["create_app"]
