"""Network services: the upstream provider client and the gateway client.

Re-exports the public service classes so consumers can import directly:
    from Stock_Pulse.services import AlphaVantageClient, QuoteGatewayClient
"""

from Stock_Pulse.services.alpha_vantage import AlphaVantageClient
from Stock_Pulse.services.gateway_client import QuoteGatewayClient

__all__ = [
    "AlphaVantageClient",
    "QuoteGatewayClient",
]
