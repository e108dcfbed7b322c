"""Custom exception hierarchy for the Stock Pulse application.

All domain-specific exceptions inherit from QuoteError, which carries
contextual information about which symbol and which source were involved.
The web layer maps each subclass to an HTTP status; the dashboard
controller turns them into user-visible error text.
"""


class QuoteError(Exception):
    """Base exception for all quote-retrieval failures.

    Attributes:
        symbol: The ticker symbol involved in the failure, if any.
        source: The component or provider that failed (e.g., "alpha_vantage").
        http_status: The HTTP status code, if the failure was HTTP-related.
    """

    def __init__(
        self,
        message: str,
        *,
        symbol: str = "",
        source: str = "",
        http_status: int | None = None,
    ) -> None:
        self.symbol = symbol
        self.source = source
        self.http_status = http_status
        super().__init__(message)


class SymbolValidationError(QuoteError):
    """Raised when a symbol is missing or empty. No request is made."""


class ConfigurationError(QuoteError):
    """Raised when the upstream API key is not configured."""


class UpstreamError(QuoteError):
    """Raised when the provider answers non-2xx or reports an error message."""


class RateLimitExceededError(QuoteError):
    """Raised when the provider returns a rate-limit advisory."""


class NoDataError(QuoteError):
    """Raised when a well-formed response lacks the expected time series."""


class FetchError(QuoteError):
    """Raised on network or parse failures while fetching quote data."""
