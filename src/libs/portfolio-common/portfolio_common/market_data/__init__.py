"""Market data collaborator: validated quotes, caching, retries and per-symbol fallbacks."""

from .exceptions import QuoteUnavailableError
from .fallback_quotes import FALLBACK_QUOTES, get_fallback_quote
from .http_quote_client import HttpQuoteClient
from .market_data_service import MarketDataService, QuoteProvider
from .quote_cache import QuoteCache

__all__ = [
    "QuoteUnavailableError",
    "FALLBACK_QUOTES",
    "get_fallback_quote",
    "HttpQuoteClient",
    "MarketDataService",
    "QuoteProvider",
    "QuoteCache",
]
