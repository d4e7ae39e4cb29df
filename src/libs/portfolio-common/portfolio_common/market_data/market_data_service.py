# src/libs/portfolio-common/portfolio_common/market_data/market_data_service.py
import asyncio
import logging
from typing import Dict, Iterable, Optional, Protocol

from portfolio_valuation_engine.models import Quote

from ..monitoring import QUOTE_FETCH_TOTAL
from .exceptions import QuoteUnavailableError
from .fallback_quotes import get_fallback_quote
from .quote_cache import QuoteCache

logger = logging.getLogger(__name__)


class QuoteProvider(Protocol):
    async def get_quote(self, symbol: str) -> Quote: ...


class MarketDataService:
    """
    Collects quotes for a set of symbols, one concurrent request per symbol.

    Each symbol resolves independently: a fresh cache hit, a live fetch, the
    last known cached quote, the fallback table, or nothing at all. A failure
    for one symbol never affects the others.
    """
    def __init__(self, provider: QuoteProvider, cache: QuoteCache):
        self._provider = provider
        self._cache = cache

    async def get_quotes(self, symbols: Iterable[str]) -> Dict[str, Quote]:
        unique_symbols = list(dict.fromkeys(s.strip().upper() for s in symbols if s and s.strip()))
        results = await asyncio.gather(*[self.get_quote(s) for s in unique_symbols])
        return {
            symbol: quote
            for symbol, quote in zip(unique_symbols, results)
            if quote is not None
        }

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        cached = self._cache.get_fresh(symbol)
        if cached is not None:
            QUOTE_FETCH_TOTAL.labels(outcome="cache").inc()
            return cached

        try:
            quote = await self._provider.get_quote(symbol)
        except QuoteUnavailableError as exc:
            return self._resolve_unavailable(symbol, exc.message)
        except Exception as exc:
            logger.exception("Unexpected error while fetching quote.", extra={"symbol": symbol})
            return self._resolve_unavailable(symbol, f"{type(exc).__name__}: {exc}")

        self._cache.put(quote)
        QUOTE_FETCH_TOTAL.labels(outcome="live").inc()
        return quote

    def _resolve_unavailable(self, symbol: str, reason: str) -> Optional[Quote]:
        last_known = self._cache.get_last_known(symbol)
        if last_known is not None:
            QUOTE_FETCH_TOTAL.labels(outcome="last_known").inc()
            logger.info("Serving last known quote.", extra={"symbol": symbol, "reason": reason})
            return last_known

        fallback = get_fallback_quote(symbol)
        if fallback is not None:
            QUOTE_FETCH_TOTAL.labels(outcome="fallback").inc()
            logger.info("Serving fallback quote.", extra={"symbol": symbol, "reason": reason})
            return fallback

        QUOTE_FETCH_TOTAL.labels(outcome="unavailable").inc()
        logger.warning("No quote available for symbol.", extra={"symbol": symbol, "reason": reason})
        return None

    async def check_provider(self, symbol: str = "AAPL") -> bool:
        """Readiness check: True when the provider can serve a live quote."""
        try:
            await self._provider.get_quote(symbol)
            return True
        except QuoteUnavailableError:
            return False
