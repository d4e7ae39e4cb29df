# src/libs/portfolio-common/portfolio_common/market_data/quote_cache.py
import time
from typing import Callable, Dict, Optional, Tuple

from portfolio_valuation_engine.models import Quote


class QuoteCache:
    """
    Per-symbol quote cache with a short time-to-live.

    Owned by whoever wires the market-data service; never shared through
    module state. Expired entries are kept so they can serve as last-known
    prices when a live fetch fails.
    """
    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[Quote, float]] = {}

    def put(self, quote: Quote) -> None:
        self._entries[quote.symbol] = (quote, self._clock())

    def get_fresh(self, symbol: str) -> Optional[Quote]:
        entry = self._entries.get(symbol)
        if entry is None:
            return None
        quote, stored_at = entry
        if self._clock() - stored_at < self._ttl_seconds:
            return quote
        return None

    def get_last_known(self, symbol: str) -> Optional[Quote]:
        entry = self._entries.get(symbol)
        return entry[0] if entry else None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
