# tests/unit/libs/portfolio-common/test_quote_cache.py
from decimal import Decimal

from portfolio_common.market_data.quote_cache import QuoteCache
from portfolio_valuation_engine.models import Quote


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def _quote(symbol: str = "AAPL", price: str = "150") -> Quote:
    return Quote(symbol=symbol, price=Decimal(price))


def test_fresh_entry_is_served_within_ttl():
    clock = FakeClock()
    cache = QuoteCache(ttl_seconds=30, clock=clock)
    cache.put(_quote())

    clock.now += 29.9

    assert cache.get_fresh("AAPL") == _quote()


def test_entry_expires_after_ttl_but_remains_last_known():
    """
    GIVEN a quote cached 30 seconds ago with a 30 second TTL
    WHEN the cache is queried
    THEN it is no longer fresh but is still available as the last known quote.
    """
    clock = FakeClock()
    cache = QuoteCache(ttl_seconds=30, clock=clock)
    cache.put(_quote())

    clock.now += 30

    assert cache.get_fresh("AAPL") is None
    assert cache.get_last_known("AAPL") == _quote()


def test_put_replaces_entry_and_resets_age():
    clock = FakeClock()
    cache = QuoteCache(ttl_seconds=30, clock=clock)
    cache.put(_quote(price="150"))
    clock.now += 40
    cache.put(_quote(price="155"))

    assert cache.get_fresh("AAPL").price == Decimal("155")
    assert len(cache) == 1


def test_unknown_symbol_and_clear():
    cache = QuoteCache(ttl_seconds=30, clock=FakeClock())
    cache.put(_quote("MSFT"))

    assert cache.get_fresh("AAPL") is None
    assert cache.get_last_known("AAPL") is None

    cache.clear()
    assert len(cache) == 0
    assert cache.get_last_known("MSFT") is None
