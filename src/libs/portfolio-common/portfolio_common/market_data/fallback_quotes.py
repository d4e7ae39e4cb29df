# src/libs/portfolio-common/portfolio_common/market_data/fallback_quotes.py
from decimal import Decimal
from typing import Dict, Optional

from portfolio_valuation_engine.models import Quote

# Last known quotes for widely held tickers, served when the provider is unreachable
# and nothing has been cached yet.
FALLBACK_QUOTES: Dict[str, Quote] = {
    "AAPL": Quote(
        symbol="AAPL", name="Apple Inc.", price=Decimal("161.75"),
        change_percent=Decimal("1.57"), sector="Technology",
    ),
    "MSFT": Quote(
        symbol="MSFT", name="Microsoft Corporation", price=Decimal("238.45"),
        change_percent=Decimal("1.36"), sector="Technology",
    ),
    "GOOGL": Quote(
        symbol="GOOGL", name="Alphabet Inc.", price=Decimal("2185.75"),
        change_percent=Decimal("0.71"), sector="Technology",
    ),
    "AMZN": Quote(
        symbol="AMZN", name="Amazon.com Inc.", price=Decimal("3125.98"),
        change_percent=Decimal("1.47"), sector="Consumer Cyclical",
    ),
    "TSLA": Quote(
        symbol="TSLA", name="Tesla Inc.", price=Decimal("685.25"),
        change_percent=Decimal("-1.79"), sector="Automotive",
    ),
}


def get_fallback_quote(symbol: str) -> Optional[Quote]:
    return FALLBACK_QUOTES.get(symbol.upper())
