# src/libs/portfolio-valuation-engine/src/portfolio_valuation_engine/valuation.py
import logging
from decimal import Decimal
from typing import Mapping, Optional

from .constants import DEFAULT_SECTOR, HUNDRED, ZERO
from .models import Holding, Position, Quote

logger = logging.getLogger(__name__)


def resolve_sector(quote: Optional[Quote]) -> str:
    """Returns the quote's sector, or the default bucket when unknown."""
    if quote is None or not quote.sector:
        return DEFAULT_SECTOR
    return quote.sector


def lookup_quote(quotes: Mapping[str, Quote], symbol: str) -> Optional[Quote]:
    return quotes.get(symbol)


def percent_of(amount: Decimal, base: Decimal) -> Decimal:
    """amount / base * 100, or zero when base is not positive."""
    if base > ZERO:
        return (amount / base) * HUNDRED
    return ZERO


def value_position(holding: Holding, quote: Optional[Quote]) -> Position:
    """
    Values a single holding against its latest quote.

    Args:
        holding: The holding to value.
        quote: The latest quote for the holding's symbol, or None if unavailable.

    Returns:
        A Position. When no quote is available the holding's average cost is
        used as the current price and the position is flagged as fallback-priced.
    """
    is_fallback = quote is None
    if is_fallback:
        logger.debug(
            "No quote available; valuing at average cost.",
            extra={"symbol": holding.symbol},
        )
        current_price = holding.average_cost
    else:
        current_price = quote.price

    value = current_price * holding.shares
    cost_basis = holding.average_cost * holding.shares
    absolute_change = value - cost_basis

    return Position(
        symbol=holding.symbol,
        name=holding.name or (quote.name if quote else None),
        shares=holding.shares,
        average_cost=holding.average_cost,
        sector=resolve_sector(quote),
        current_price=current_price,
        value=value,
        cost_basis=cost_basis,
        absolute_change=absolute_change,
        percent_change=percent_of(absolute_change, cost_basis),
        is_fallback_price=is_fallback,
    )
