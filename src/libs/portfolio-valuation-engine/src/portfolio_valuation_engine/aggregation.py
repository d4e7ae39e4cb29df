# src/libs/portfolio-valuation-engine/src/portfolio_valuation_engine/aggregation.py
from decimal import Decimal
from typing import List, Mapping, Optional, Sequence, Tuple

from .constants import ZERO
from .models import Holding, PerformanceHighlight, PortfolioTotals, Position, Quote
from .valuation import lookup_quote, percent_of, value_position


def value_positions(
    holdings: Sequence[Holding], quotes: Mapping[str, Quote]
) -> List[Position]:
    """Values every holding, preserving holding order."""
    return [value_position(h, lookup_quote(quotes, h.symbol)) for h in holdings]


def total_value(positions: Sequence[Position]) -> Decimal:
    return sum((p.value for p in positions), ZERO)


def aggregate_positions(positions: Sequence[Position]) -> PortfolioTotals:
    """
    Sums already-valued positions into portfolio totals. An empty sequence
    yields all-zero totals.
    """
    portfolio_value = total_value(positions)
    total_cost_basis = sum((p.cost_basis for p in positions), ZERO)
    total_gain_loss = portfolio_value - total_cost_basis

    return PortfolioTotals(
        total_value=portfolio_value,
        total_cost_basis=total_cost_basis,
        total_gain_loss=total_gain_loss,
        total_gain_loss_percent=percent_of(total_gain_loss, total_cost_basis),
        total_shares=sum((p.shares for p in positions), ZERO),
        holding_count=len(positions),
    )


def aggregate_portfolio(
    holdings: Sequence[Holding], quotes: Mapping[str, Quote]
) -> PortfolioTotals:
    """
    Calculates portfolio value and performance totals.

    Holdings without a quote are valued at their average cost, so a single
    missing quote degrades that position rather than failing the aggregate.
    """
    return aggregate_positions(value_positions(holdings, quotes))


def find_performance_extremes(
    positions: Sequence[Position],
) -> Tuple[Optional[PerformanceHighlight], Optional[PerformanceHighlight]]:
    """
    Returns the (top, worst) performers by percent change. Ties resolve to the
    earliest position; an empty sequence returns (None, None).
    """
    if not positions:
        return None, None

    top = positions[0]
    worst = positions[0]
    for position in positions[1:]:
        if position.percent_change > top.percent_change:
            top = position
        if position.percent_change < worst.percent_change:
            worst = position

    return _to_highlight(top), _to_highlight(worst)


def _to_highlight(position: Position) -> PerformanceHighlight:
    return PerformanceHighlight(
        symbol=position.symbol,
        name=position.name,
        percent_change=position.percent_change,
    )
