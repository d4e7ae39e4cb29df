# src/libs/portfolio-valuation-engine/src/portfolio_valuation_engine/allocation.py
from decimal import Decimal
from typing import Dict, Mapping, Sequence

from .aggregation import total_value, value_positions
from .constants import ZERO
from .models import Holding, Position, Quote
from .valuation import percent_of


def allocate_positions_by_sector(positions: Sequence[Position]) -> Dict[str, Decimal]:
    """
    Groups positions by sector and returns each sector's share of total value
    as a percentage.

    Sectors appear in first-seen order. Several symbols may fold into one
    sector bucket. When total value is zero every sector maps to zero.
    """
    sector_values: Dict[str, Decimal] = {}
    for position in positions:
        sector_values[position.sector] = sector_values.get(position.sector, ZERO) + position.value

    portfolio_value = total_value(positions)
    return {
        sector: percent_of(value, portfolio_value)
        for sector, value in sector_values.items()
    }


def allocate_by_sector(
    holdings: Sequence[Holding], quotes: Mapping[str, Quote]
) -> Dict[str, Decimal]:
    """Sector allocation in percent; holdings without a sector fall into 'Other'."""
    return allocate_positions_by_sector(value_positions(holdings, quotes))
