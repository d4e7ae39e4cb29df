# src/libs/portfolio-valuation-engine/src/portfolio_valuation_engine/snapshot.py
from typing import List, Mapping, Sequence, Tuple

from .aggregation import aggregate_positions, find_performance_extremes, value_positions
from .allocation import allocate_positions_by_sector
from .models import Holding, PortfolioSnapshot, Position, Quote
from .scoring import diversification_score, score_positions_risk


def build_portfolio_snapshot(
    holdings: Sequence[Holding], quotes: Mapping[str, Quote]
) -> PortfolioSnapshot:
    """Derives every portfolio-level metric from one consistent set of positions."""
    snapshot, _ = build_portfolio_snapshot_with_positions(holdings, quotes)
    return snapshot


def build_portfolio_snapshot_with_positions(
    holdings: Sequence[Holding], quotes: Mapping[str, Quote]
) -> Tuple[PortfolioSnapshot, List[Position]]:
    positions = value_positions(holdings, quotes)
    totals = aggregate_positions(positions)
    sector_allocation = allocate_positions_by_sector(positions)
    risk = score_positions_risk(positions, quotes)
    top, worst = find_performance_extremes(positions)

    snapshot = PortfolioSnapshot(
        **totals.model_dump(),
        sector_allocation=sector_allocation,
        diversification_score=(
            diversification_score(len(positions), len(sector_allocation)) if positions else 0
        ),
        risk_score=risk.score,
        risk_level=risk.level,
        top_performer=top,
        worst_performer=worst,
    )
    return snapshot, positions
