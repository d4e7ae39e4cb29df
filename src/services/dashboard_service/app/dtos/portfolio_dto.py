# src/services/dashboard_service/app/dtos/portfolio_dto.py
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel

from portfolio_valuation_engine.models import PerformanceHighlight, PortfolioSnapshot, Position


class PositionRecord(BaseModel):
    """Valuation of a single holding."""
    symbol: str
    name: Optional[str] = None
    sector: str
    shares: float
    average_cost: float
    current_price: float
    value: float
    cost_basis: float
    absolute_change: float
    percent_change: float
    is_fallback_price: bool

    @classmethod
    def from_position(cls, position: Position) -> "PositionRecord":
        return cls(
            symbol=position.symbol,
            name=position.name,
            sector=position.sector,
            shares=float(position.shares),
            average_cost=float(position.average_cost),
            current_price=float(position.current_price),
            value=float(position.value),
            cost_basis=float(position.cost_basis),
            absolute_change=float(position.absolute_change),
            percent_change=float(position.percent_change),
            is_fallback_price=position.is_fallback_price,
        )


class PerformerRecord(BaseModel):
    symbol: str
    name: Optional[str] = None
    percent_change: float

    @classmethod
    def from_highlight(cls, highlight: Optional[PerformanceHighlight]) -> Optional["PerformerRecord"]:
        if highlight is None:
            return None
        return cls(
            symbol=highlight.symbol,
            name=highlight.name,
            percent_change=float(highlight.percent_change),
        )


class PortfolioSnapshotResponse(BaseModel):
    """Portfolio-level metrics plus the positions they were derived from."""
    total_value: float
    total_cost_basis: float
    total_gain_loss: float
    total_gain_loss_percent: float
    total_shares: float
    holding_count: int
    sector_allocation: Dict[str, float]
    diversification_score: int
    risk_score: int
    risk_level: Literal["Low", "Moderate", "High"]
    top_performer: Optional[PerformerRecord] = None
    worst_performer: Optional[PerformerRecord] = None
    positions: List[PositionRecord]

    @classmethod
    def from_snapshot(
        cls, snapshot: PortfolioSnapshot, positions: List[Position]
    ) -> "PortfolioSnapshotResponse":
        return cls(
            total_value=float(snapshot.total_value),
            total_cost_basis=float(snapshot.total_cost_basis),
            total_gain_loss=float(snapshot.total_gain_loss),
            total_gain_loss_percent=float(snapshot.total_gain_loss_percent),
            total_shares=float(snapshot.total_shares),
            holding_count=snapshot.holding_count,
            sector_allocation={k: float(v) for k, v in snapshot.sector_allocation.items()},
            diversification_score=snapshot.diversification_score,
            risk_score=snapshot.risk_score,
            risk_level=snapshot.risk_level,
            top_performer=PerformerRecord.from_highlight(snapshot.top_performer),
            worst_performer=PerformerRecord.from_highlight(snapshot.worst_performer),
            positions=[PositionRecord.from_position(p) for p in positions],
        )
