# src/libs/portfolio-valuation-engine/src/portfolio_valuation_engine/models.py
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Literal, Optional, Tuple, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

RiskLevel = Literal["Low", "Moderate", "High"]


def _normalize_symbol(value: str) -> str:
    symbol = value.strip().upper()
    if not symbol:
        raise ValueError("symbol must be a non-empty string")
    return symbol


class TransactionDirection(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class Holding(BaseModel):
    """
    A position in one security. A holding never exists with zero shares;
    it is removed from the holding set instead.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(..., description="Upper-case ticker, unique within the portfolio.")
    shares: Decimal = Field(..., gt=0, description="Shares held; fractional shares allowed.")
    average_cost: Decimal = Field(..., ge=0, description="Volume-weighted average price per share.")
    acquired_at: date = Field(default_factory=date.today, description="Date of most recent change.")
    name: Optional[str] = Field(default=None, description="Display name of the security.")

    normalize_symbol = field_validator("symbol")(_normalize_symbol)


class Quote(BaseModel):
    """Latest known market data for a symbol, validated at the market-data boundary."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    price: Decimal = Field(..., ge=0, description="Current price per share.")
    change_percent: Decimal = Field(
        default=Decimal(0), description="Signed percent move, used as a volatility proxy."
    )
    sector: Optional[str] = Field(default=None, description="Sector classification, if known.")
    name: Optional[str] = None

    normalize_symbol = field_validator("symbol")(_normalize_symbol)


class Transaction(BaseModel):
    """Immutable record of one buy or sell event in the ledger."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    symbol: str
    direction: TransactionDirection
    shares: Decimal = Field(..., gt=0)
    price: Decimal = Field(..., ge=0, description="Execution price per share.")

    normalize_symbol = field_validator("symbol")(_normalize_symbol)


class Position(BaseModel):
    """Derived valuation of one holding against one quote."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    name: Optional[str] = None
    shares: Decimal
    average_cost: Decimal
    sector: str
    current_price: Decimal
    value: Decimal
    cost_basis: Decimal
    absolute_change: Decimal
    percent_change: Decimal
    is_fallback_price: bool = Field(
        default=False,
        description="True when no quote was available and the average cost was used as price.",
    )


class PortfolioTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_value: Decimal
    total_cost_basis: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percent: Decimal
    total_shares: Decimal
    holding_count: int


class RiskAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    level: RiskLevel


class PerformanceHighlight(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    name: Optional[str] = None
    percent_change: Decimal


class PortfolioSnapshot(BaseModel):
    """Aggregate of all positions at a point in time."""

    model_config = ConfigDict(frozen=True)

    total_value: Decimal
    total_cost_basis: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percent: Decimal
    total_shares: Decimal
    holding_count: int
    sector_allocation: Dict[str, Decimal]
    diversification_score: int
    risk_score: int
    risk_level: RiskLevel
    top_performer: Optional[PerformanceHighlight] = None
    worst_performer: Optional[PerformanceHighlight] = None


class LedgerState(BaseModel):
    """Current holdings together with the append-only transaction log that produced them."""

    model_config = ConfigDict(frozen=True)

    holdings: Tuple[Holding, ...] = ()
    transactions: Tuple[Transaction, ...] = ()
