# src/services/dashboard_service/app/dtos/transaction_dto.py
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from portfolio_valuation_engine.models import Holding, Transaction, TransactionDirection


class TransactionRequest(BaseModel):
    """A buy or sell submitted by the dashboard."""
    model_config = ConfigDict(str_strip_whitespace=True)

    symbol: str = Field(..., min_length=1, description="Ticker symbol (case-insensitive).")
    direction: TransactionDirection
    shares: Decimal = Field(..., gt=0, description="Number of shares; fractional allowed.")
    price: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Execution price. When omitted the current quote price is used.",
    )
    timestamp: Optional[datetime] = Field(
        default=None, description="Execution time. Defaults to now (UTC)."
    )


class TransactionRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    timestamp: datetime
    symbol: str
    direction: TransactionDirection
    shares: float
    price: float

    @classmethod
    def from_transaction(cls, txn: Transaction) -> "TransactionRecord":
        return cls(
            timestamp=txn.timestamp,
            symbol=txn.symbol,
            direction=txn.direction,
            shares=float(txn.shares),
            price=float(txn.price),
        )


class HoldingRecord(BaseModel):
    symbol: str
    name: Optional[str] = None
    shares: float
    average_cost: float
    acquired_at: date

    @classmethod
    def from_holding(cls, holding: Holding) -> "HoldingRecord":
        return cls(
            symbol=holding.symbol,
            name=holding.name,
            shares=float(holding.shares),
            average_cost=float(holding.average_cost),
            acquired_at=holding.acquired_at,
        )


class TransactionResponse(BaseModel):
    """The recorded ledger entry and the resulting holding (None when fully sold)."""
    transaction: TransactionRecord
    holding: Optional[HoldingRecord] = None


class TransactionListResponse(BaseModel):
    transactions: List[TransactionRecord]


class HoldingListResponse(BaseModel):
    holdings: List[HoldingRecord]
