"""Pure valuation, allocation, scoring and ledger rules for a stock portfolio."""

from .aggregation import aggregate_portfolio, find_performance_extremes
from .allocation import allocate_by_sector
from .exceptions import (
    InsufficientSharesError,
    PortfolioValuationError,
    UnknownHoldingError,
)
from .ledger import apply_transaction, record_transaction, replay_transactions
from .models import (
    Holding,
    LedgerState,
    PerformanceHighlight,
    PortfolioSnapshot,
    PortfolioTotals,
    Position,
    Quote,
    RiskAssessment,
    Transaction,
    TransactionDirection,
)
from .scoring import diversification_score, score_diversification, score_risk
from .snapshot import build_portfolio_snapshot, build_portfolio_snapshot_with_positions
from .valuation import value_position

__all__ = [
    "Holding",
    "LedgerState",
    "PerformanceHighlight",
    "PortfolioSnapshot",
    "PortfolioTotals",
    "Position",
    "Quote",
    "RiskAssessment",
    "Transaction",
    "TransactionDirection",
    "PortfolioValuationError",
    "InsufficientSharesError",
    "UnknownHoldingError",
    "value_position",
    "aggregate_portfolio",
    "find_performance_extremes",
    "allocate_by_sector",
    "diversification_score",
    "score_diversification",
    "score_risk",
    "apply_transaction",
    "record_transaction",
    "replay_transactions",
    "build_portfolio_snapshot",
    "build_portfolio_snapshot_with_positions",
]
