# src/services/dashboard_service/app/services/portfolio_controller.py
import asyncio
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Tuple

from fastapi import Request

from portfolio_common.market_data import MarketDataService
from portfolio_common.monitoring import LEDGER_TRANSACTIONS_TOTAL, SNAPSHOT_CALCULATION_DURATION_SECONDS
from portfolio_valuation_engine.exceptions import PortfolioValuationError, UnknownHoldingError
from portfolio_valuation_engine.ledger import find_holding, record_transaction
from portfolio_valuation_engine.models import (
    Holding,
    LedgerState,
    PortfolioSnapshot,
    Position,
    Transaction,
    TransactionDirection,
)
from portfolio_valuation_engine.snapshot import build_portfolio_snapshot_with_positions

logger = logging.getLogger(__name__)


class ExecutionPriceUnavailableError(Exception):
    """Raised when a transaction has no explicit price and none can be derived."""
    def __init__(self, symbol: str):
        self.symbol = symbol
        self.message = f"No execution price supplied and no quote available for {symbol}."
        super().__init__(self.message)


class PortfolioController:
    """
    Owns the holdings and the transaction ledger for one portfolio.

    All mutations run under a single lock so two concurrent sells of the
    same symbol can never both pass the share-count check.
    """
    def __init__(self, market_data: MarketDataService, state: Optional[LedgerState] = None):
        self._market_data = market_data
        self._state = state or LedgerState()
        self._lock = asyncio.Lock()

    @property
    def market_data(self) -> MarketDataService:
        return self._market_data

    @property
    def holdings(self) -> Tuple[Holding, ...]:
        return self._state.holdings

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return self._state.transactions

    async def submit_transaction(
        self,
        symbol: str,
        direction: TransactionDirection,
        shares: Decimal,
        price: Optional[Decimal] = None,
        timestamp: Optional[datetime] = None,
    ) -> Tuple[Transaction, Optional[Holding]]:
        """
        Validates, applies and records a transaction.

        The quote for a missing price is fetched before the ledger lock is
        taken, so a slow provider never blocks other submissions.

        Returns:
            The recorded transaction and the resulting holding, or None when
            the sell closed the position.

        Raises:
            UnknownHoldingError, InsufficientSharesError: from the ledger rules.
            ExecutionPriceUnavailableError: when no price can be determined.
        """
        symbol = symbol.strip().upper()
        quoted_price: Optional[Decimal] = None
        if price is None:
            quote = await self._market_data.get_quote(symbol)
            quoted_price = quote.price if quote is not None else None

        try:
            async with self._lock:
                if price is None:
                    price = self._resolve_execution_price(symbol, direction, quoted_price)

                txn = Transaction(
                    timestamp=timestamp or datetime.now(timezone.utc),
                    symbol=symbol,
                    direction=direction,
                    shares=shares,
                    price=price,
                )
                self._state = record_transaction(self._state, txn)
        except (PortfolioValuationError, ExecutionPriceUnavailableError):
            LEDGER_TRANSACTIONS_TOTAL.labels(direction=direction.value, result="rejected").inc()
            raise

        LEDGER_TRANSACTIONS_TOTAL.labels(direction=direction.value, result="accepted").inc()
        logger.info(
            "Transaction recorded.",
            extra={
                "symbol": symbol,
                "direction": direction.value,
                "shares": str(shares),
                "price": str(price),
            },
        )
        return txn, find_holding(self._state.holdings, symbol)

    def _resolve_execution_price(
        self, symbol: str, direction: TransactionDirection, quoted_price: Optional[Decimal]
    ) -> Decimal:
        """Quote price first, then the holding's average cost. Must run under the lock."""
        if quoted_price is not None:
            return quoted_price

        existing = find_holding(self._state.holdings, symbol)
        if existing is not None:
            return existing.average_cost
        if direction == TransactionDirection.SELL:
            raise UnknownHoldingError(symbol)
        raise ExecutionPriceUnavailableError(symbol)

    async def get_snapshot(self) -> Tuple[PortfolioSnapshot, List[Position]]:
        """Fetches quotes for every held symbol and derives the portfolio snapshot."""
        holdings = self._state.holdings
        with SNAPSHOT_CALCULATION_DURATION_SECONDS.time():
            quotes = await self._market_data.get_quotes(h.symbol for h in holdings)
            return build_portfolio_snapshot_with_positions(holdings, quotes)


def get_portfolio_controller(request: Request) -> PortfolioController:
    """Dependency injector for the PortfolioController wired at startup."""
    return request.app.state.portfolio_controller
