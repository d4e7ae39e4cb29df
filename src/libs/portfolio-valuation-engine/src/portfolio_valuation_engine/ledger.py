# src/libs/portfolio-valuation-engine/src/portfolio_valuation_engine/ledger.py
import logging
from typing import Iterable, List, Optional, Sequence

from .constants import ZERO
from .exceptions import InsufficientSharesError, UnknownHoldingError
from .models import Holding, LedgerState, Transaction, TransactionDirection

logger = logging.getLogger(__name__)


def find_holding(holdings: Sequence[Holding], symbol: str) -> Optional[Holding]:
    return next((h for h in holdings if h.symbol == symbol), None)


def _apply_buy(existing: Optional[Holding], txn: Transaction) -> Holding:
    if existing is None:
        return Holding(
            symbol=txn.symbol,
            shares=txn.shares,
            average_cost=txn.price,
            acquired_at=txn.timestamp.date(),
        )

    new_shares = existing.shares + txn.shares
    new_average_cost = (
        existing.shares * existing.average_cost + txn.shares * txn.price
    ) / new_shares
    return existing.model_copy(
        update={
            "shares": new_shares,
            "average_cost": new_average_cost,
            "acquired_at": txn.timestamp.date(),
        }
    )


def _apply_sell(existing: Optional[Holding], txn: Transaction) -> Optional[Holding]:
    if existing is None:
        logger.warning("Rejected SELL for a symbol that is not held.", extra={"symbol": txn.symbol})
        raise UnknownHoldingError(txn.symbol)

    new_shares = existing.shares - txn.shares
    if new_shares < ZERO:
        logger.warning(
            "Rejected SELL exceeding held shares.",
            extra={"symbol": txn.symbol, "requested": str(txn.shares), "available": str(existing.shares)},
        )
        raise InsufficientSharesError(txn.symbol, requested=txn.shares, available=existing.shares)

    if new_shares == ZERO:
        return None

    # Selling leaves the average cost of the remaining shares unchanged.
    return existing.model_copy(
        update={"shares": new_shares, "acquired_at": txn.timestamp.date()}
    )


def apply_transaction(holdings: Sequence[Holding], txn: Transaction) -> List[Holding]:
    """
    Applies one buy or sell to a holding set and returns the new set.

    The input is never mutated. Holding order is preserved; a newly bought
    symbol is appended. A sell that brings shares to exactly zero removes
    the holding.

    Raises:
        UnknownHoldingError: if a SELL references a symbol that is not held.
        InsufficientSharesError: if a SELL exceeds the held shares.
    """
    existing = find_holding(holdings, txn.symbol)

    if txn.direction == TransactionDirection.BUY:
        updated: Optional[Holding] = _apply_buy(existing, txn)
    else:
        updated = _apply_sell(existing, txn)

    if existing is None:
        return [*holdings, updated]

    result: List[Holding] = []
    for holding in holdings:
        if holding.symbol != txn.symbol:
            result.append(holding)
        elif updated is not None:
            result.append(updated)
    return result


def record_transaction(state: LedgerState, txn: Transaction) -> LedgerState:
    """
    Applies a transaction and appends it to the ledger. Either both the
    holdings and the ledger change, or neither does.
    """
    holdings = apply_transaction(state.holdings, txn)
    return LedgerState(holdings=tuple(holdings), transactions=(*state.transactions, txn))


def replay_transactions(transactions: Iterable[Transaction]) -> LedgerState:
    """Rebuilds holdings and the ledger from a transaction history, in order."""
    state = LedgerState()
    for txn in transactions:
        state = record_transaction(state, txn)
    return state
