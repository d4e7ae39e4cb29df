# tests/unit/libs/portfolio-valuation-engine/test_ledger.py
import pytest
from datetime import date, datetime
from decimal import Decimal

from portfolio_valuation_engine.exceptions import InsufficientSharesError, UnknownHoldingError
from portfolio_valuation_engine.ledger import (
    apply_transaction,
    record_transaction,
    replay_transactions,
)
from portfolio_valuation_engine.models import (
    Holding,
    LedgerState,
    Transaction,
    TransactionDirection,
)

BUY = TransactionDirection.BUY
SELL = TransactionDirection.SELL


def _txn(symbol: str, direction: TransactionDirection, shares: str, price: str, day: int = 2) -> Transaction:
    return Transaction(
        timestamp=datetime(2025, 3, day, 10, 0, 0),
        symbol=symbol,
        direction=direction,
        shares=Decimal(shares),
        price=Decimal(price),
    )


def _holding(symbol: str, shares: str, cost: str) -> Holding:
    return Holding(
        symbol=symbol,
        shares=Decimal(shares),
        average_cost=Decimal(cost),
        acquired_at=date(2025, 1, 1),
    )


def test_buy_new_symbol_creates_holding():
    result = apply_transaction([], _txn("AAPL", BUY, "10", "150"))

    assert len(result) == 1
    assert result[0].symbol == "AAPL"
    assert result[0].shares == Decimal("10")
    assert result[0].average_cost == Decimal("150")
    assert result[0].acquired_at == date(2025, 3, 2)


def test_buy_into_existing_holding_averages_cost():
    """
    GIVEN 10 shares held at a $120 average cost
    WHEN 10 more shares are bought at $100
    THEN the holding has 20 shares at a $110 average cost.
    """
    holdings = [_holding("AAPL", "10", "120")]

    result = apply_transaction(holdings, _txn("AAPL", BUY, "10", "100"))

    assert result[0].shares == Decimal("20")
    assert result[0].average_cost == Decimal("110")


def test_buy_with_uneven_quantities_uses_volume_weighting():
    holdings = [_holding("MSFT", "30", "200")]

    result = apply_transaction(holdings, _txn("MSFT", BUY, "10", "240"))

    # (30 * 200 + 10 * 240) / 40 = 210
    assert result[0].average_cost == Decimal("210")


def test_partial_sell_keeps_average_cost():
    holdings = [_holding("AAPL", "10", "150")]

    result = apply_transaction(holdings, _txn("AAPL", SELL, "4", "170"))

    assert result[0].shares == Decimal("6")
    assert result[0].average_cost == Decimal("150")


def test_selling_all_shares_removes_holding():
    holdings = [_holding("AAPL", "10", "150"), _holding("XOM", "5", "100")]

    result = apply_transaction(holdings, _txn("AAPL", SELL, "10", "160"))

    assert [h.symbol for h in result] == ["XOM"]


def test_oversell_is_rejected_and_holdings_unchanged():
    """
    GIVEN a holding of 3 shares
    WHEN a sell of 5 shares is applied
    THEN InsufficientSharesError is raised and the holding still has 3 shares.
    """
    holdings = [_holding("AAPL", "3", "150")]

    with pytest.raises(InsufficientSharesError) as exc_info:
        apply_transaction(holdings, _txn("AAPL", SELL, "5", "160"))

    assert exc_info.value.symbol == "AAPL"
    assert exc_info.value.requested == Decimal("5")
    assert exc_info.value.available == Decimal("3")
    assert holdings == [_holding("AAPL", "3", "150")]


def test_sell_of_unheld_symbol_is_rejected():
    with pytest.raises(UnknownHoldingError) as exc_info:
        apply_transaction([_holding("AAPL", "3", "150")], _txn("TSLA", SELL, "1", "600"))
    assert exc_info.value.symbol == "TSLA"


def test_apply_transaction_does_not_mutate_input():
    holdings = [_holding("AAPL", "10", "150")]
    apply_transaction(holdings, _txn("AAPL", BUY, "5", "200"))
    assert holdings[0].shares == Decimal("10")


def test_rebuying_a_closed_symbol_recreates_holding():
    holdings = apply_transaction([_holding("AAPL", "2", "100")], _txn("AAPL", SELL, "2", "120"))
    assert holdings == []

    holdings = apply_transaction(holdings, _txn("AAPL", BUY, "1", "130", day=5))

    assert holdings[0].shares == Decimal("1")
    assert holdings[0].average_cost == Decimal("130")


def test_record_transaction_appends_to_ledger():
    state = record_transaction(LedgerState(), _txn("AAPL", BUY, "10", "150"))
    state = record_transaction(state, _txn("AAPL", SELL, "4", "160", day=3))

    assert [t.direction for t in state.transactions] == [BUY, SELL]
    assert state.holdings[0].shares == Decimal("6")


def test_rejected_transaction_is_not_recorded():
    state = record_transaction(LedgerState(), _txn("AAPL", BUY, "3", "150"))

    with pytest.raises(InsufficientSharesError):
        record_transaction(state, _txn("AAPL", SELL, "5", "160"))

    assert len(state.transactions) == 1
    assert state.holdings[0].shares == Decimal("3")


def test_replay_rebuilds_holdings_from_history():
    history = [
        _txn("AAPL", BUY, "10", "120", day=1),
        _txn("XOM", BUY, "5", "100", day=2),
        _txn("AAPL", BUY, "10", "100", day=3),
        _txn("XOM", SELL, "5", "110", day=4),
        _txn("AAPL", SELL, "5", "130", day=5),
    ]

    state = replay_transactions(history)

    assert len(state.transactions) == 5
    assert [h.symbol for h in state.holdings] == ["AAPL"]
    assert state.holdings[0].shares == Decimal("15")
    assert state.holdings[0].average_cost == Decimal("110")
