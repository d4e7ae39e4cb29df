# tests/unit/libs/portfolio-valuation-engine/test_snapshot.py
from decimal import Decimal

from portfolio_valuation_engine.models import Holding, Quote
from portfolio_valuation_engine.snapshot import (
    build_portfolio_snapshot,
    build_portfolio_snapshot_with_positions,
)


def test_snapshot_of_empty_portfolio():
    snapshot = build_portfolio_snapshot([], {})

    assert snapshot.total_value == Decimal("0")
    assert snapshot.total_gain_loss_percent == Decimal("0")
    assert snapshot.sector_allocation == {}
    assert snapshot.diversification_score == 0
    assert (snapshot.risk_score, snapshot.risk_level) == (50, "Moderate")
    assert snapshot.top_performer is None
    assert snapshot.worst_performer is None


def test_snapshot_combines_all_metrics():
    holdings = [
        Holding(symbol="MSFT", shares=Decimal("7"), average_cost=Decimal("80")),
        Holding(symbol="XOM", shares=Decimal("3"), average_cost=Decimal("120")),
    ]
    quotes = {
        "MSFT": Quote(symbol="MSFT", price=Decimal("100"), change_percent=Decimal("10"), sector="Technology"),
        "XOM": Quote(symbol="XOM", price=Decimal("100"), change_percent=Decimal("-20"), sector="Energy"),
    }

    snapshot, positions = build_portfolio_snapshot_with_positions(holdings, quotes)

    # MSFT: 700 vs 560; XOM: 300 vs 360
    assert snapshot.total_value == Decimal("1000")
    assert snapshot.total_cost_basis == Decimal("920")
    assert snapshot.total_gain_loss == Decimal("80")
    assert snapshot.holding_count == 2
    assert snapshot.sector_allocation == {"Technology": Decimal("70"), "Energy": Decimal("30")}
    # 2 holdings -> 20, 2 sectors -> 20
    assert snapshot.diversification_score == 40
    # weighted |change| = 0.7 * 10 + 0.3 * 20 = 13 -> 26
    assert (snapshot.risk_score, snapshot.risk_level) == (26, "Low")
    assert snapshot.top_performer.symbol == "MSFT"
    assert snapshot.worst_performer.symbol == "XOM"
    assert [p.symbol for p in positions] == ["MSFT", "XOM"]
