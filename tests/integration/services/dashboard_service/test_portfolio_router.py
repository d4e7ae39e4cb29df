# tests/integration/services/dashboard_service/test_portfolio_router.py
from decimal import Decimal
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

from portfolio_valuation_engine.models import TransactionDirection
from src.services.dashboard_service.app.main import app
from src.services.dashboard_service.app.services.portfolio_controller import (
    PortfolioController,
    get_portfolio_controller,
)
from tests.test_support.dashboard_fakes import FakeQuoteProvider, build_market_data, quote

pytestmark = pytest.mark.asyncio

BUY = TransactionDirection.BUY


@pytest_asyncio.fixture
async def async_test_client():
    provider = FakeQuoteProvider(
        {
            "MSFT": quote("MSFT", "100", "10", "Technology"),
            "XOM": quote("XOM", "100", "-20", "Energy"),
        }
    )
    controller = PortfolioController(build_market_data(provider))
    app.dependency_overrides[get_portfolio_controller] = lambda: controller
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client, controller
    app.dependency_overrides.pop(get_portfolio_controller, None)


async def test_snapshot_of_empty_portfolio(async_test_client):
    client, _ = async_test_client

    response = await client.get("/portfolio/snapshot")

    assert response.status_code == 200
    body = response.json()
    assert body["total_value"] == 0
    assert body["sector_allocation"] == {}
    assert body["risk_score"] == 50
    assert body["risk_level"] == "Moderate"
    assert body["top_performer"] is None
    assert body["positions"] == []


async def test_snapshot_reports_all_metrics(async_test_client):
    """
    GIVEN 7 MSFT bought at 80 and 3 XOM bought at 120, both now quoted at 100
    WHEN the snapshot is requested
    THEN totals, allocation, scores and performers reflect those positions.
    """
    client, controller = async_test_client
    await controller.submit_transaction("MSFT", BUY, Decimal("7"), price=Decimal("80"))
    await controller.submit_transaction("XOM", BUY, Decimal("3"), price=Decimal("120"))

    response = await client.get("/portfolio/snapshot")

    assert response.status_code == 200
    body = response.json()
    assert body["total_value"] == pytest.approx(1000.0)
    assert body["total_cost_basis"] == pytest.approx(920.0)
    assert body["total_gain_loss"] == pytest.approx(80.0)
    assert body["sector_allocation"] == {
        "Technology": pytest.approx(70.0),
        "Energy": pytest.approx(30.0),
    }
    assert body["diversification_score"] == 40
    assert body["risk_score"] == 26
    assert body["risk_level"] == "Low"
    assert body["top_performer"]["symbol"] == "MSFT"
    assert body["worst_performer"]["symbol"] == "XOM"
    assert [p["symbol"] for p in body["positions"]] == ["MSFT", "XOM"]


async def test_holdings_lists_current_holdings(async_test_client):
    client, controller = async_test_client
    await controller.submit_transaction("MSFT", BUY, Decimal("7"), price=Decimal("80"))

    response = await client.get("/portfolio/holdings")

    assert response.status_code == 200
    assert response.json()["holdings"][0]["symbol"] == "MSFT"
    assert response.json()["holdings"][0]["average_cost"] == 80.0


async def test_snapshot_unexpected_error_maps_to_500():
    mock_controller = AsyncMock()
    mock_controller.get_snapshot.side_effect = RuntimeError("boom")
    app.dependency_overrides[get_portfolio_controller] = lambda: mock_controller
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/portfolio/snapshot")
    finally:
        app.dependency_overrides.pop(get_portfolio_controller, None)

    assert response.status_code == 500
    assert "valuing the portfolio" in response.json()["detail"]
