# tests/integration/services/dashboard_service/test_main_app.py
import httpx
import pytest

from src.services.dashboard_service.app.main import app
from tests.test_support.dashboard_fakes import FakeQuoteProvider, build_market_data, quote

pytestmark = pytest.mark.asyncio


async def _get(path: str, headers: dict | None = None) -> httpx.Response:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get(path, headers=headers)


async def test_liveness_and_correlation_headers():
    response = await _get("/health/live")

    assert response.status_code == 200
    assert response.headers["X-Correlation-Id"].startswith("DSH:")
    assert response.headers["X-Request-Id"].startswith("REQ:")


async def test_incoming_correlation_id_is_echoed():
    response = await _get("/health/live", headers={"X-Correlation-Id": "CLIENT:123"})
    assert response.headers["X-Correlation-Id"] == "CLIENT:123"


async def test_readiness_reflects_market_data_provider():
    app.state.market_data_service = build_market_data(
        FakeQuoteProvider({"AAPL": quote("AAPL", "190")})
    )
    ready = await _get("/health/ready")

    app.state.market_data_service = build_market_data(FakeQuoteProvider())
    not_ready = await _get("/health/ready")

    assert ready.status_code == 200
    assert not_ready.status_code == 503


async def test_metrics_endpoint_is_exposed():
    response = await _get("/metrics")
    assert response.status_code == 200
    assert "quote_fetch_total" in response.text
