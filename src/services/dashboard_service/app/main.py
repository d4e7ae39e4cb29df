# src/services/dashboard_service/app/main.py
import logging
import time
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from portfolio_common import config
from portfolio_common.health import create_health_router
from portfolio_common.logging_utils import (
    NOT_SET,
    correlation_context,
    correlation_id_var,
    generate_correlation_id,
    setup_logging,
)
from portfolio_common.market_data import HttpQuoteClient, MarketDataService, QuoteCache
from portfolio_common.monitoring import HTTP_REQUEST_LATENCY_SECONDS, HTTP_REQUESTS_TOTAL

from .routers import portfolio, transactions
from .services.portfolio_controller import PortfolioController

SERVICE_PREFIX = "DSH"
SERVICE_NAME = "dashboard_service"
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Wires the market-data collaborator and the portfolio controller on startup
    and releases the HTTP client on shutdown.
    """
    logger.info("Dashboard Service starting up...")
    quote_client = HttpQuoteClient()
    market_data = MarketDataService(
        provider=quote_client,
        cache=QuoteCache(ttl_seconds=config.QUOTE_CACHE_TTL_SECONDS),
    )
    app.state.market_data_service = market_data
    app.state.portfolio_controller = PortfolioController(market_data)

    yield

    logger.info("Dashboard Service shutting down...")
    await quote_client.aclose()
    logger.info("Dashboard Service has shut down gracefully.")


app = FastAPI(
    title="Portfolio Dashboard API",
    description="Holdings, transaction ledger and portfolio valuation, allocation and risk metrics.",
    version="0.1.0",
    lifespan=lifespan,
)

# --- Prometheus Metrics ---
Instrumentator().instrument(app).expose(app)


# Correlation ID Middleware
@app.middleware("http")
async def add_correlation_id_middleware(request: Request, call_next):
    correlation_id = request.headers.get("X-Correlation-Id") or generate_correlation_id(SERVICE_PREFIX)
    request_id = request.headers.get("X-Request-Id") or generate_correlation_id("REQ")
    trace_id = request.headers.get("X-Trace-Id") or uuid4().hex

    with correlation_context(correlation_id, request_id, trace_id):
        response = await call_next(request)

    response.headers["X-Correlation-Id"] = correlation_id
    response.headers["X-Request-Id"] = request_id
    response.headers["X-Trace-Id"] = trace_id
    return response


@app.middleware("http")
async def emit_http_observability(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - start

    labels = {
        "service": SERVICE_NAME,
        "method": request.method,
        "path": request.url.path,
    }
    HTTP_REQUEST_LATENCY_SECONDS.labels(**labels).observe(elapsed)
    HTTP_REQUESTS_TOTAL.labels(status=str(response.status_code), **labels).inc()

    logger.info(
        "http_request_completed",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(elapsed * 1000, 2),
        },
    )
    return response


# Global Exception Handler
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Catches any unhandled exceptions and returns a standardized 500 error response.
    """
    correlation_id = correlation_id_var.get()
    if correlation_id == NOT_SET:
        correlation_id = generate_correlation_id(SERVICE_PREFIX)
    logger.critical(
        f"Unhandled exception for request {request.method} {request.url}",
        exc_info=exc,
        extra={"correlation_id": correlation_id},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred. Please contact support.",
            "correlation_id": correlation_id,
        },
    )


async def check_market_data() -> bool:
    return await app.state.market_data_service.check_provider()


health_router = create_health_router({"market_data": check_market_data})
app.include_router(health_router)

app.include_router(portfolio.router)
app.include_router(transactions.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.DASHBOARD_SERVICE_PORT, log_config=None)
