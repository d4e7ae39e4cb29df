# src/libs/portfolio-common/portfolio_common/monitoring.py
from prometheus_client import Counter, Histogram

# --------------------------------------------------------------------------------------
# Market data metrics
# --------------------------------------------------------------------------------------
QUOTE_FETCH_TOTAL = Counter(
    "quote_fetch_total",
    "Quote lookups by outcome (live, cache, last_known, fallback, unavailable)",
    labelnames=("outcome",),
)

QUOTE_FETCH_LATENCY_SECONDS = Histogram(
    "quote_fetch_latency_seconds",
    "Latency of live quote requests to the market data provider",
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30),
)

# --------------------------------------------------------------------------------------
# Portfolio metrics
# --------------------------------------------------------------------------------------
SNAPSHOT_CALCULATION_DURATION_SECONDS = Histogram(
    "snapshot_calculation_duration_seconds",
    "Time taken to fetch quotes and derive a portfolio snapshot",
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30),
)

LEDGER_TRANSACTIONS_TOTAL = Counter(
    "ledger_transactions_total",
    "Transactions submitted to the ledger by direction and result",
    labelnames=("direction", "result"),
)

# --------------------------------------------------------------------------------------
# HTTP metrics
# --------------------------------------------------------------------------------------
HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "HTTP requests total",
    labelnames=("service", "method", "path", "status"),
)

HTTP_REQUEST_LATENCY_SECONDS = Histogram(
    "http_request_latency_seconds",
    "HTTP request latency in seconds",
    labelnames=("service", "method", "path"),
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
