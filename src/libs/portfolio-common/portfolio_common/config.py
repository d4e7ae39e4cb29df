# src/libs/portfolio-common/portfolio_common/config.py
import os
from dotenv import load_dotenv

# Load environment variables from a .env file for local development.
load_dotenv()


# Service Identity
SERVICE_NAME = os.getenv("SERVICE_NAME", "dashboard-service")
ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Market Data Provider
QUOTE_API_BASE_URL = os.getenv(
    "QUOTE_API_BASE_URL", "https://yahoo-finance15.p.rapidapi.com/api/v1/markets/stock"
)
QUOTE_API_KEY = os.getenv("QUOTE_API_KEY", "")
QUOTE_API_HOST = os.getenv("QUOTE_API_HOST", "yahoo-finance15.p.rapidapi.com")
QUOTE_HISTORY_INTERVAL = os.getenv("QUOTE_HISTORY_INTERVAL", "5m")

# Market Data Caching & Resilience
QUOTE_CACHE_TTL_SECONDS = float(os.getenv("QUOTE_CACHE_TTL_SECONDS", "30"))
QUOTE_REQUEST_TIMEOUT_SECONDS = float(os.getenv("QUOTE_REQUEST_TIMEOUT_SECONDS", "30"))
# Total attempts per quote request, the first one included.
QUOTE_MAX_ATTEMPTS = int(os.getenv("QUOTE_MAX_ATTEMPTS", "3"))
QUOTE_RETRY_DELAY_SECONDS = float(os.getenv("QUOTE_RETRY_DELAY_SECONDS", "1"))

# Dashboard Service
DASHBOARD_SERVICE_PORT = int(os.getenv("DASHBOARD_SERVICE_PORT", "8000"))
