# src/libs/portfolio-valuation-engine/src/portfolio_valuation_engine/constants.py
from decimal import Decimal

# --- Classification ---
DEFAULT_SECTOR = "Other"

# --- Numeric helpers ---
ZERO = Decimal("0")
HUNDRED = Decimal("100")

# --- Diversification scoring ---
DIVERSIFICATION_POINTS_PER_HOLDING = 10
DIVERSIFICATION_POINTS_PER_SECTOR = 10
DIVERSIFICATION_DIMENSION_CAP = 50
DIVERSIFICATION_MAX_SCORE = 100

# --- Risk scoring ---
RISK_VOLATILITY_MULTIPLIER = Decimal("2")
RISK_MIN_SCORE = 0
RISK_MAX_SCORE = 100
NEUTRAL_RISK_SCORE = 50
MODERATE_RISK_THRESHOLD = 40
HIGH_RISK_THRESHOLD = 70

RISK_LEVEL_LOW = "Low"
RISK_LEVEL_MODERATE = "Moderate"
RISK_LEVEL_HIGH = "High"
