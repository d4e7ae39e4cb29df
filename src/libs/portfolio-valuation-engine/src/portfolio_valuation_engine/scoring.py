# src/libs/portfolio-valuation-engine/src/portfolio_valuation_engine/scoring.py
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping, Sequence

from .allocation import allocate_positions_by_sector
from .aggregation import total_value, value_positions
from .constants import (
    DIVERSIFICATION_DIMENSION_CAP,
    DIVERSIFICATION_MAX_SCORE,
    DIVERSIFICATION_POINTS_PER_HOLDING,
    DIVERSIFICATION_POINTS_PER_SECTOR,
    HIGH_RISK_THRESHOLD,
    MODERATE_RISK_THRESHOLD,
    NEUTRAL_RISK_SCORE,
    RISK_LEVEL_HIGH,
    RISK_LEVEL_LOW,
    RISK_LEVEL_MODERATE,
    RISK_MAX_SCORE,
    RISK_MIN_SCORE,
    RISK_VOLATILITY_MULTIPLIER,
    ZERO,
)
from .models import Holding, Position, Quote, RiskAssessment, RiskLevel
from .valuation import lookup_quote

logger = logging.getLogger(__name__)


def diversification_score(holding_count: int, sector_count: int) -> int:
    """
    Heuristic 0-100 diversification score: 10 points per holding and 10 per
    sector, each dimension capped at 50.
    """
    holdings_score = min(holding_count * DIVERSIFICATION_POINTS_PER_HOLDING, DIVERSIFICATION_DIMENSION_CAP)
    sector_score = min(sector_count * DIVERSIFICATION_POINTS_PER_SECTOR, DIVERSIFICATION_DIMENSION_CAP)
    score = round(holdings_score + sector_score)
    return max(0, min(score, DIVERSIFICATION_MAX_SCORE))


def score_diversification(holdings: Sequence[Holding], quotes: Mapping[str, Quote]) -> int:
    """Diversification score for a holding set, counting sectors from its allocation."""
    if not holdings:
        return 0
    sectors = allocate_positions_by_sector(value_positions(holdings, quotes))
    return diversification_score(len(holdings), len(sectors))


def classify_risk(score: int) -> RiskLevel:
    if score < MODERATE_RISK_THRESHOLD:
        return RISK_LEVEL_LOW
    if score < HIGH_RISK_THRESHOLD:
        return RISK_LEVEL_MODERATE
    return RISK_LEVEL_HIGH


def neutral_risk() -> RiskAssessment:
    return RiskAssessment(score=NEUTRAL_RISK_SCORE, level=RISK_LEVEL_MODERATE)


def weighted_volatility(positions: Sequence[Position], quotes: Mapping[str, Quote]) -> Decimal:
    """
    Value-weighted average of absolute percent price change. Positions
    without a quote contribute zero volatility. Callers must ensure the
    positions' total value is positive.
    """
    portfolio_value = total_value(positions)
    weighted = ZERO
    for position in positions:
        quote = lookup_quote(quotes, position.symbol)
        volatility = abs(quote.change_percent) if quote is not None else ZERO
        weighted += (position.value / portfolio_value) * volatility
    return weighted


def score_positions_risk(positions: Sequence[Position], quotes: Mapping[str, Quote]) -> RiskAssessment:
    if not positions or total_value(positions) <= ZERO:
        logger.debug("No valued positions; returning neutral risk score.")
        return neutral_risk()

    raw_score = weighted_volatility(positions, quotes) * RISK_VOLATILITY_MULTIPLIER
    clamped = max(Decimal(RISK_MIN_SCORE), min(raw_score, Decimal(RISK_MAX_SCORE)))
    score = int(clamped.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return RiskAssessment(score=score, level=classify_risk(score))


def score_risk(holdings: Sequence[Holding], quotes: Mapping[str, Quote]) -> RiskAssessment:
    """
    Heuristic 0-100 risk score derived from the value-weighted average
    absolute percent change across holdings, doubled and clamped.

    An empty portfolio, or one whose total value is zero, gets the neutral
    default of 50 / Moderate.
    """
    return score_positions_risk(value_positions(holdings, quotes), quotes)
