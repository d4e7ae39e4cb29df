# src/libs/portfolio-valuation-engine/src/portfolio_valuation_engine/exceptions.py
from decimal import Decimal
from typing import Optional


class PortfolioValuationError(Exception):
    """Base exception for all errors raised by the portfolio valuation engine."""
    def __init__(self, message="An unspecified error occurred in the portfolio valuation engine."):
        self.message = message
        super().__init__(self.message)


class InsufficientSharesError(PortfolioValuationError):
    """Raised when a sell would drive a holding's share count below zero."""
    def __init__(
        self,
        symbol: str,
        requested: Decimal,
        available: Decimal,
        message: Optional[str] = None,
    ):
        self.symbol = symbol
        self.requested = requested
        self.available = available
        super().__init__(
            message
            or f"Sell quantity ({requested}) exceeds available holdings ({available}) for {symbol}."
        )


class UnknownHoldingError(PortfolioValuationError):
    """Raised when a sell references a symbol that is not currently held."""
    def __init__(self, symbol: str, message: Optional[str] = None):
        self.symbol = symbol
        super().__init__(message or f"No holding exists for symbol {symbol}.")
