# src/libs/portfolio-common/portfolio_common/market_data/exceptions.py

class QuoteUnavailableError(Exception):
    """Raised by a quote provider when no usable quote could be obtained for a symbol."""
    def __init__(self, symbol: str, message: str = "No quote available."):
        self.symbol = symbol
        self.message = f"{symbol}: {message}"
        super().__init__(self.message)
