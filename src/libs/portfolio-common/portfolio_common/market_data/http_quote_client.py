# src/libs/portfolio-common/portfolio_common/market_data/http_quote_client.py
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import httpx
from pydantic import ValidationError
from tenacity import before_log, retry, retry_if_exception, stop_after_attempt, wait_exponential

from portfolio_valuation_engine.models import Quote

from .. import config
from ..monitoring import QUOTE_FETCH_LATENCY_SECONDS
from .exceptions import QuoteUnavailableError
from .fallback_quotes import get_fallback_quote

logger = logging.getLogger(__name__)


def is_transient_error(exc: BaseException) -> bool:
    """Transport failures and 5xx responses are worth retrying; everything else is not."""
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return False


def _to_decimal(value: Any) -> Optional[Decimal]:
    """Parses a finite decimal; NaN, Infinity and garbage give None."""
    if value is None:
        return None
    try:
        parsed = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return parsed if parsed.is_finite() else None


def parse_history_payload(symbol: str, payload: Any) -> Quote:
    """
    Builds a validated Quote from the provider's intraday history payload.

    The latest bar's close is the price; its open-to-close move is the
    change percent. Sector and name come from the known-ticker table when
    available.
    """
    bars = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(bars, list) or not bars:
        raise QuoteUnavailableError(symbol, "Provider returned no price bars.")

    latest = bars[-1]
    if not isinstance(latest, dict):
        raise QuoteUnavailableError(symbol, "Provider returned a malformed price bar.")

    close = _to_decimal(latest.get("Close"))
    open_ = _to_decimal(latest.get("Open"))
    if close is None:
        raise QuoteUnavailableError(symbol, "Latest price bar has no usable close.")
    if open_ is None and latest.get("Open") is not None:
        raise QuoteUnavailableError(symbol, "Latest price bar has an unusable open.")

    change_percent = Decimal(0)
    if open_ is not None and open_ > 0:
        change_percent = (close - open_) / open_ * Decimal(100)

    known = get_fallback_quote(symbol)
    try:
        return Quote(
            symbol=symbol,
            price=close,
            change_percent=change_percent,
            sector=known.sector if known else None,
            name=known.name if known else None,
        )
    except ValidationError as exc:
        raise QuoteUnavailableError(symbol, f"Invalid quote data: {exc.errors()[0]['msg']}") from exc


class HttpQuoteClient:
    """
    Fetches the latest quote for a symbol from the RapidAPI Yahoo Finance
    history endpoint, retrying transient failures with exponential backoff.
    """
    def __init__(
        self,
        base_url: str = config.QUOTE_API_BASE_URL,
        api_key: str = config.QUOTE_API_KEY,
        api_host: str = config.QUOTE_API_HOST,
        interval: str = config.QUOTE_HISTORY_INTERVAL,
        timeout_seconds: float = config.QUOTE_REQUEST_TIMEOUT_SECONDS,
        max_attempts: int = config.QUOTE_MAX_ATTEMPTS,
        retry_delay_seconds: float = config.QUOTE_RETRY_DELAY_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._interval = interval
        self._max_attempts = max(1, max_attempts)
        self._retry_delay_seconds = retry_delay_seconds
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"X-RapidAPI-Key": api_key, "X-RapidAPI-Host": api_host},
            timeout=timeout_seconds,
            transport=transport,
        )

    async def get_quote(self, symbol: str) -> Quote:
        """
        Raises:
            QuoteUnavailableError: when the provider cannot supply a usable quote
                                   after all retries.
        """
        retry_config = retry(
            wait=wait_exponential(multiplier=self._retry_delay_seconds),
            stop=stop_after_attempt(self._max_attempts),
            before=before_log(logger, logging.DEBUG),
            retry=retry_if_exception(is_transient_error),
            reraise=True,
        )
        fetch_with_retry = retry_config(self._fetch_history)
        try:
            with QUOTE_FETCH_LATENCY_SECONDS.time():
                payload = await fetch_with_retry(symbol)
        except httpx.HTTPError as exc:
            logger.warning(
                "Quote request failed.",
                extra={"symbol": symbol, "error": type(exc).__name__},
            )
            raise QuoteUnavailableError(symbol, f"Request failed: {exc}") from exc

        return parse_history_payload(symbol, payload)

    async def _fetch_history(self, symbol: str) -> Any:
        response = await self._client.get(
            "/history",
            params={"symbol": symbol, "interval": self._interval, "diffandsplits": "false"},
        )
        response.raise_for_status()
        try:
            return response.json()
        except ValueError as exc:
            raise QuoteUnavailableError(symbol, "Provider returned a non-JSON body.") from exc

    async def aclose(self) -> None:
        await self._client.aclose()
