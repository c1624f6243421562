"""
Exchange rate provider.

Reads the USD and CNY representative rates from the Bank of Israel public
API. When the service is unreachable or answers with garbage, the static
default pair is returned and the quote is marked as not live, so order
creation never blocks on the network.
"""

import logging
import time
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

import httpx

from procurement.core.config import settings
from procurement.services.currency import to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExchangeRateQuote:
    usd: Decimal
    cny: Decimal
    is_live: bool


def default_quote() -> ExchangeRateQuote:
    return ExchangeRateQuote(
        usd=to_decimal(settings.DEFAULT_USD_RATE),
        cny=to_decimal(settings.DEFAULT_CNY_RATE),
        is_live=False,
    )


def parse_rates(data: dict) -> ExchangeRateQuote:
    """
    Extract USD/CNY from {"exchangeRates": [{"key": "USD", "currentExchangeRate": 3.7}, ...]}.
    A missing currency keeps its default rate.
    """
    fallback = default_quote()
    usd, cny = fallback.usd, fallback.cny
    rates = data.get("exchangeRates") or []
    if not isinstance(rates, list):
        raise ValueError("exchangeRates is not a list")

    for item in rates:
        key = item.get("key")
        if key not in ("USD", "CNY"):
            continue
        raw = item.get("currentExchangeRate")
        if raw is None:
            raise ValueError(f"no rate for {key}")
        try:
            value = to_decimal(raw)
        except (TypeError, InvalidOperation) as e:
            raise ValueError(f"bad rate for {key}: {e}")
        if not value.is_finite() or value <= 0:
            raise ValueError(f"rate for {key} must be positive, got {raw}")
        if key == "USD":
            usd = value
        else:
            cny = value

    return ExchangeRateQuote(usd=usd, cny=cny, is_live=True)


class RateProvider:
    """Cached Bank of Israel rate lookup"""

    def __init__(self, url: str = None, timeout: float = None, cache_seconds: int = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url or settings.RATES_URL
        self.timeout = timeout if timeout is not None else settings.RATES_TIMEOUT_SECONDS
        self.cache_seconds = cache_seconds if cache_seconds is not None else settings.RATES_CACHE_SECONDS
        self._transport = transport
        self._cached: Optional[ExchangeRateQuote] = None
        self._cached_at = 0.0

    def _cache_valid(self) -> bool:
        return (
            self._cached is not None
            and self.cache_seconds > 0
            and time.monotonic() - self._cached_at < self.cache_seconds
        )

    async def get_rates(self) -> ExchangeRateQuote:
        if self._cache_valid():
            return self._cached

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.url)
                response.raise_for_status()
                quote = parse_rates(response.json())
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.warning(f"Exchange rates unavailable, using defaults: {e}")
            return default_quote()

        logger.info(f"Live exchange rates: USD={quote.usd} CNY={quote.cny}")
        self._cached = quote
        self._cached_at = time.monotonic()
        return quote


rate_provider = RateProvider()


def get_rate_provider() -> RateProvider:
    """FastAPI dependency"""
    return rate_provider
