from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from renda.domain.errors import InvalidInput, TickerNotFound, UpstreamUnavailable
from renda.domain.models import QuoteRecord
from renda.services.brapi_client import BrapiClient
from renda.services.quote_cache import QuoteCache

log = logging.getLogger(__name__)

# One year of daily history plus fundamental and dividend modules
RICH_PARAMS: Dict[str, str] = {"range": "1y", "interval": "1d", "fundamental": "true", "dividends": "true"}
# One-day snapshot, no optional modules
DEGRADED_PARAMS: Dict[str, str] = {"range": "1d", "interval": "1d"}

# BrAPI answers these for unknown or malformed tickers
NOT_FOUND_STATUSES = (400, 404)


def _status_of(exc: Exception) -> Optional[int]:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code
    return None


class QuoteFetcher:
    """
    Resolve one ticker to a QuoteRecord.

    Order:
      1) cache
      2) rich request (history + fundamentals + dividends)
      3) degraded request (1d snapshot), unless (2) said the ticker is unknown
    """

    def __init__(self, client: BrapiClient, cache: QuoteCache) -> None:
        self._client = client
        self._cache = cache

    def _remember(self, ticker: str, record: QuoteRecord) -> None:
        # best effort; a broken cache must never fail the response
        try:
            self._cache.put(ticker, record)
        except Exception as e:
            log.warning("cache write failed for %s: %s", ticker, e)

    @staticmethod
    def _first(results: List[Any]) -> Optional[QuoteRecord]:
        if not results:
            return None
        return QuoteRecord.model_validate(results[0])

    async def fetch(self, ticker: str) -> Optional[QuoteRecord]:
        symbol = (ticker or "").strip().upper()
        if not symbol or not symbol.strip("."):
            raise InvalidInput("ticker must be a non-empty string")

        cached = self._cache.get(symbol)
        if cached is not None:
            return cached

        # 1) rich request
        try:
            log.info("requesting full data for %s", symbol)
            record = self._first(await self._client.get_quote(symbol, **RICH_PARAMS))
            if record is not None:
                self._remember(symbol, record)
            return record
        except Exception as e:
            status = _status_of(e)
            if status in NOT_FOUND_STATUSES:
                log.error("ticker %s not found or invalid (status=%s)", symbol, status)
                raise TickerNotFound(symbol, status_code=status) from e
            log.warning("full data fetch failed for %s, attempting fallback: %s", symbol, e)

        # 2) degraded request
        try:
            record = self._first(await self._client.get_quote(symbol, **DEGRADED_PARAMS))
        except (httpx.HTTPError, ValueError) as e:
            status = _status_of(e)
            log.error("fallback also failed for %s (status=%s): %s", symbol, status, e)
            raise UpstreamUnavailable(symbol, status_code=status) from e

        if record is not None:
            log.info("fallback retrieved basic data for %s", symbol)
            self._remember(symbol, record)
        return record
