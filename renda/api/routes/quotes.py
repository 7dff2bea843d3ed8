from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from renda.api.deps import get_fetcher
from renda.api.errors import http_error, not_found
from renda.api.schemas import DividendResponse, QuoteResponse
from renda.domain.errors import RendaError
from renda.domain.models import QuoteRecord
from renda.services.dividends import current_yield_pct, history_within
from renda.services.market_data import QuoteFetcher

log = logging.getLogger(__name__)

router = APIRouter(tags=["quotes"])


async def _load(fetcher: QuoteFetcher, ticker: str) -> QuoteRecord:
    try:
        record = await fetcher.fetch(ticker)
    except RendaError as e:
        log.warning("quote lookup failed for %s: %s", ticker, e)
        raise http_error(e) from e
    if record is None:
        raise not_found(ticker)
    return record


@router.get("/quote", response_model=QuoteResponse)
async def get_quote(
    ticker: str = Query(..., min_length=1, description="Exchange symbol, e.g. PETR4."),
    fetcher: QuoteFetcher = Depends(get_fetcher),
) -> QuoteResponse:
    record = await _load(fetcher, ticker)
    # BrAPI does not always ship a yield; derive it from the last 12 months
    return QuoteResponse.from_record(record, current_yield_pct(record))


@router.get("/dividends", response_model=DividendResponse)
async def get_dividends(
    ticker: str = Query(..., min_length=1),
    months: int = Query(
        default=12,
        ge=1,
        le=600,
        description="Lookback window in calendar months.",
    ),
    fetcher: QuoteFetcher = Depends(get_fetcher),
) -> DividendResponse:
    record = await _load(fetcher, ticker)
    history = history_within(record, months)
    return DividendResponse.from_history(record.symbol or ticker.upper(), months, history)
