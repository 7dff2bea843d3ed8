from __future__ import annotations

import logging

from fastapi import HTTPException

from renda.domain.errors import (
    InvalidInput,
    PortfolioInvalidWeights,
    RendaError,
    TickerNotFound,
    UpstreamUnavailable,
)

log = logging.getLogger(__name__)


def http_error(exc: RendaError) -> HTTPException:
    """Translate a core failure into the HTTP response the client sees."""
    if isinstance(exc, InvalidInput):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, TickerNotFound):
        return HTTPException(status_code=404, detail=f"Ticker {exc.ticker} not found or invalid.")
    if isinstance(exc, PortfolioInvalidWeights):
        return HTTPException(
            status_code=400,
            detail=f"Portfolio weights must sum to 100%. Current total: {exc.total_weight}%",
        )
    if isinstance(exc, UpstreamUnavailable):
        status = exc.status_code
        if status in (400, 404):
            return HTTPException(status_code=404, detail=f"Ticker {exc.ticker} not found or invalid.")
        if status is None or status == 502 or status >= 503:
            return HTTPException(status_code=502, detail="BrAPI service unavailable.")
    log.error("unhandled core error: %r", exc)
    return HTTPException(status_code=500, detail="Internal server error.")


def not_found(ticker: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Ticker {ticker.strip().upper()} not found.")
