from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from renda.api.deps import get_fetcher, get_settings
from renda.api.errors import http_error
from renda.api.schemas import (
    PassiveIncomeRequest,
    PassiveIncomeResponse,
    PortfolioRequest,
    PortfolioResponse,
)
from renda.domain.errors import RendaError
from renda.infra.settings import Settings
from renda.services.market_data import QuoteFetcher
from renda.services.portfolio import PortfolioItem, simulate_portfolio
from renda.services.projection import simulate_asset

log = logging.getLogger(__name__)

router = APIRouter(tags=["simulations"])


@router.post("/passive-income", response_model=PassiveIncomeResponse)
async def passive_income(
    payload: PassiveIncomeRequest,
    fetcher: QuoteFetcher = Depends(get_fetcher),
) -> PassiveIncomeResponse:
    """Project monthly dividend income from steady contributions into one asset."""
    try:
        result = await simulate_asset(fetcher, payload.ticker, payload.monthly_contribution, payload.years)
    except RendaError as e:
        log.warning("passive income simulation failed for %s: %s", payload.ticker, e)
        raise http_error(e) from e
    return PassiveIncomeResponse.from_result(result)


@router.post("/portfolio/passive-income", response_model=PortfolioResponse)
async def portfolio_passive_income(
    payload: PortfolioRequest,
    fetcher: QuoteFetcher = Depends(get_fetcher),
    settings: Settings = Depends(get_settings),
) -> PortfolioResponse:
    """
    Same projection for a weighted portfolio.

    - Weights are percentages and must sum to 100 (+/- PORTFOLIO_WEIGHT_TOLERANCE).
    - Any unknown ticker fails the whole request with 404.
    """
    items = [PortfolioItem(ticker=a.ticker, weight=a.weight) for a in payload.assets]
    try:
        result = await simulate_portfolio(
            fetcher,
            items,
            payload.total_monthly_contribution,
            payload.years,
            tolerance=settings.portfolio_weight_tolerance,
        )
    except RendaError as e:
        log.warning("portfolio simulation failed: %s", e)
        raise http_error(e) from e
    return PortfolioResponse.from_result(result)
