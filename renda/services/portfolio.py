from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import List, Sequence

from renda.domain.errors import InvalidInput, PortfolioInvalidWeights
from renda.domain.models import PortfolioAsset, PortfolioResult
from renda.services.market_data import QuoteFetcher
from renda.services.projection import simulate_asset


@dataclass(frozen=True)
class PortfolioItem:
    ticker: str
    weight: float  # percent, 0-100


def validate_weights(items: Sequence[PortfolioItem], tolerance: float = 1.0) -> float:
    total = sum(item.weight or 0.0 for item in items)
    if total < 100.0 - tolerance or total > 100.0 + tolerance:
        raise PortfolioInvalidWeights(total, tolerance)
    return total


async def simulate_portfolio(
    fetcher: QuoteFetcher,
    items: Sequence[PortfolioItem],
    total_contribution: float,
    years: float,
    tolerance: float = 1.0,
) -> PortfolioResult:
    """
    Split the monthly contribution by weight and simulate every asset concurrently.

    All-or-nothing: the first constituent failure (e.g. AssetNotFound) is
    raised and no partial result is returned.
    """
    if not items:
        raise InvalidInput("portfolio must contain at least one asset")
    if total_contribution <= 0 or years <= 0:
        raise InvalidInput("total contribution and years must be greater than zero")
    if any(item.weight < 0 for item in items):
        raise InvalidInput("asset weights must not be negative")

    validate_weights(items, tolerance)

    results = await asyncio.gather(
        *[
            simulate_asset(fetcher, item.ticker, total_contribution * (item.weight / 100.0), years)
            for item in items
        ]
    )

    assets: List[PortfolioAsset] = [
        PortfolioAsset(weight=item.weight, result=res) for item, res in zip(items, results)
    ]
    return PortfolioResult(
        total_contribution=total_contribution,
        years=years,
        weighted_yield=sum(a.result.annual_yield * (a.weight / 100.0) for a in assets),
        total_final_value=sum(a.result.final_value for a in assets),
        total_monthly_income=sum(a.result.monthly_income for a in assets),
        assets=assets,
    )
