from __future__ import annotations

import logging
import math

from renda.domain.errors import AssetNotFound, InvalidInput, TickerNotFound, UpstreamUnavailable
from renda.domain.models import SimulationResult
from renda.services.dividends import trailing_12m_dividend_per_share
from renda.services.market_data import QuoteFetcher

log = logging.getLogger(__name__)


def monthly_rate_from_annual(annual_yield: float) -> float:
    """Geometric monthly equivalent: (1 + annual)^(1/12) - 1."""
    return math.pow(1.0 + annual_yield, 1.0 / 12.0) - 1.0


def simulate(
    ticker: str,
    current_price: float,
    trailing_dividends: float,
    monthly_contribution: float,
    years: float,
) -> SimulationResult:
    """
    Project monthly contributions compounding at the asset's dividend yield.

    FV = P * ((1 + r)^n - 1) / r, with r the monthly rate and n the number of
    months; linear P * n when r is 0. Results are unrounded.

    Magic number: income on S shares is S * price * r per month, which buys a
    new share once S * r >= 1, i.e. S = ceil(1 / r).
    """
    annual_yield = trailing_dividends / current_price if current_price > 0 else 0.0
    monthly_rate = monthly_rate_from_annual(annual_yield)
    total_months = years * 12

    if monthly_rate > 0:
        final_value = monthly_contribution * ((math.pow(1.0 + monthly_rate, total_months) - 1.0) / monthly_rate)
    else:
        final_value = monthly_contribution * total_months

    estimated_shares = math.floor(final_value / current_price) if current_price > 0 else 0
    monthly_income = final_value * monthly_rate
    magic_number = math.ceil(1.0 / monthly_rate) if monthly_rate > 0 else 0

    return SimulationResult(
        ticker=ticker,
        current_price=current_price,
        annual_yield=annual_yield,
        monthly_rate=monthly_rate,
        monthly_contribution=monthly_contribution,
        years=years,
        final_value=final_value,
        estimated_shares=int(estimated_shares),
        monthly_income=monthly_income,
        magic_number=int(magic_number),
    )


async def simulate_asset(
    fetcher: QuoteFetcher,
    ticker: str,
    monthly_contribution: float,
    years: float,
) -> SimulationResult:
    """Fetch `ticker` and run `simulate` on its price and trailing 12-month dividends."""
    if not ticker or not ticker.strip():
        raise InvalidInput("ticker must be a non-empty string")
    # a zero contribution is valid: zero-weight portfolio constituents
    if monthly_contribution < 0 or years <= 0:
        raise InvalidInput("monthly contribution must not be negative and years must be greater than zero")

    symbol = ticker.strip().upper()
    try:
        record = await fetcher.fetch(symbol)
    except TickerNotFound as e:
        raise AssetNotFound(symbol, status_code=e.status_code) from e
    except UpstreamUnavailable as e:
        e.ticker = symbol
        raise

    if record is None:
        raise AssetNotFound(symbol)

    trailing = trailing_12m_dividend_per_share(record)
    log.debug("simulating %s: price=%s trailing_12m=%s", symbol, record.price, trailing)
    try:
        return simulate(record.symbol or symbol, record.price, trailing, monthly_contribution, years)
    except OverflowError as e:
        raise InvalidInput(f"horizon of {years} years is too long to project") from e
