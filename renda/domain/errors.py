from __future__ import annotations

from typing import Optional


class RendaError(Exception):
    """Base for every failure the core reports to the API layer."""


class InvalidInput(RendaError):
    pass


class TickerNotFound(RendaError):
    """Upstream reports the ticker as unknown or malformed (400/404)."""

    def __init__(self, ticker: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"ticker not found: {ticker}")
        self.ticker = ticker
        self.status_code = status_code


class AssetNotFound(TickerNotFound):
    """A simulation could not resolve its ticker."""


class UpstreamUnavailable(RendaError):
    """
    Rich and degraded requests both failed.

    status_code is the degraded request's HTTP status, or None when the
    failure never produced a response (timeout, connection error).
    """

    def __init__(self, ticker: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"upstream unavailable for {ticker} (status={status_code})")
        self.ticker = ticker
        self.status_code = status_code


class PortfolioInvalidWeights(RendaError):
    def __init__(self, total_weight: float, tolerance: float) -> None:
        super().__init__(f"portfolio weights sum to {total_weight}, expected 100 +/- {tolerance}")
        self.total_weight = total_weight
        self.tolerance = tolerance
