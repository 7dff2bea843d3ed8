from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _text_or_none(v: Any) -> Optional[str]:
    if isinstance(v, str) and v.strip():
        return v.strip()
    return None


def _number_or_none(v: Any) -> Optional[float]:
    # bools are ints in Python; BrAPI never means a rate of 1 by `true`
    if v is None or isinstance(v, bool):
        return None
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


class DividendEvent(BaseModel):
    """One BrAPI `cashDividends` entry."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    payment_date: Optional[str] = Field(default=None, alias="paymentDate")
    approved_on: Optional[str] = Field(default=None, alias="approvedOn")
    rate: Optional[float] = None
    label: Optional[str] = None
    related_to: Optional[str] = Field(default=None, alias="relatedTo")
    asset_issued: Optional[str] = Field(default=None, alias="assetIssued")

    @field_validator("payment_date", "approved_on", "label", "related_to", "asset_issued", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Optional[str]:
        return _text_or_none(v)

    @field_validator("rate", mode="before")
    @classmethod
    def _coerce_rate(cls, v: Any) -> Optional[float]:
        return _number_or_none(v)

    @property
    def effective_date(self) -> Optional[str]:
        return self.payment_date or self.approved_on


class DividendsData(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    cash_dividends: Tuple[DividendEvent, ...] = Field(default=(), alias="cashDividends")

    @field_validator("cash_dividends", mode="before")
    @classmethod
    def _only_objects(cls, v: Any) -> List[Any]:
        if not isinstance(v, (list, tuple)):
            return []
        return [d for d in v if isinstance(d, dict) or isinstance(d, DividendEvent)]


class QuoteRecord(BaseModel):
    """
    First element of BrAPI's `results` array.

    Every field is optional upstream (the degraded request omits dividends,
    some tickers have no sector). Use the accessor properties downstream:
    they resolve missing values to 0 / "" / () instead of raising.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    symbol: str = ""
    short_name: Optional[str] = Field(default=None, alias="shortName")
    long_name: Optional[str] = Field(default=None, alias="longName")
    currency: Optional[str] = None
    regular_market_price: Optional[float] = Field(default=None, alias="regularMarketPrice")
    regular_market_previous_close: Optional[float] = Field(default=None, alias="regularMarketPreviousClose")
    regular_market_change: Optional[float] = Field(default=None, alias="regularMarketChange")
    regular_market_change_percent: Optional[float] = Field(default=None, alias="regularMarketChangePercent")
    regular_market_volume: Optional[float] = Field(default=None, alias="regularMarketVolume")
    market_cap: Optional[float] = Field(default=None, alias="marketCap")
    sector: Optional[str] = None
    logourl: Optional[str] = None
    dividends_data: Optional[DividendsData] = Field(default=None, alias="dividendsData")

    @field_validator("symbol", mode="before")
    @classmethod
    def _canonical_symbol(cls, v: Any) -> str:
        return (_text_or_none(v) or "").upper()

    @field_validator("short_name", "long_name", "currency", "sector", "logourl", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Optional[str]:
        return _text_or_none(v)

    @field_validator(
        "regular_market_price",
        "regular_market_previous_close",
        "regular_market_change",
        "regular_market_change_percent",
        "regular_market_volume",
        "market_cap",
        mode="before",
    )
    @classmethod
    def _coerce_number(cls, v: Any) -> Optional[float]:
        return _number_or_none(v)

    @field_validator("dividends_data", mode="before")
    @classmethod
    def _dividends_object(cls, v: Any) -> Any:
        return v if isinstance(v, (dict, DividendsData)) else None

    # ---------- zero-equivalent accessors ----------

    @property
    def price(self) -> float:
        return self.regular_market_price or 0.0

    @property
    def previous_close(self) -> float:
        return self.regular_market_previous_close or 0.0

    @property
    def change_percent(self) -> float:
        return self.regular_market_change_percent or 0.0

    @property
    def volume(self) -> int:
        return int(self.regular_market_volume or 0)

    @property
    def display_name(self) -> str:
        return self.short_name or self.long_name or self.symbol

    @property
    def cash_dividends(self) -> Tuple[DividendEvent, ...]:
        if self.dividends_data is None:
            return ()
        return self.dividends_data.cash_dividends


@dataclass(frozen=True)
class DividendHistory:
    total: float
    items: List[DividendEvent] = field(default_factory=list)


@dataclass(frozen=True)
class SimulationResult:
    ticker: str
    current_price: float
    annual_yield: float  # decimal fraction, 0.08 == 8%
    monthly_rate: float
    monthly_contribution: float
    years: float
    final_value: float
    estimated_shares: int
    monthly_income: float
    magic_number: int


@dataclass(frozen=True)
class PortfolioAsset:
    weight: float  # percent, 0-100
    result: SimulationResult


@dataclass(frozen=True)
class PortfolioResult:
    total_contribution: float
    years: float
    weighted_yield: float  # decimal fraction
    total_final_value: float
    total_monthly_income: float
    assets: List[PortfolioAsset] = field(default_factory=list)
