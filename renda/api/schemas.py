from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from renda.domain.models import DividendHistory, PortfolioResult, QuoteRecord, SimulationResult


def _r2(x: float) -> float:
    return round(float(x), 2)


# ---------- requests ----------


class PassiveIncomeRequest(BaseModel):
    ticker: str = Field(min_length=1)
    monthly_contribution: float = Field(gt=0)
    years: float = Field(gt=0, le=100)


class PortfolioAssetIn(BaseModel):
    ticker: str = Field(min_length=1)
    weight: float = Field(ge=0, le=100, description="Percent of the monthly contribution, 0-100.")


class PortfolioRequest(BaseModel):
    assets: List[PortfolioAssetIn] = Field(min_length=1)
    total_monthly_contribution: float = Field(gt=0)
    years: float = Field(gt=0, le=100)


# ---------- responses ----------


class QuoteResponse(BaseModel):
    ticker: str
    name: str
    price: float
    day_change_pct: float
    dividend_yield_pct: float
    previous_close: float
    volume: int
    sector: str
    logo: str

    @classmethod
    def from_record(cls, record: QuoteRecord, dividend_yield_pct: float) -> "QuoteResponse":
        return cls(
            ticker=record.symbol,
            name=record.display_name,
            price=record.price,
            day_change_pct=record.change_percent,
            dividend_yield_pct=_r2(dividend_yield_pct),
            previous_close=record.previous_close,
            volume=record.volume,
            sector=record.sector or "N/A",
            logo=record.logourl or "",
        )


class DividendItem(BaseModel):
    record_date: str
    rate: float
    type: str


class DividendResponse(BaseModel):
    ticker: str
    months: int
    total: float
    dividends: List[DividendItem]

    @classmethod
    def from_history(cls, ticker: str, months: int, history: DividendHistory) -> "DividendResponse":
        return cls(
            ticker=ticker,
            months=months,
            total=_r2(history.total),
            dividends=[
                DividendItem(
                    record_date=d.approved_on or d.payment_date or "N/A",
                    rate=d.rate or 0.0,
                    type=d.label or "Dividend",
                )
                for d in history.items
            ],
        )


class PassiveIncomeResponse(BaseModel):
    ticker: str
    monthly_contribution: float
    years: float
    current_price: float
    annual_yield_pct: float
    estimated_shares: int
    estimated_final_value: float
    estimated_monthly_income: float
    magic_number: int

    @classmethod
    def from_result(cls, r: SimulationResult) -> "PassiveIncomeResponse":
        return cls(
            ticker=r.ticker,
            monthly_contribution=_r2(r.monthly_contribution),
            years=r.years,
            current_price=_r2(r.current_price),
            annual_yield_pct=_r2(r.annual_yield * 100.0),
            estimated_shares=r.estimated_shares,
            estimated_final_value=_r2(r.final_value),
            estimated_monthly_income=_r2(r.monthly_income),
            magic_number=r.magic_number,
        )


class PortfolioAssetOut(PassiveIncomeResponse):
    weight: float


class PortfolioResponse(BaseModel):
    total_monthly_contribution: float
    years: float
    weighted_yield_pct: float
    total_monthly_income: float
    total_final_value: float
    assets: List[PortfolioAssetOut]

    @classmethod
    def from_result(cls, p: PortfolioResult) -> "PortfolioResponse":
        return cls(
            total_monthly_contribution=_r2(p.total_contribution),
            years=p.years,
            weighted_yield_pct=_r2(p.weighted_yield * 100.0),
            total_monthly_income=_r2(p.total_monthly_income),
            total_final_value=_r2(p.total_final_value),
            assets=[
                PortfolioAssetOut(weight=a.weight, **PassiveIncomeResponse.from_result(a.result).model_dump())
                for a in p.assets
            ],
        )


class CacheStatsResponse(BaseModel):
    hits: int
    misses: int
    entries: int
    max_entries: int
    ttl_ms: int
