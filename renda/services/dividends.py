from __future__ import annotations

from datetime import date
from typing import Any, List, Optional

import pandas as pd

from renda.domain.models import DividendEvent, DividendHistory, QuoteRecord


# ---------- Internal helpers ----------


def _parse_date(d: Any) -> Optional[date]:
    """Best-effort parse of a BrAPI date string; None when unusable."""
    if not d:
        return None
    try:
        ts = pd.to_datetime(d, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    # calendar day in the timestamp's own offset, not converted to UTC
    return ts.date()


def cutoff_date(months: int, today: Optional[date] = None) -> date:
    """
    `today` minus `months` calendar months.

    Day-of-month is clamped to the target month's end (Mar 31 - 1 month is
    Feb 28/29), matching pandas' DateOffset.
    """
    base = pd.Timestamp(today or date.today())
    return (base - pd.DateOffset(months=int(months))).date()


# ---------- Public API ----------


def history_within(record: QuoteRecord, months: int, today: Optional[date] = None) -> DividendHistory:
    """
    Cash dividends paid within the last `months` months.

    An event counts when its payment date (or approval date, if there is no
    payment date) parses and falls on or after the cutoff. Dateless and
    unparseable events are skipped. Source order is preserved.
    """
    cutoff = cutoff_date(months, today)

    items: List[DividendEvent] = []
    total = 0.0
    for div in record.cash_dividends:
        d = _parse_date(div.effective_date)
        if d is None or d < cutoff:
            continue
        items.append(div)
        total += div.rate or 0.0

    return DividendHistory(total=total, items=items)


def trailing_12m_dividend_per_share(record: QuoteRecord, today: Optional[date] = None) -> float:
    return history_within(record, 12, today).total


def current_yield_pct(record: QuoteRecord, today: Optional[date] = None) -> float:
    """Trailing 12-month dividends over current price, in percent (0 when price is unknown)."""
    price = record.price
    if price <= 0:
        return 0.0
    return trailing_12m_dividend_per_share(record, today) / price * 100.0
