from datetime import date

import pytest

from renda.domain.models import QuoteRecord
from renda.services.dividends import cutoff_date, current_yield_pct, history_within


def _record(dividends, price=20.0):
    return QuoteRecord.model_validate(
        {
            "symbol": "TAEE11",
            "regularMarketPrice": price,
            "dividendsData": {"cashDividends": dividends},
        }
    )


TODAY = date(2026, 3, 15)


def test_cutoff_boundaries():
    rec = _record(
        [
            {"paymentDate": "2025-03-14T00:00:00.000Z", "rate": 1.0, "label": "DIVIDENDO"},
            {"paymentDate": "2025-03-15T00:00:00.000Z", "rate": 0.5, "label": "JCP"},
            {"paymentDate": "2025-03-16", "rate": 0.25, "label": "DIVIDENDO"},
        ]
    )

    hist = history_within(rec, 12, today=TODAY)

    assert [d.rate for d in hist.items] == [0.5, 0.25]
    assert hist.total == pytest.approx(0.75)


def test_bad_or_missing_dates_are_skipped():
    rec = _record(
        [
            {"paymentDate": "not-a-date", "rate": 9.0},
            {"rate": 9.0, "label": "DIVIDENDO"},
            {"paymentDate": None, "approvedOn": "2026-01-10", "rate": 0.4},
            {"paymentDate": "2026-02-01"},
            "garbage",
        ]
    )

    hist = history_within(rec, 12, today=TODAY)

    assert len(hist.items) == 2
    assert hist.items[0].approved_on == "2026-01-10"
    assert hist.total == pytest.approx(0.4)


def test_source_order_is_preserved():
    rec = _record(
        [
            {"paymentDate": "2025-06-01", "rate": 0.1},
            {"paymentDate": "2026-01-01", "rate": 0.2},
            {"paymentDate": "2025-09-01", "rate": 0.3},
        ]
    )

    hist = history_within(rec, 12, today=TODAY)

    assert [d.rate for d in hist.items] == [0.1, 0.2, 0.3]


def test_missing_dividend_data_is_empty():
    rec = QuoteRecord.model_validate({"symbol": "MGLU3", "regularMarketPrice": 2.0})

    hist = history_within(rec, 12, today=TODAY)

    assert hist.total == 0.0
    assert hist.items == []


def test_malformed_dividend_block_is_empty():
    rec = QuoteRecord.model_validate({"symbol": "MGLU3", "dividendsData": "n/a"})
    assert history_within(rec, 12, today=TODAY).items == []

    rec = QuoteRecord.model_validate({"symbol": "MGLU3", "dividendsData": {"cashDividends": None}})
    assert history_within(rec, 12, today=TODAY).items == []


def test_cutoff_uses_calendar_months():
    assert cutoff_date(12, date(2026, 3, 15)) == date(2025, 3, 15)
    assert cutoff_date(1, date(2026, 3, 31)) == date(2026, 2, 28)
    assert cutoff_date(6, date(2026, 8, 31)) == date(2026, 2, 28)


def test_current_yield_pct():
    recent = date.today().replace(day=1).isoformat()
    rec = _record([{"paymentDate": recent, "rate": 2.0}], price=40.0)
    assert current_yield_pct(rec) == pytest.approx(5.0)

    assert current_yield_pct(_record([{"paymentDate": recent, "rate": 2.0}], price=0)) == 0.0


def test_offset_timestamps_keep_their_own_calendar_day():
    rec = _record(
        [
            # 2025-03-15 in UTC, but paid on the 14th in Sao Paulo
            {"paymentDate": "2025-03-14T23:00:00-03:00", "rate": 1.0},
            # 2025-03-14 in UTC, but the 15th at +05:00
            {"paymentDate": "2025-03-15T01:00:00+05:00", "rate": 0.5},
        ]
    )

    hist = history_within(rec, 12, today=TODAY)

    assert [d.rate for d in hist.items] == [0.5]
    assert hist.total == pytest.approx(0.5)
