"""
Tests for splitting expense amounts across months.
"""
from datetime import date, datetime
from decimal import Decimal

import pytest

from jet_finances.services.period_service import months_between, split_by_months
from jet_finances.services.report_service import ReportRecord

TOLERANCE = Decimal("1e-12")


def record(**fields):
    fields.setdefault("amount", Decimal("1200"))
    fields.setdefault("currency", "USD")
    return ReportRecord(**fields)


def test_single_month_encoding():
    shares = split_by_months(record(period_start=date(2025, 1, 1), period_end=date(2025, 2, 1)))
    assert shares == [("2025-01", Decimal("1200"))]


def test_year_rollover_single_month():
    shares = split_by_months(record(period_start=date(2025, 12, 1), period_end=date(2026, 1, 1)))
    assert shares == [("2025-12", Decimal("1200"))]


def test_multi_month_period_counts_end_month():
    shares = split_by_months(record(period_start=date(2025, 1, 1), period_end=date(2025, 3, 1)))
    assert [month for month, _ in shares] == ["2025-01", "2025-02", "2025-03"]
    assert all(amount == Decimal("400") for _, amount in shares)


def test_period_across_year_boundary():
    shares = split_by_months(record(period_start=date(2024, 11, 1), period_end=date(2025, 2, 1)))
    assert [month for month, _ in shares] == ["2024-11", "2024-12", "2025-01", "2025-02"]


@pytest.mark.parametrize("start, end", [
    (date(2025, 1, 1), date(2025, 4, 1)),
    (date(2025, 1, 15), date(2025, 7, 10)),
    (date(2023, 6, 1), date(2025, 6, 1)),
])
def test_split_conserves_amount(start, end):
    amount = Decimal("1000.01")
    shares = split_by_months(record(amount=amount, period_start=start, period_end=end))
    assert len(shares) == months_between(start, end)
    assert abs(sum(share for _, share in shares) - amount) < TOLERANCE


def test_flight_date_wins_over_period():
    shares = split_by_months(record(
        flight_date=date(2025, 5, 20),
        period_start=date(2025, 1, 1),
        period_end=date(2025, 3, 1),
    ))
    assert shares == [("2025-05", Decimal("1200"))]


def test_falls_back_to_created_at():
    shares = split_by_months(record(created_at=datetime(2024, 8, 3, 10, 30)))
    assert shares == [("2024-08", Decimal("1200"))]


def test_inverted_period_falls_back_to_created_at():
    shares = split_by_months(record(
        period_start=date(2025, 5, 1),
        period_end=date(2025, 4, 1),
        created_at=datetime(2025, 6, 2),
    ))
    assert shares == [("2025-06", Decimal("1200"))]


def test_unparseable_period_from_mapping_falls_back():
    item = ReportRecord.from_mapping({
        "type": "Fuel",
        "amount": "10",
        "currency": "USD",
        "period_start": "not-a-date",
        "period_end": "2025-02-01",
        "created_at": datetime(2025, 3, 9),
    })
    assert split_by_months(item) == [("2025-03", Decimal("10"))]


def test_undated_expense_uses_today():
    assert split_by_months(record(), today=date(2026, 2, 14)) == [("2026-02", Decimal("1200"))]
