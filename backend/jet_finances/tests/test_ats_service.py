"""
Tests for the ATS report filter.
"""
from datetime import date
from decimal import Decimal

from jet_finances.services.ats_service import filter_for_ats
from jet_finances.services.report_service import ReportRecord

CUTOFF = date(2025, 10, 1)


def record(record_id, type_text, **fields):
    return ReportRecord(id=record_id, type=type_text, amount=Decimal("100"), currency="USD", **fields)


def ids(records):
    return [item.id for item in records]


def test_pre_cutoff_expense_and_its_disbursement_fee_are_excluded():
    shared = dict(invoice_id=7, flight_id=3, period_start=date(2025, 9, 1), period_end=date(2025, 10, 1), place="OMDW")
    expense = record(1, "Maintenance", **shared)
    fee = record(2, "Disbursement fee", **shared)
    assert filter_for_ats([expense, fee], cutoff=CUTOFF) == []


def test_disbursement_fee_without_period_follows_related_expense():
    expense = record(1, "Crew", invoice_id=7, period_start=date(2025, 1, 1), period_end=date(2025, 2, 1))
    unrelated_fee = record(2, "Disbursement fee", invoice_id=7)
    related_fee = record(3, "Disbursement fee", invoice_id=7, period_start=date(2025, 1, 1), period_end=date(2025, 2, 1))
    assert ids(filter_for_ats([expense, unrelated_fee, related_fee], cutoff=CUTOFF)) == [2]


def test_fee_on_other_invoice_is_kept():
    period = dict(period_start=date(2025, 9, 1), period_end=date(2025, 10, 1))
    expense = record(1, "Subscriptions", invoice_id=1, **period)
    fee = record(2, "Disbursement fee", invoice_id=2, flight_id=None, place=None, period_start=None)
    assert ids(filter_for_ats([expense, fee], cutoff=CUTOFF)) == [2]


def test_expenses_without_period_start_are_kept():
    items = [record(1, "Fuel", flight_date=date(2024, 1, 1)), record(2, "Catering")]
    assert ids(filter_for_ats(items, cutoff=CUTOFF)) == [1, 2]


def test_period_on_cutoff_is_kept():
    item = record(1, "Crew", period_start=CUTOFF, period_end=date(2025, 11, 1))
    assert ids(filter_for_ats([item], cutoff=CUTOFF)) == [1]


def test_non_fee_sharing_key_is_not_excluded_transitively():
    shared = dict(invoice_id=7, place="OMDW")
    excluded = record(1, "Crew", period_start=date(2025, 1, 1), period_end=date(2025, 2, 1), **shared)
    sibling = record(2, "Fuel", **shared)
    assert ids(filter_for_ats([excluded, sibling], cutoff=CUTOFF)) == [2]


def test_records_without_ids_are_handled():
    shared = dict(period_start=date(2025, 1, 1), period_end=date(2025, 2, 1))
    items = [record(None, "Crew", **shared), record(None, "Disbursement fee", **shared), record(None, "Fuel")]
    remaining = filter_for_ats(items, cutoff=CUTOFF)
    assert [item.type for item in remaining] == ["Fuel"]
