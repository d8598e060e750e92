"""
Tests for the ground handling backfill helpers.
"""
from datetime import date
from decimal import Decimal

import pytest

from jet_finances.models.dictionary import ExpenseSubtype, ExpenseType
from jet_finances.models.expense import Expense
from jet_finances.models.flight import Flight
from jet_finances.services.ground_handling import (
    HandlingInvoice,
    build_expense_rows,
    ensure_ground_handling_type,
    extract_route_info,
    find_matching_flight,
    insert_ground_handling_expenses,
    parse_date_from_comments,
    summarize_ground_handling,
)


@pytest.mark.parametrize("comments, expected", [
    ("AUTOSCAN: Handling-25 JUL24, A6-RTS, OJAM", date(2024, 7, 25)),
    ("AUTOSCAN: Handling-19 Jun24, A6-RTS, HEAL-OMDW", date(2024, 6, 19)),
    ("AUTOSCAN: Landing Permit-17-19 JUL24, A6RTS, OMDW", date(2024, 7, 17)),
    ("AUTOSCAN: HANDLING-24-25 JUL24, A6-RTS, LTBS, LGKL-OJAM", date(2024, 7, 24)),
    ("AUTOSCAN: A6-RTS T#2407-08 Handling", date(2024, 7, 8)),
    ("AUTOSCAN: Arrival-Departure,4 AUG24, A6-RTS, LTFE, OMDW-OMDW", date(2024, 8, 4)),
    ("AUTOSCAN: no date here", None),
    ("", None),
])
def test_parse_date_from_comments(comments, expected):
    assert parse_date_from_comments(comments) == expected


def test_extract_route_info():
    assert extract_route_info("AUTOSCAN: Handling-16 Aug24, A6-RTS, LTBA-OMDW", "LTBA") == ("LTBA", "OMDW")
    assert extract_route_info("AUTOSCAN: Handling-25 JUL24, A6-RTS, OJAM", "OJAM") == ("OJAM", "OJAM")


def test_handling_split_into_arrival_and_departure():
    item = HandlingInvoice("OMDW", "AED", Decimal("8605.39"), "AUTOSCAN: A6-RTS T#2407-08 Handling")
    rows = build_expense_rows(item, flight_id=5)

    assert [row["exp_subtype"] for row in rows] == ["arrival", "departure"]
    assert all(row["exp_amount"] == Decimal("4302.70") for row in rows)
    assert rows[0]["exp_comments"].endswith(" - Arrival")
    assert rows[1]["exp_comments"].endswith(" - Departure")
    assert all(row["exp_flight"] == 5 and row["exp_type"] == "Ground handling" for row in rows)


def test_landing_permit_kept_whole():
    item = HandlingInvoice("OMDW", "USD", Decimal("200.00"), "AUTOSCAN: Landing Permit-17-19 JUL24, A6RTS, OMDW")
    rows = build_expense_rows(item, flight_id=None)

    assert len(rows) == 1
    assert rows[0]["exp_subtype"] == "Landing Permit"
    assert rows[0]["exp_amount"] == Decimal("200.00")
    assert rows[0]["exp_comments"] == item.comments


def add_flight(db, flight_date, dep, arr, number):
    flight = Flight(flt_date=flight_date, flt_number=number, flt_dep=dep, flt_arr=arr,
                    flt_time="03:00", flt_block="03:20")
    db.add(flight)
    db.commit()
    return flight


def test_find_matching_flight_takes_first_by_departure_or_arrival(db):
    first = add_flight(db, date(2024, 7, 25), "OMDW", "OJAM", "RTS1")
    add_flight(db, date(2024, 7, 25), "OJAM", "OMDW", "RTS2")
    add_flight(db, date(2024, 7, 26), "OJAM", "OMDW", "RTS3")

    assert find_matching_flight(db, "OJAM", date(2024, 7, 25)).id == first.id
    assert find_matching_flight(db, "LTBA", date(2024, 7, 25)) is None
    assert find_matching_flight(db, "OJAM", None) is None


def test_ensure_ground_handling_type_is_idempotent(db):
    ensure_ground_handling_type(db)
    ensure_ground_handling_type(db)
    db.commit()

    assert db.query(ExpenseType).filter(ExpenseType.name == "Ground handling").count() == 1
    assert sorted(s.name for s in db.query(ExpenseSubtype).all()) == ["Landing Permit", "arrival", "departure"]


def test_insert_and_summarize(db):
    flight = add_flight(db, date(2024, 7, 25), "OMDW", "OJAM", "RTS1")
    items = [
        HandlingInvoice("OJAM", "USD", Decimal("4200.00"), "AUTOSCAN: Handling-25 JUL24, A6-RTS, OJAM"),
        HandlingInvoice("OMDW", "USD", Decimal("200.00"), "AUTOSCAN: Landing Permit-17-19 JUL24, A6RTS, OMDW"),
    ]

    inserted, failed = insert_ground_handling_expenses(db, items)

    assert (inserted, failed) == (3, 0)
    linked = db.query(Expense).filter(Expense.exp_place == "OJAM").all()
    assert {expense.exp_flight for expense in linked} == {flight.id}
    summary = {(subtype, currency): (count, total) for subtype, currency, count, total in summarize_ground_handling(db)}
    assert summary[("arrival", "USD")] == (1, Decimal("2100.00"))
    assert summary[("Landing Permit", "USD")] == (1, Decimal("200.00"))
