"""
Ground handling backfill.

Turns scanned ground handling invoices into expense rows: the service date
and route are parsed from the scan comment, the row is linked to a flight
touching the station that day, and handling charges are split evenly into
arrival and departure halves. Landing permits stay a single row.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Tuple
import logging
import re

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jet_finances.models.dictionary import ExpenseType, ExpenseSubtype
from jet_finances.models.expense import Expense
from jet_finances.models.flight import Flight
from jet_finances.services.fx_service import to_decimal

logger = logging.getLogger(__name__)

GROUND_HANDLING_TYPE = "Ground handling"
GROUND_HANDLING_DESCRIPTION = "Ground handling services including arrival and departure services"

SUBTYPE_ARRIVAL = "arrival"
SUBTYPE_DEPARTURE = "departure"
SUBTYPE_LANDING_PERMIT = "Landing Permit"

GROUND_HANDLING_SUBTYPES = (
    (SUBTYPE_ARRIVAL, "Arrival ground handling services"),
    (SUBTYPE_DEPARTURE, "Departure ground handling services"),
    (SUBTYPE_LANDING_PERMIT, "Landing permit fees"),
)

MONTHS = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}

# "17-19 JUL24" (first day wins), "25 JUL24", "T#2407-08"
DAY_RANGE_PATTERN = re.compile(r"(\d{1,2})-\d{1,2}\s+([A-Z]{3})(\d{2})\b", re.IGNORECASE)
DAY_PATTERN = re.compile(r"(\d{1,2})\s+([A-Z]{3})(\d{2})\b", re.IGNORECASE)
TRIP_PATTERN = re.compile(r"T#(\d{2})(\d{2})-(\d{2})")
ROUTE_PATTERN = re.compile(r"([A-Z]{4})-([A-Z]{4})")

CENT = Decimal("0.01")


@dataclass(frozen=True)
class HandlingInvoice:
    """One scanned ground handling charge."""
    place: str
    currency: str
    amount: Decimal
    comments: str


def _safe_date(year: int, month: Optional[int], day: int) -> Optional[date]:
    if month is None:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_date_from_comments(comments: str) -> Optional[date]:
    """
    Extract the service date from a scan comment.

    Returns:
        The date, or None when no known pattern matches
    """
    if not comments:
        return None

    for pattern in (DAY_RANGE_PATTERN, DAY_PATTERN):
        match = pattern.search(comments)
        if match:
            day, month, year = match.groups()
            return _safe_date(2000 + int(year), MONTHS.get(month.upper()), int(day))

    match = TRIP_PATTERN.search(comments)
    if match:
        year, month, day = match.groups()
        return _safe_date(2000 + int(year), int(month), int(day))

    return None


def extract_route_info(comments: str, place: str) -> Tuple[str, str]:
    """Return (departure, arrival) from an ICAO route like "LTBA-OMDW", else (place, place)."""
    match = ROUTE_PATTERN.search(comments or "")
    if match:
        return match.group(1), match.group(2)
    return place, place


def is_landing_permit(comments: str) -> bool:
    return "Landing Permit" in (comments or "")


def half_amount(amount) -> Decimal:
    """Half of an amount rounded half-up to cents."""
    return (to_decimal(amount) / 2).quantize(CENT, rounding=ROUND_HALF_UP)


def build_expense_rows(item: HandlingInvoice, flight_id: Optional[int]) -> List[Dict]:
    """
    Expense column values for one scanned charge.

    Landing permits produce one row; anything else produces arrival and
    departure rows each carrying half the amount.
    """
    base = {
        "exp_type": GROUND_HANDLING_TYPE,
        "exp_place": item.place,
        "exp_currency": item.currency,
        "exp_flight": flight_id,
    }
    if is_landing_permit(item.comments):
        return [dict(
            base,
            exp_subtype=SUBTYPE_LANDING_PERMIT,
            exp_amount=to_decimal(item.amount),
            exp_comments=item.comments,
        )]

    half = half_amount(item.amount)
    return [
        dict(base, exp_subtype=SUBTYPE_ARRIVAL, exp_amount=half, exp_comments=f"{item.comments} - Arrival"),
        dict(base, exp_subtype=SUBTYPE_DEPARTURE, exp_amount=half, exp_comments=f"{item.comments} - Departure"),
    ]


def find_matching_flight(db: Session, place: str, on_date: Optional[date]) -> Optional[Flight]:
    """First flight departing from or arriving at place on the given date."""
    if on_date is None:
        return None
    return db.query(Flight).filter(
        or_(Flight.flt_dep == place, Flight.flt_arr == place),
        Flight.flt_date == on_date
    ).order_by(Flight.id).first()


def ensure_ground_handling_type(db: Session) -> ExpenseType:
    """Create the Ground handling expense type and its subtypes when missing."""
    expense_type = db.query(ExpenseType).filter(ExpenseType.name == GROUND_HANDLING_TYPE).first()
    if not expense_type:
        expense_type = ExpenseType(name=GROUND_HANDLING_TYPE, description=GROUND_HANDLING_DESCRIPTION)
        db.add(expense_type)
        db.flush()
        logger.info(f"Created {GROUND_HANDLING_TYPE} expense type")

    for name, description in GROUND_HANDLING_SUBTYPES:
        exists = db.query(ExpenseSubtype).filter(
            ExpenseSubtype.expense_type_id == expense_type.id,
            ExpenseSubtype.name == name
        ).first()
        if not exists:
            db.add(ExpenseSubtype(expense_type_id=expense_type.id, name=name, description=description))
            logger.info(f"Created {name} subtype")

    db.flush()
    return expense_type


def insert_ground_handling_expenses(db: Session, items: List[HandlingInvoice]) -> Tuple[int, int]:
    """
    Insert expense rows for every scanned charge and commit.

    Returns:
        (inserted row count, failed charge count)
    """
    ensure_ground_handling_type(db)
    db.commit()

    inserted = 0
    failed = 0
    for item in items:
        service_date = parse_date_from_comments(item.comments)
        departure, arrival = extract_route_info(item.comments, item.place)
        logger.info(f"Processing {item.place} ({departure}-{arrival}) on {service_date}: {item.comments}")

        flight = find_matching_flight(db, item.place, service_date)
        if flight is None:
            logger.warning(f"No flights found for {item.place} on {service_date or 'unknown date'}")

        rows = build_expense_rows(item, flight.id if flight else None)
        try:
            for row in rows:
                db.add(Expense(**row))
            db.commit()
            inserted += len(rows)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to insert expense for {item.place}: {e}", exc_info=True)
            failed += 1

    return inserted, failed


def summarize_ground_handling(db: Session) -> List[Tuple[str, str, int, Decimal]]:
    """(subtype, currency, count, total) for every Ground handling expense group."""
    rows = db.query(
        Expense.exp_subtype,
        Expense.exp_currency,
        func.count(Expense.id),
        func.sum(Expense.exp_amount)
    ).filter(
        Expense.exp_type == GROUND_HANDLING_TYPE
    ).group_by(
        Expense.exp_subtype, Expense.exp_currency
    ).order_by(
        Expense.exp_subtype, Expense.exp_currency
    ).all()
    return [(subtype, currency, count, to_decimal(total)) for subtype, currency, count, total in rows]
