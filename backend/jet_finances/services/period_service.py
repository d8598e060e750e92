"""
Period splitting service.

Spreads an expense amount over the calendar months it covers.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Tuple
import logging

from jet_finances.services.fx_service import to_decimal

logger = logging.getLogger(__name__)

MonthShare = Tuple[str, Decimal]


def month_key(value: date) -> str:
    """Return the YYYY-MM key of a date."""
    return f"{value.year:04d}-{value.month:02d}"


def add_months(value: date, months: int) -> date:
    """First day of the month ``months`` after value's month."""
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def months_between(period_start: date, period_end: date) -> int:
    """
    Number of months covered by a period whose end is exclusive.

    An end falling on the first day of the month right after the start's
    month is the single-month encoding and counts as one month, including
    across a December to January rollover.
    """
    if period_end == add_months(period_start, 1):
        return 1
    return (period_end.year - period_start.year) * 12 + (period_end.month - period_start.month) + 1


def as_date(value) -> Optional[date]:
    """Coerce a date, datetime or ISO string to a date; None when unparseable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        logger.debug(f"Ignoring unparseable date {value!r}")
        return None


def split_by_months(expense, today: Optional[date] = None) -> List[MonthShare]:
    """
    Split an expense amount into (month, amount) shares.

    Attribution order: the linked flight's date, then the amortization
    period, then the creation date (or today). Period amounts are divided
    evenly without rounding.

    Args:
        expense: Record exposing amount, flight_date, period_start,
            period_end and created_at
        today: Date used when nothing else dates the expense

    Returns:
        List of (YYYY-MM, amount) tuples in ascending month order
    """
    amount = to_decimal(expense.amount)

    flight_date = as_date(expense.flight_date)
    if flight_date is not None:
        return [(month_key(flight_date), amount)]

    period_start = as_date(expense.period_start)
    period_end = as_date(expense.period_end)
    if period_start is not None and period_end is not None:
        if period_end > period_start:
            total_months = months_between(period_start, period_end)
            monthly_amount = amount / total_months
            return [
                (month_key(add_months(period_start, offset)), monthly_amount)
                for offset in range(total_months)
            ]
        logger.warning(
            f"Expense {getattr(expense, 'id', None)} has period end {period_end} not after start "
            f"{period_start}; attributing to its creation month"
        )

    fallback = as_date(expense.created_at) or today or date.today()
    return [(month_key(fallback), amount)]
