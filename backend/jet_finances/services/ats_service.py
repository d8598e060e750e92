"""
ATS report filter.

Drops expenses whose amortization period starts before the cutoff date,
together with the disbursement fees that accompany them.
"""
from datetime import date
from typing import List, Optional, Sequence
import logging

from jet_finances.core.config import settings
from jet_finances.services.category_service import DISBURSEMENT_FEE, classify_base
from jet_finances.services.period_service import as_date

logger = logging.getLogger(__name__)


def relation_key(expense) -> tuple:
    """Fields a disbursement fee shares with the expense it belongs to."""
    return (
        expense.invoice_id,
        expense.flight_id,
        (as_date(expense.period_start), as_date(expense.period_end)),
        expense.place,
    )


def filter_for_ats(expenses: Sequence, cutoff: Optional[date] = None) -> List:
    """
    Remove pre-cutoff expenses and their related disbursement fees.

    Expenses without a period start are never excluded by the cutoff rule.

    Args:
        expenses: Report records
        cutoff: Earliest period start kept (defaults to ATS_CUTOFF_DATE)

    Returns:
        The remaining records, in input order
    """
    cutoff = cutoff or settings.ATS_CUTOFF_DATE
    excluded = set()
    excluded_keys = set()

    for index, expense in enumerate(expenses):
        period_start = as_date(expense.period_start)
        if period_start is not None and period_start < cutoff:
            excluded.add(index)
            excluded_keys.add(relation_key(expense))

    for index, expense in enumerate(expenses):
        if index in excluded:
            continue
        if classify_base(expense) == DISBURSEMENT_FEE and relation_key(expense) in excluded_keys:
            excluded.add(index)

    logger.info(f"ATS filter excluded {len(excluded)} of {len(expenses)} expenses (cutoff {cutoff})")
    return [expense for index, expense in enumerate(expenses) if index not in excluded]
