"""
Expenses-by-month report aggregation.

Builds the category x month matrix behind the spreadsheet export: every
expense is classified, split over the months it covers and accumulated in
both USD and AED. Credit notes and charter profit go to dedicated income
rows instead of categories.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional, Sequence
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from jet_finances.core.exceptions import NoDataForPeriod, UpstreamFetchFailure
from jet_finances.models.expense import Expense
from jet_finances.services.ats_service import filter_for_ats
from jet_finances.services.category_service import category_sort_key, classify_display
from jet_finances.services.fx_service import AED, USD, convert, to_decimal
from jet_finances.services.period_service import as_date, split_by_months

logger = logging.getLogger(__name__)

YEAR_CURRENT = "current"
YEAR_ALL = "all"
YEAR_FILTERS = (YEAR_CURRENT, YEAR_ALL)

CREDIT_NOTE = "Credit note"
CHARTER_PROFIT = "Charter profit"
TOTAL = "Total"


@dataclass(frozen=True)
class ReportRecord:
    """Immutable snapshot of one expense with the joined data the report needs."""
    id: Optional[int] = None
    type: Optional[str] = None
    subtype: Optional[str] = None
    amount: Optional[Decimal] = None
    currency: Optional[str] = None
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    flight_id: Optional[int] = None
    flight_date: Optional[date] = None
    invoice_id: Optional[int] = None
    invoice_type_name: Optional[str] = None
    place: Optional[str] = None
    comments: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_expense(cls, expense: Expense) -> "ReportRecord":
        """Snapshot an ORM expense with its flight and invoice type loaded."""
        return cls(
            id=expense.id,
            type=expense.exp_type,
            subtype=expense.exp_subtype,
            amount=expense.exp_amount,
            currency=expense.exp_currency,
            period_start=expense.exp_period_start,
            period_end=expense.exp_period_end,
            flight_id=expense.exp_flight,
            flight_date=expense.flight.flt_date if expense.flight else None,
            invoice_id=expense.exp_invoice,
            invoice_type_name=expense.invoice_type.name if expense.invoice_type else None,
            place=expense.exp_place,
            comments=expense.exp_comments,
            created_at=expense.created_at,
        )

    @classmethod
    def from_mapping(cls, data: dict) -> "ReportRecord":
        """Build a record from a plain dict; unparseable dates become None."""
        return cls(
            id=data.get("id"),
            type=data.get("type"),
            subtype=data.get("subtype"),
            amount=to_decimal(data.get("amount")),
            currency=data.get("currency"),
            period_start=as_date(data.get("period_start")),
            period_end=as_date(data.get("period_end")),
            flight_id=data.get("flight_id"),
            flight_date=as_date(data.get("flight_date")),
            invoice_id=data.get("invoice_id"),
            invoice_type_name=data.get("invoice_type_name"),
            place=data.get("place"),
            comments=data.get("comments"),
            created_at=data.get("created_at"),
        )


@dataclass
class CurrencyCell:
    """USD and AED accumulators for one row and month."""
    usd: Decimal = Decimal(0)
    aed: Decimal = Decimal(0)

    def add(self, amount: Decimal, currency: Optional[str]) -> None:
        self.usd += convert(amount, currency, USD)
        self.aed += convert(amount, currency, AED)

    def to_dict(self) -> dict:
        return {"usd": float(self.usd), "aed": float(self.aed)}


@dataclass
class ReportRow:
    """One labelled row of the matrix, keyed by YYYY-MM."""
    label: str
    cells: Dict[str, CurrencyCell] = field(default_factory=dict)

    def cell(self, month: str) -> CurrencyCell:
        """Cell for a month, zero when nothing was accumulated."""
        return self.cells.get(month, CurrencyCell())

    def accumulate(self, month: str, amount: Decimal, currency: Optional[str]) -> None:
        self.cells.setdefault(month, CurrencyCell()).add(amount, currency)

    def has_data(self, months: Sequence[str]) -> bool:
        return any(month in self.cells for month in months)

    def to_dict(self, months: Sequence[str]) -> dict:
        return {
            "label": self.label,
            "cells": {month: self.cell(month).to_dict() for month in months},
        }


@dataclass
class ReportMatrix:
    """Aggregated report ready for rendering."""
    months: List[str]
    category_rows: List[ReportRow]
    credit_note: ReportRow
    total: ReportRow
    charter_profit: ReportRow

    @property
    def month_labels(self) -> List[str]:
        return [month_label(month) for month in self.months]

    def to_dict(self) -> dict:
        return {
            "months": self.months,
            "month_labels": self.month_labels,
            "rows": [row.to_dict(self.months) for row in self.category_rows],
            "credit_note": self.credit_note.to_dict(self.months),
            "total": self.total.to_dict(self.months),
            "charter_profit": self.charter_profit.to_dict(self.months),
        }


def month_label(month: str) -> str:
    """Format a YYYY-MM key as "Mar 2025"."""
    year, month_number = month.split("-")
    return date(int(year), int(month_number), 1).strftime("%b %Y")


def income_row_label(invoice_type_name: Optional[str]) -> Optional[str]:
    """Return the income row an invoice type feeds, or None for ordinary expenses."""
    if not invoice_type_name:
        return None
    name = invoice_type_name.lower()
    if "credit" in name and "note" in name:
        return CREDIT_NOTE
    if "charter" in name and "profit" in name:
        return CHARTER_PROFIT
    return None


def build_report(
    expenses: Sequence[ReportRecord],
    year_filter: str = YEAR_CURRENT,
    show_subcategories: bool = False,
    apply_ats_filter: bool = False,
    today: Optional[date] = None
) -> ReportMatrix:
    """
    Aggregate expenses into the expenses-by-month matrix.

    Args:
        expenses: Report records to aggregate
        year_filter: "current" keeps months of the current year, "all" keeps every month
        show_subcategories: Label rows "Category - Subtype" instead of the base category
        apply_ats_filter: Drop pre-cutoff expenses and their disbursement fees first
        today: Reference date for the current year and undated expenses

    Returns:
        ReportMatrix

    Raises:
        ValueError: Unknown year filter
        NoDataForPeriod: No month survives the year filter
    """
    if year_filter not in YEAR_FILTERS:
        raise ValueError(f"Unknown year filter: {year_filter}")

    today = today or date.today()

    if apply_ats_filter:
        expenses = filter_for_ats(expenses)

    categories: Dict[str, ReportRow] = {}
    credit_note = ReportRow(CREDIT_NOTE)
    charter_profit = ReportRow(CHARTER_PROFIT)
    touched_months = set()
    skipped = 0
    empty = 0

    for expense in expenses:
        # Expenses without amount or currency add nothing and open no month
        if not convert(expense.amount, expense.currency, USD):
            empty += 1
            continue

        income_label = income_row_label(expense.invoice_type_name)
        if income_label is not None:
            row = credit_note if income_label == CREDIT_NOTE else charter_profit
        else:
            label = classify_display(expense, show_subcategories)
            if label is None:
                skipped += 1
                continue
            row = categories.setdefault(label, ReportRow(label))

        for month, amount in split_by_months(expense, today=today):
            row.accumulate(month, amount, expense.currency)
            touched_months.add(month)

    if skipped:
        logger.debug(f"Skipped {skipped} unclassified expenses")
    if empty:
        logger.debug(f"Skipped {empty} expenses without amount or currency")

    if year_filter == YEAR_CURRENT:
        prefix = f"{today.year:04d}-"
        months = sorted(month for month in touched_months if month.startswith(prefix))
    else:
        months = sorted(touched_months)

    if not months:
        raise NoDataForPeriod(year_filter)

    category_rows = sorted(
        (row for row in categories.values() if row.has_data(months)),
        key=lambda row: category_sort_key(row.label)
    )

    total = ReportRow(TOTAL)
    for month in months:
        cell = CurrencyCell()
        for row in category_rows:
            cell.usd += row.cell(month).usd
            cell.aed += row.cell(month).aed
        cell.usd -= credit_note.cell(month).usd
        cell.aed -= credit_note.cell(month).aed
        total.cells[month] = cell

    logger.info(
        f"Built expenses report: {len(category_rows)} categories x {len(months)} months "
        f"(year={year_filter}, subcategories={show_subcategories}, ats={apply_ats_filter})"
    )

    return ReportMatrix(
        months=months,
        category_rows=category_rows,
        credit_note=credit_note,
        total=total,
        charter_profit=charter_profit,
    )


def load_report_records(db: Session) -> List[ReportRecord]:
    """
    Read every expense with its flight and invoice type.

    Raises:
        UpstreamFetchFailure: The database read failed
    """
    try:
        expenses = db.query(Expense).options(
            joinedload(Expense.flight),
            joinedload(Expense.invoice_type)
        ).order_by(Expense.id).all()
    except SQLAlchemyError as e:
        logger.error(f"Failed to load expenses for report: {e}", exc_info=True)
        raise UpstreamFetchFailure("Failed to fetch expenses") from e

    return [ReportRecord.from_expense(expense) for expense in expenses]
