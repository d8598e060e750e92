"""
Expense service for expense-related business logic.
"""
from decimal import Decimal
from typing import List
from sqlalchemy.orm import Session, joinedload
from jet_finances.models.expense import Expense
from jet_finances.models.invoice import Invoice
from jet_finances.models.flight import Flight
from jet_finances.models.discrepancy import Discrepancy, FINAL_STATUSES
from jet_finances.services.fx_service import convert_to_usd


def list_expenses(db: Session) -> List[Expense]:
    """All expenses, newest first, with invoice and flight loaded."""
    return db.query(Expense).options(
        joinedload(Expense.invoice),
        joinedload(Expense.flight)
    ).order_by(Expense.id.desc()).all()


def list_invoice_expenses(invoice_id: int, db: Session) -> List[Expense]:
    """Expenses of one invoice ordered by invoice type."""
    return db.query(Expense).options(
        joinedload(Expense.invoice),
        joinedload(Expense.flight)
    ).filter(
        Expense.exp_invoice == invoice_id
    ).order_by(Expense.exp_invoice_type.asc(), Expense.id.asc()).all()


def get_dashboard_stats(db: Session) -> dict:
    """Counts and USD totals for the dashboard."""
    flights_count = db.query(Flight).count()
    invoices = db.query(Invoice.inv_amount, Invoice.inv_currency).all()
    expenses = db.query(Expense.exp_amount, Expense.exp_currency).all()
    open_discrepancies = db.query(Discrepancy).filter(
        Discrepancy.status.notin_(FINAL_STATUSES)
    ).count()

    invoices_total = sum((convert_to_usd(amount, currency) for amount, currency in invoices), Decimal(0))
    expenses_total = sum((convert_to_usd(amount, currency) for amount, currency in expenses), Decimal(0))

    return {
        "flights_count": flights_count,
        "invoices_count": len(invoices),
        "invoices_total_usd": invoices_total.quantize(Decimal("0.01")),
        "expenses_total_usd": expenses_total.quantize(Decimal("0.01")),
        "open_discrepancies": open_discrepancies,
    }
