"""Models package - Import all models for SQLAlchemy registration."""
from jet_finances.models.user import User, UserRole
from jet_finances.models.flight import Flight
from jet_finances.models.invoice import Invoice
from jet_finances.models.expense import Expense
from jet_finances.models.dictionary import ExpenseType, ExpenseSubtype, InvoiceType
from jet_finances.models.activity_log import ActivityLog
from jet_finances.models.discrepancy import Discrepancy, DiscrepancyStatus

__all__ = [
    "User",
    "UserRole",
    "Flight",
    "Invoice",
    "Expense",
    "ExpenseType",
    "ExpenseSubtype",
    "InvoiceType",
    "ActivityLog",
    "Discrepancy",
    "DiscrepancyStatus",
]
