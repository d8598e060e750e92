"""
Pydantic schemas for dashboard and report responses.
"""
from pydantic import BaseModel
from typing import Dict, List
from decimal import Decimal


class DashboardStats(BaseModel):
    """Counts and USD totals shown on the dashboard."""
    flights_count: int
    invoices_count: int
    invoices_total_usd: Decimal
    expenses_total_usd: Decimal
    open_discrepancies: int


class ReportCell(BaseModel):
    usd: float
    aed: float


class ReportRowResponse(BaseModel):
    label: str
    cells: Dict[str, ReportCell]  # Keyed by YYYY-MM


class ReportDataResponse(BaseModel):
    """Expenses-by-month matrix for on-screen preview."""
    months: List[str]
    month_labels: List[str]
    rows: List[ReportRowResponse]
    credit_note: ReportRowResponse
    total: ReportRowResponse
    charter_profit: ReportRowResponse
