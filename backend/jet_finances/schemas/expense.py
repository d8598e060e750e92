"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, field_validator, model_validator
from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from jet_finances.schemas.invoice import validate_currency


class ExpenseBase(BaseModel):
    """Base expense schema. Every field is optional."""
    exp_type: Optional[str] = None
    exp_subtype: Optional[str] = None
    exp_place: Optional[str] = None
    exp_amount: Optional[Decimal] = None
    exp_currency: Optional[str] = None
    exp_period_start: Optional[date] = None
    exp_period_end: Optional[date] = None  # First day of the month after the period
    exp_fuel_quan: Optional[Decimal] = None
    exp_fuel_provider: Optional[str] = None
    exp_invoice_type: Optional[int] = None
    exp_invoice: Optional[int] = None
    exp_flight: Optional[int] = None
    exp_comments: Optional[str] = None


class ExpenseCreate(ExpenseBase):
    """Schema for expense creation."""

    @field_validator("exp_currency")
    @classmethod
    def check_currency(cls, v):
        return validate_currency(v)

    @model_validator(mode="after")
    def check_period(self):
        if self.exp_period_start and self.exp_period_end and self.exp_period_end <= self.exp_period_start:
            raise ValueError("exp_period_end must be after exp_period_start")
        return self


class ExpenseUpdate(ExpenseCreate):
    """Schema for expense update; only fields sent are changed."""
    pass


class ExpenseResponse(ExpenseBase):
    """Schema for expense response."""
    id: int
    inv_number: Optional[str] = None  # Number of the linked invoice
    flt_number: Optional[str] = None  # Number of the linked flight
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
