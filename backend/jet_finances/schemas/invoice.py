"""
Pydantic schemas for Invoice entity.
"""
from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from jet_finances.services.fx_service import SUPPORTED_CURRENCIES


def validate_currency(value: Optional[str]) -> Optional[str]:
    """Accept AED, USD or EUR (any case)."""
    if value is None:
        return value
    value = value.upper()
    if value not in SUPPORTED_CURRENCIES:
        raise ValueError(f"Invalid currency. Must be one of: {', '.join(SUPPORTED_CURRENCIES)}")
    return value


def validate_positive(value: Optional[Decimal]) -> Optional[Decimal]:
    if value is not None and value <= 0:
        raise ValueError("Amount must be a positive number")
    return value


class InvoiceBase(BaseModel):
    """Base invoice schema."""
    inv_date: date
    inv_number: str
    inv_amount: Decimal
    inv_currency: str
    inv_tags: str = ""


class InvoiceCreate(InvoiceBase):
    """Schema for invoice creation."""

    @field_validator("inv_currency")
    @classmethod
    def check_currency(cls, v):
        return validate_currency(v)

    @field_validator("inv_amount")
    @classmethod
    def check_amount(cls, v):
        return validate_positive(v)


class InvoiceUpdate(BaseModel):
    """Schema for invoice update."""
    inv_date: Optional[date] = None
    inv_number: Optional[str] = None
    inv_amount: Optional[Decimal] = None
    inv_currency: Optional[str] = None
    inv_tags: Optional[str] = None

    @field_validator("inv_currency")
    @classmethod
    def check_currency(cls, v):
        return validate_currency(v)

    @field_validator("inv_amount")
    @classmethod
    def check_amount(cls, v):
        return validate_positive(v)


class InvoiceResponse(InvoiceBase):
    """Schema for invoice response."""
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
