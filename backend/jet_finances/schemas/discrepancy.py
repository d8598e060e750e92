"""
Pydantic schemas for Discrepancy entity.
"""
from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal
from jet_finances.models.discrepancy import DiscrepancyStatus
from jet_finances.schemas.invoice import validate_currency


class DiscrepancyBase(BaseModel):
    """Base discrepancy schema."""
    invoice_id: int
    description: str
    status: DiscrepancyStatus = DiscrepancyStatus.CREATED
    solution: Optional[str] = None
    claimed_amount: Optional[Decimal] = None
    claimed_currency: Optional[str] = None


class DiscrepancyCreate(DiscrepancyBase):
    """Schema for discrepancy creation."""

    @field_validator("claimed_currency")
    @classmethod
    def check_currency(cls, v):
        return validate_currency(v)


class DiscrepancyUpdate(BaseModel):
    """Schema for discrepancy update."""
    description: Optional[str] = None
    status: Optional[DiscrepancyStatus] = None
    solution: Optional[str] = None
    claimed_amount: Optional[Decimal] = None
    claimed_currency: Optional[str] = None

    @field_validator("claimed_currency")
    @classmethod
    def check_currency(cls, v):
        return validate_currency(v)


class DiscrepancyResponse(DiscrepancyBase):
    """Schema for discrepancy response."""
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
