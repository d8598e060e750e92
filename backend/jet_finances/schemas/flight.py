"""
Pydantic schemas for Flight entity.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime


class FlightBase(BaseModel):
    """Base flight schema."""
    flt_date: date
    flt_number: str
    flt_dep: str
    flt_arr: str
    flt_time: str
    flt_block: str


class FlightCreate(FlightBase):
    """Schema for flight creation."""
    pass


class FlightUpdate(BaseModel):
    """Schema for flight update."""
    flt_date: Optional[date] = None
    flt_number: Optional[str] = None
    flt_dep: Optional[str] = None
    flt_arr: Optional[str] = None
    flt_time: Optional[str] = None
    flt_block: Optional[str] = None


class FlightResponse(FlightBase):
    """Schema for flight response."""
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
