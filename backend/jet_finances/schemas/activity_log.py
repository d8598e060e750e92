"""
Pydantic schemas for ActivityLog entity.
"""
from pydantic import BaseModel
from typing import Any, Dict, Optional
from datetime import datetime


class ActivityLogResponse(BaseModel):
    """Schema for activity log response."""
    id: int
    user_id: str
    action: str
    table_name: str
    record_id: Optional[int] = None
    record_details: Optional[str] = None
    old_data: Optional[Dict[str, Any]] = None
    new_data: Optional[Dict[str, Any]] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
