"""
Activity log model for the audit trail of data changes.
"""
from sqlalchemy import Column, String, Integer, Text, JSON
from jet_finances.db.base import BaseModel


class ActivityLog(BaseModel):
    """One create/update/delete performed through the API."""
    __tablename__ = "activity_logs"

    user_id = Column(String(255), nullable=False, default="system", index=True)  # Actor email
    action = Column(String(20), nullable=False, index=True)  # CREATE, UPDATE, DELETE
    table_name = Column(String(50), nullable=False, index=True)
    record_id = Column(Integer, nullable=True)
    record_details = Column(Text, nullable=True)  # Flight number, invoice number, etc.
    old_data = Column(JSON, nullable=True)
    new_data = Column(JSON, nullable=True)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)
