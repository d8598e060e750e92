"""
Activity log service for recording data changes.
"""
from typing import Any, Dict, Optional
import logging
from fastapi import Request
from sqlalchemy.orm import Session
from jet_finances.models.activity_log import ActivityLog

logger = logging.getLogger(__name__)

ACTION_CREATE = "CREATE"
ACTION_UPDATE = "UPDATE"
ACTION_DELETE = "DELETE"

SYSTEM_ACTOR = "system"


def client_ip(request: Optional[Request]) -> Optional[str]:
    """Client address, honouring the first X-Forwarded-For hop behind a proxy."""
    if request is None:
        return None
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


def log_activity(
    db: Session,
    action: str,
    table_name: str,
    record_id: Optional[int] = None,
    record_details: Optional[str] = None,
    old_data: Optional[Dict[str, Any]] = None,
    new_data: Optional[Dict[str, Any]] = None,
    actor: Optional[str] = None,
    request: Optional[Request] = None
) -> ActivityLog:
    """
    Add an activity log entry to the session.

    The caller commits it together with the change it describes.
    """
    entry = ActivityLog(
        user_id=actor or SYSTEM_ACTOR,
        action=action,
        table_name=table_name,
        record_id=record_id,
        record_details=record_details,
        old_data=old_data,
        new_data=new_data,
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent") if request is not None else None,
    )
    db.add(entry)
    logger.info(f"{entry.user_id} {action} {table_name}#{record_id}")
    return entry
