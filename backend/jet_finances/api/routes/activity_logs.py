"""
Activity log routes (superadmin only).
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from jet_finances.db.session import get_db
from jet_finances.models.user import User
from jet_finances.models.activity_log import ActivityLog
from jet_finances.schemas.activity_log import ActivityLogResponse
from jet_finances.api.dependencies import require_superadmin

router = APIRouter(prefix="/activity-logs", tags=["activity-logs"])


@router.get("", response_model=List[ActivityLogResponse])
async def list_activity_logs(
    table_name: Optional[str] = None,
    action: Optional[str] = None,
    offset: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Get activity log entries, newest first."""
    query = db.query(ActivityLog)
    if table_name:
        query = query.filter(ActivityLog.table_name == table_name)
    if action:
        query = query.filter(ActivityLog.action == action.upper())
    return query.order_by(ActivityLog.id.desc()).offset(offset).limit(limit).all()
