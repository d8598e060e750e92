"""
Dashboard routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from jet_finances.db.session import get_db
from jet_finances.models.user import User
from jet_finances.schemas.report import DashboardStats
from jet_finances.api.dependencies import get_current_user
from jet_finances.services.expense_service import get_dashboard_stats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get record counts and USD totals."""
    return get_dashboard_stats(db)
