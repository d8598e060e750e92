"""
Health check routes for the database and the auth service.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from jet_finances.db.session import get_db, check_database
from jet_finances.core.exceptions import AuthServiceError
from jet_finances.services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/database")
async def database_health(db: Session = Depends(get_db)):
    """Check that the database answers a trivial query."""
    try:
        check_database(db)
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable"
        )
    return {"status": "healthy", "database": "connected"}


@router.get("/auth")
async def auth_health():
    """Check that the auth service is reachable."""
    try:
        await auth_service.check_auth_health()
    except AuthServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )
    return {"status": "healthy", "auth": "connected"}
