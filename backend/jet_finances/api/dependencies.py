"""
Shared API dependencies for authentication and authorization.
"""
import logging
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from jet_finances.db.session import get_db
from jet_finances.models.user import User
from jet_finances.core.security import decode_access_token, token_verification_enabled

logger = logging.getLogger(__name__)


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Get the signed-in user from the session cookie."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated"
    )

    user_id = request.session.get("user_id")
    if user_id is None:
        raise credentials_exception

    if token_verification_enabled():
        payload = decode_access_token(request.session.get("access_token"))
        if payload is None:
            logger.info(f"Clearing session of user {user_id}: access token invalid or expired")
            request.session.clear()
            raise credentials_exception

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        request.session.clear()
        raise credentials_exception

    return user


def require_superadmin(current_user: User = Depends(get_current_user)) -> User:
    """Allow only superadmins (all writes and the activity log)."""
    if not current_user.is_superadmin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Superadmin role required"
        )
    return current_user

