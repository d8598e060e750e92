"""
Authentication routes for login, logout and session info.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from jet_finances.db.session import get_db
from jet_finances.schemas.user import UserLogin, LoginResponse, UserResponse, CsrfTokenResponse
from jet_finances.models.user import User, UserRole
from jet_finances.core.exceptions import AuthServiceError, InvalidCredentials
from jet_finances.core.rate_limit import limiter, login_rate_limit
from jet_finances.core.security import CSRF_COOKIE_NAME
from jet_finances.core.utils import format_response
from jet_finances.api.dependencies import get_current_user
from jet_finances.services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def get_or_create_local_user(auth_id: str, email: str, db: Session) -> User:
    """Find the local profile of an auth account, creating a reader on first login."""
    user = db.query(User).filter(User.auth_id == auth_id).first()
    if user:
        return user

    # Accounts assigned a role by script before their first login are matched by email
    user = db.query(User).filter(User.email == email).first()
    if user:
        user.auth_id = auth_id
    else:
        user = User(auth_id=auth_id, email=email, role=UserRole.READER)
        db.add(user)
        logger.info(f"Created local reader profile for {email}")
    db.commit()
    db.refresh(user)
    return user


@router.post("/login", response_model=LoginResponse)
@limiter.limit(login_rate_limit)
async def login(request: Request, credentials: UserLogin, db: Session = Depends(get_db)):
    """Sign in against the auth service and start a session (rate limited per client address)."""
    try:
        result = await auth_service.sign_in_with_password(credentials.email, credentials.password)
    except InvalidCredentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )
    except AuthServiceError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service unavailable"
        )

    user = get_or_create_local_user(result.auth_id, result.email, db)

    request.session.clear()
    request.session.update({
        "user_id": user.id,
        "email": user.email,
        "role": user.role.value,
        "access_token": result.access_token,
    })
    logger.info(f"User {user.email} logged in as {user.role.value}")

    return LoginResponse(user=UserResponse.model_validate(user))


@router.post("/logout")
async def logout(request: Request):
    """End the session; the auth-service sign-out is best effort."""
    access_token = request.session.get("access_token")
    email = request.session.get("email")
    await auth_service.sign_out(access_token)
    request.session.clear()
    if email:
        logger.info(f"User {email} logged out")
    return format_response(None, "Logged out")


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.get("/csrf", response_model=CsrfTokenResponse)
async def get_csrf_token(request: Request, current_user: User = Depends(get_current_user)):
    """Return the CSRF cookie value to echo in the X-CSRF-Token header."""
    return CsrfTokenResponse(csrf_token=request.cookies.get(CSRF_COOKIE_NAME))
