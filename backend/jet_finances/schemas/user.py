"""
Pydantic schemas for User entity and session authentication.
"""
from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime
from jet_finances.models.user import UserRole


class UserBase(BaseModel):
    """Base user schema."""
    email: EmailStr
    full_name: Optional[str] = None


class UserResponse(UserBase):
    """Schema for user response."""
    id: int
    role: UserRole
    created_at: datetime

    class Config:
        from_attributes = True


class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    """Signed-in user; the CSRF token arrives as the csrftoken cookie."""
    user: UserResponse


class CsrfTokenResponse(BaseModel):
    """Schema for CSRF token response."""
    csrf_token: Optional[str] = None
