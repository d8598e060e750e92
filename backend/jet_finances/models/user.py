"""
User model mirroring accounts held by the BaaS auth service.
"""
from sqlalchemy import Column, String, Enum as SQLEnum
from jet_finances.db.base import BaseModel
import enum


class UserRole(str, enum.Enum):
    """Role enumeration used for view gating."""
    SUPERADMIN = "superadmin"
    READER = "reader"


class User(BaseModel):
    """Local profile of an auth-service account, carrying its role."""
    __tablename__ = "users"

    auth_id = Column(String(36), unique=True, nullable=False, index=True)  # UUID issued by the auth service
    email = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(
        SQLEnum(UserRole, values_callable=lambda roles: [r.value for r in roles], name="user_role"),
        default=UserRole.READER,
        nullable=False
    )
    full_name = Column(String(255), nullable=True)

    @property
    def is_superadmin(self) -> bool:
        return self.role == UserRole.SUPERADMIN
