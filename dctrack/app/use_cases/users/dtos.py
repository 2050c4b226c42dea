"""
User Management Use Case DTOs
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from dctrack.domain.entities import User, UserType


# ============================================================================
# Command DTOs
# ============================================================================


class CreateUserCommand(BaseModel):
    """Command for creating a user account"""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8)
    user_type: UserType = UserType.user
    is_active: bool = True


class UpdateUserCommand(BaseModel):
    """Command for updating a user account, unset fields are left untouched"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=8)
    user_type: Optional[UserType] = None
    is_active: Optional[bool] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserResponse(BaseModel):
    """User account as returned by the API (no credentials)"""

    id: int
    name: str
    email: str
    user_type: UserType
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            user_type=user.user_type,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class DeleteUserResponse(BaseModel):
    """Response for delete user use case"""

    status: str
    message: str
