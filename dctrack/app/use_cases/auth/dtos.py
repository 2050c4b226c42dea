"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
"""

from pydantic import BaseModel


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """Signed-in user information in authentication responses"""

    id: int
    name: str
    email: str
    role: str


class LoginResponse(BaseModel):
    """Response for user login use case"""

    access_token: str
    token_type: str = "bearer"
    user: UserInfo


class LogoutResponse(BaseModel):
    """Response for user logout use case"""

    status: str
    message: str


class ConfirmPasswordResponse(BaseModel):
    """Response for password confirmation use case"""

    status: str
    message: str
