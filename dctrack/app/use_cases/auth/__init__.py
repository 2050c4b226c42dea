"""
Authentication Use Cases

All authentication-related business logic.
"""

from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .confirm_password_use_case import ConfirmPasswordUseCase
from .dtos import (
    ConfirmPasswordResponse,
    LoginResponse,
    LogoutResponse,
    UserInfo,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "LogoutUseCase",
    "ConfirmPasswordUseCase",
    # DTOs - Responses
    "LoginResponse",
    "LogoutResponse",
    "ConfirmPasswordResponse",
    # DTOs - Nested Models
    "UserInfo",
]
