"""
User Management Use Cases

Admin-only account administration.
"""

from .list_users_use_case import ListUsersUseCase
from .create_user_use_case import CreateUserUseCase
from .update_user_use_case import UpdateUserUseCase
from .delete_user_use_case import DeleteUserUseCase
from .toggle_user_status_use_case import ToggleUserStatusUseCase
from .dtos import (
    CreateUserCommand,
    DeleteUserResponse,
    UpdateUserCommand,
    UserResponse,
)

__all__ = [
    # Use Cases
    "ListUsersUseCase",
    "CreateUserUseCase",
    "UpdateUserUseCase",
    "DeleteUserUseCase",
    "ToggleUserStatusUseCase",
    # DTOs - Commands
    "CreateUserCommand",
    "UpdateUserCommand",
    # DTOs - Responses
    "UserResponse",
    "DeleteUserResponse",
]
