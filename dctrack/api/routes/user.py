from typing import List

from fastapi import APIRouter, Depends, status

from dctrack.api.error import ClientError, ServerError
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.app.use_cases.users import (
    CreateUserCommand,
    CreateUserUseCase,
    DeleteUserResponse,
    DeleteUserUseCase,
    ListUsersUseCase,
    ToggleUserStatusUseCase,
    UpdateUserCommand,
    UpdateUserUseCase,
    UserResponse,
)
from dctrack.depends import get_audit_context, get_unit_of_work
from dctrack.domain.context import AuditContext
from dctrack.libs.result import Error

router = APIRouter(prefix="/users", tags=["User"])


def _raise_user_error(error: Error):
    if error.code == "INSUFFICIENT_ROLE":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    if error.code == "USER_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if error.code == "EMAIL_ALREADY_EXISTS":
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    if error.code in ("CANNOT_DELETE_SELF", "CANNOT_DEACTIVATE_SELF"):
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)


@router.get("", status_code=status.HTTP_200_OK, response_model=List[UserResponse])
async def list_users(
    context: AuditContext = Depends(get_audit_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Users (Admin only)

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: Caller is not an Admin
    """
    result = await ListUsersUseCase(uow).execute(context)
    if result.is_err():
        _raise_user_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
async def create_user(
    command: CreateUserCommand,
    context: AuditContext = Depends(get_audit_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create User (Admin only)

    Raises:
        - 403 Forbidden: Caller is not an Admin
        - 409 Conflict: Email already exists
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    result = await CreateUserUseCase(uow).execute(context, command)
    if result.is_err():
        _raise_user_error(result.error)
    return result.value


@router.put("/{user_id}", status_code=status.HTTP_200_OK, response_model=UserResponse)
async def update_user(
    user_id: int,
    command: UpdateUserCommand,
    context: AuditContext = Depends(get_audit_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update User (Admin only)

    A supplied password is re-hashed; omitted fields are left untouched.

    Raises:
        - 403 Forbidden: Caller is not an Admin
        - 404 Not Found: Unknown user
        - 409 Conflict: Email already exists
    """
    result = await UpdateUserUseCase(uow).execute(context, user_id, command)
    if result.is_err():
        _raise_user_error(result.error)
    return result.value


@router.delete(
    "/{user_id}", status_code=status.HTTP_200_OK, response_model=DeleteUserResponse
)
async def delete_user(
    user_id: int,
    context: AuditContext = Depends(get_audit_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete User (Admin only)

    Raises:
        - 400 Bad Request: Attempt to delete own account
        - 403 Forbidden: Caller is not an Admin
        - 404 Not Found: Unknown user
    """
    result = await DeleteUserUseCase(uow).execute(context, user_id)
    if result.is_err():
        _raise_user_error(result.error)
    return result.value


@router.post(
    "/{user_id}/toggle-status",
    status_code=status.HTTP_200_OK,
    response_model=UserResponse,
)
async def toggle_user_status(
    user_id: int,
    context: AuditContext = Depends(get_audit_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Activate or Deactivate User (Admin only)

    Raises:
        - 400 Bad Request: Attempt to deactivate own account
        - 403 Forbidden: Caller is not an Admin
        - 404 Not Found: Unknown user
    """
    result = await ToggleUserStatusUseCase(uow).execute(context, user_id)
    if result.is_err():
        _raise_user_error(result.error)
    return result.value
