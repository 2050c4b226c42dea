from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from dctrack.api.error import ClientError, ServerError
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.app.use_cases.auth import (
    ConfirmPasswordResponse,
    ConfirmPasswordUseCase,
    LoginResponse,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
)
from dctrack.depends import get_audit_context, get_request_info, get_unit_of_work
from dctrack.domain.context import AuditContext, RequestInfo

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    request_info: RequestInfo = Depends(get_request_info),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    User Login

    Authenticates user and returns a JWT access token. Every attempt,
    successful or not, is written to the audit trail.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Account deactivated
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow)
    result = await use_case.execute(request.email, request.password, request_info)

    # Handle errors
    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "USER_INACTIVE":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    context: AuditContext = Depends(get_audit_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    User Logout

    Records the logout. The client must discard its access token.
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(context)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ConfirmPasswordRequest(BaseModel):
    """Confirm password HTTP request payload"""

    password: str = Field(..., description="Current password")


@router.post(
    "/confirm-password",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResponse,
)
async def confirm_password(
    request: ConfirmPasswordRequest,
    context: AuditContext = Depends(get_audit_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Confirm Password

    Re-checks the signed-in user's password before a sensitive operation.

    Raises:
        - 401 Unauthorized: Missing or invalid JWT
        - 422 Unprocessable Entity: Wrong password
        - 500 Internal Server Error: Server error
    """
    use_case = ConfirmPasswordUseCase(uow)
    result = await use_case.execute(context, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        elif error.code in ("UNAUTHENTICATED", "USER_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value
