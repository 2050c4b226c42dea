from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from dctrack.adapter.services.local_file_storage import LocalFileStorage
from dctrack.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from dctrack.api.utils.jwt import verify_jwt
from dctrack.app.services.file_storage import IFileStorage
from dctrack.app.services.security import actor_from_user
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.context import AuditContext, RequestInfo

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_file_storage() -> IFileStorage:
    return LocalFileStorage(
        ApplicationConfig.STORAGE_ROOT, ApplicationConfig.STORAGE_URL_PREFIX
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Decoded JWT payload containing user_id, name, email, role

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    token = credentials.credentials
    payload = verify_jwt(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return payload


def get_request_info(request: Request) -> RequestInfo:
    """Request metadata copied onto audit entries"""
    return RequestInfo(
        ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        url=str(request.url),
        method=request.method,
    )


async def get_audit_context(
    current_user: dict = Depends(get_current_user),
    request_info: RequestInfo = Depends(get_request_info),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> AuditContext:
    """
    Actor and request context of an authenticated call.

    The account is re-read on every request. Deleted and deactivated
    accounts are rejected; the actor carries the stored name and role.

    Raises:
        HTTPException: 401 if the token lacks identity claims or the
            account no longer exists, 403 if the account is deactivated
    """
    try:
        user_id = int(current_user["user_id"])
    except (KeyError, TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    async with uow:
        user = await uow.users.get_by_id(user_id)
        if user is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Account no longer exists",
            )
        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Your account has been deactivated",
            )
        actor = actor_from_user(user)

    return AuditContext(actor=actor, request=request_info)
