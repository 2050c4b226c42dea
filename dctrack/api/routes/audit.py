"""
Audit API Routes

Handles audit trail retrieval and cleanup endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from config import ApplicationConfig
from dctrack.api.error import ClientError, ServerError
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.app.use_cases.audit import (
    AuditEntriesResponse,
    ClearAuditEntriesResponse,
    ClearAuditEntriesUseCase,
    ListAuditEntriesUseCase,
    parse_audit_filters,
)
from dctrack.depends import get_audit_context, get_unit_of_work
from dctrack.domain.context import AuditContext

router = APIRouter(prefix="/audit", tags=["Audit"])


@router.get("", status_code=status.HTTP_200_OK, response_model=AuditEntriesResponse)
async def get_audit_entries(
    context: AuditContext = Depends(get_audit_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    action: Optional[str] = Query(None, description="Action, e.g. LOGIN_FAILED, or 'all'"),
    resource: Optional[str] = Query(None, description="Resource type, e.g. DCInstallation"),
    severity: Optional[str] = Query(None, description="low, medium, high, critical or 'all'"),
    user: Optional[str] = Query(None, description="Actor user ID"),
    date_from: Optional[str] = Query(None, description="YYYY-MM-DD, inclusive"),
    date_to: Optional[str] = Query(None, description="YYYY-MM-DD, inclusive"),
    search: Optional[str] = Query(None, description="Matches description, resource ID, actor name/email"),
    page: int = Query(1, ge=1),
    per_page: int = Query(
        ApplicationConfig.AUDIT_PAGE_SIZE,
        ge=1,
        le=ApplicationConfig.AUDIT_MAX_PAGE_SIZE,
    ),
):
    """
    Get Audit Trail (Admin only)

    Filters are optional and ANDed together; "all", blank and malformed
    values are ignored. The access itself is recorded.

    Returns:
        - entries: Audit entries ordered by newest first
        - total, page, per_page, last_page: Pagination details

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: Caller is not an Admin
        - 500 Internal Server Error: Server error
    """
    filters = parse_audit_filters(
        action=action,
        resource=resource,
        severity=severity,
        user=user,
        date_from=date_from,
        date_to=date_to,
        search=search,
    )

    use_case = ListAuditEntriesUseCase(uow)
    result = await use_case.execute(context, filters, page=page, per_page=per_page)

    if result.is_err():
        error = result.error
        if error.code == "INSUFFICIENT_ROLE":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.delete("", status_code=status.HTTP_200_OK, response_model=ClearAuditEntriesResponse)
async def clear_audit_entries(
    context: AuditContext = Depends(get_audit_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    days: Optional[int] = Query(
        None, description="Remove entries older than this many days (30-365); omit to remove all"
    ),
):
    """
    Clear Audit Trail (Admin only)

    Raises:
        - 403 Forbidden: Caller is not an Admin
        - 422 Unprocessable Entity: days outside 30..365
        - 500 Internal Server Error: Server error
    """
    use_case = ClearAuditEntriesUseCase(uow)
    result = await use_case.execute(context, days)

    if result.is_err():
        error = result.error
        if error.code == "INSUFFICIENT_ROLE":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        if error.code == "INVALID_RETENTION_DAYS":
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        raise ServerError(error)

    return result.value
