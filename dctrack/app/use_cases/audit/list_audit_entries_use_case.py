"""
List Audit Entries Use Case

Retrieves the audit trail with filters and page-based pagination.
"""

from dctrack.libs.result import Error, Result, Return
from dctrack.app.repositories.audit_entry_repository import AuditFilters
from dctrack.app.services.audit_log import AuditLog
from dctrack.app.services.security import has_role
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.context import AuditContext
from dctrack.domain.entities import AuditAction, AuditSeverity, UserType
from .dtos import AuditEntriesResponse, AuditEntryResponse

MAX_PER_PAGE = 100


class ListAuditEntriesUseCase:
    """
    Use case for reading the audit trail.

    Business Rules:
    - Caller must be an Admin
    - Access is itself recorded (VIEW System/audit_trail, high) with the
      applied filters, before the query runs
    - Entries ordered by newest first
    - per_page is clamped to 1..100
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        context: AuditContext,
        filters: AuditFilters,
        page: int = 1,
        per_page: int = 25,
    ) -> Result[AuditEntriesResponse]:
        """
        Execute list audit entries use case.

        Args:
            context: Actor and request context
            filters: Parsed query filters
            page: 1-based page number
            per_page: Page size

        Returns:
            Result with AuditEntriesResponse, or Error
        """
        async with self.uow:
            if not has_role(context, UserType.admin):
                return Return.err(
                    Error(
                        "INSUFFICIENT_ROLE",
                        "You do not have permission to view audit entries",
                    )
                )

            page = max(page, 1)
            per_page = min(max(per_page, 1), MAX_PER_PAGE)

            await AuditLog(self.uow).create_entry(
                context,
                action=AuditAction.view,
                resource_type="System",
                resource_id="audit_trail",
                severity=AuditSeverity.high,
                description="Admin accessed audit trail",
                metadata={"filters": filters.model_dump(mode="json", exclude_none=True)},
            )

            result = await self.uow.audit_entries.find_many(
                filters, page=page, per_page=per_page
            )

            return Return.ok(
                AuditEntriesResponse(
                    entries=[AuditEntryResponse.from_entity(e) for e in result.entries],
                    total=result.total,
                    page=result.page,
                    per_page=result.per_page,
                    last_page=result.last_page,
                )
            )
