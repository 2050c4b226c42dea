"""
Clear Audit Entries Use Case

Removes old (or all) audit entries and records that it did so.
"""

import logging
from datetime import timedelta
from typing import Optional

from dctrack.libs.result import Error, Result, Return
from dctrack.app.services.audit_log import AuditLog
from dctrack.app.services.security import has_role
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.base import utcnow
from dctrack.domain.context import AuditContext
from dctrack.domain.entities import AuditAction, AuditSeverity, UserType
from .dtos import ClearAuditEntriesResponse

logger = logging.getLogger(__name__)

MIN_RETENTION_DAYS = 30
MAX_RETENTION_DAYS = 365


class ClearAuditEntriesUseCase:
    """
    Use case for purging the audit trail.

    Business Rules:
    - Caller must be an Admin
    - days, when given, must be within 30..365; entries older than that go
    - Without days every entry goes
    - The clear is recorded afterwards (DELETE System/audit_logs, critical)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, context: AuditContext, days: Optional[int] = None
    ) -> Result[ClearAuditEntriesResponse]:
        """
        Execute clear audit entries use case.

        Args:
            context: Actor and request context
            days: Retention window in days, or None to remove everything

        Returns:
            Result with ClearAuditEntriesResponse, or Error
        """
        async with self.uow:
            if not has_role(context, UserType.admin):
                return Return.err(
                    Error(
                        "INSUFFICIENT_ROLE",
                        "You do not have permission to clear audit entries",
                    )
                )

            if days is not None and not MIN_RETENTION_DAYS <= days <= MAX_RETENTION_DAYS:
                return Return.err(
                    Error(
                        "INVALID_RETENTION_DAYS",
                        f"days must be between {MIN_RETENTION_DAYS} and {MAX_RETENTION_DAYS}",
                    )
                )

            if days is None:
                deleted_count = await self.uow.audit_entries.delete_all()
                description = f"Admin cleared all {deleted_count} audit log entries"
            else:
                cutoff = utcnow() - timedelta(days=days)
                deleted_count = await self.uow.audit_entries.delete_older_than(cutoff)
                description = (
                    f"Admin cleared {deleted_count} audit log entries older than {days} days"
                )
            await self.uow.commit()
            logger.warning(f"{description} (actor {context.actor.id})")

            await AuditLog(self.uow).create_entry(
                context,
                action=AuditAction.delete,
                resource_type="System",
                resource_id="audit_logs",
                severity=AuditSeverity.critical,
                description=description,
                metadata={"deleted_count": deleted_count, "days": days},
            )

            return Return.ok(
                ClearAuditEntriesResponse(
                    deleted_count=deleted_count,
                    days=days,
                    message=f"Successfully cleared {deleted_count} audit log entries.",
                )
            )
