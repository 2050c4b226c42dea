"""
AuditLog Service

Single funnel for writing audit entries. Callers supply what happened; the
service adds the actor and request context and persists the entry.

Writes are best-effort: the business operation being audited has already
been committed, so a storage failure here is logged and swallowed instead
of being reported to the caller.
"""

import logging
from typing import Any, Dict, Optional, Union

from sqlalchemy.exc import SQLAlchemyError

from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.context import AuditContext
from dctrack.domain.entities import AuditAction, AuditEntry, AuditSeverity

logger = logging.getLogger(__name__)

ResourceId = Union[str, int, None]


class AuditLog:
    """
    Builds and persists AuditEntry records.

    Business Rules:
    - Actor fields are copied from the context, NULL when there is no actor
    - Caller-supplied ip_address/user_agent win over request context values
    - Severity defaults to low
    - Each entry is committed on its own, after the audited change
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def create_entry(
        self,
        context: AuditContext,
        *,
        action: AuditAction,
        resource_type: str,
        resource_id: ResourceId,
        description: str,
        severity: Optional[AuditSeverity] = None,
        old_values: Optional[Dict[str, Any]] = None,
        new_values: Optional[Dict[str, Any]] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Optional[AuditEntry]:
        """
        Persist one audit entry enriched with ambient context.

        Returns:
            The stored entry, or None if the write failed
        """
        actor = context.actor
        request = context.request

        # Explicit values beat request context: on login/logout the caller
        # passes them from the request while the actor is changing
        if ip_address is None and request is not None:
            ip_address = request.ip
        if user_agent is None and request is not None:
            user_agent = request.user_agent

        entry = AuditEntry(
            actor_id=actor.id if actor else None,
            actor_name=actor.name if actor else None,
            actor_email=actor.email if actor else None,
            actor_role=actor.role if actor else None,
            action=action,
            resource_type=resource_type,
            resource_id=None if resource_id is None else str(resource_id),
            old_values=old_values,
            new_values=new_values,
            ip_address=ip_address,
            user_agent=user_agent,
            request_url=request.url if request else None,
            http_method=request.method if request else None,
            severity=severity or AuditSeverity.low,
            description=description,
            entry_metadata=metadata,
        )

        try:
            entry = await self.uow.audit_entries.create(entry)
            await self.uow.commit()
        except SQLAlchemyError:
            logger.exception(
                f"Failed to write audit entry {action.value} {resource_type} #{resource_id}"
            )
            await self.uow.rollback()
            return None

        return entry

    async def log_create(
        self,
        context: AuditContext,
        resource_type: str,
        resource_id: ResourceId,
        new_values: Dict[str, Any],
        description: Optional[str] = None,
        severity: AuditSeverity = AuditSeverity.low,
    ) -> Optional[AuditEntry]:
        return await self.create_entry(
            context,
            action=AuditAction.create,
            resource_type=resource_type,
            resource_id=resource_id,
            new_values=new_values,
            severity=severity,
            description=description or f"Created {resource_type} #{resource_id}",
        )

    async def log_update(
        self,
        context: AuditContext,
        resource_type: str,
        resource_id: ResourceId,
        old_values: Dict[str, Any],
        new_values: Dict[str, Any],
        description: Optional[str] = None,
        severity: AuditSeverity = AuditSeverity.low,
    ) -> Optional[AuditEntry]:
        return await self.create_entry(
            context,
            action=AuditAction.update,
            resource_type=resource_type,
            resource_id=resource_id,
            old_values=old_values,
            new_values=new_values,
            severity=severity,
            description=description or f"Updated {resource_type} #{resource_id}",
        )

    async def log_delete(
        self,
        context: AuditContext,
        resource_type: str,
        resource_id: ResourceId,
        old_values: Dict[str, Any],
        description: Optional[str] = None,
        severity: AuditSeverity = AuditSeverity.high,
    ) -> Optional[AuditEntry]:
        return await self.create_entry(
            context,
            action=AuditAction.delete,
            resource_type=resource_type,
            resource_id=resource_id,
            old_values=old_values,
            severity=severity,
            description=description or f"Deleted {resource_type} #{resource_id}",
        )

    async def log_view(
        self,
        context: AuditContext,
        resource_type: str,
        resource_id: ResourceId,
        description: Optional[str] = None,
    ) -> Optional[AuditEntry]:
        return await self.create_entry(
            context,
            action=AuditAction.view,
            resource_type=resource_type,
            resource_id=resource_id,
            severity=AuditSeverity.low,
            description=description or f"Viewed {resource_type} #{resource_id}",
        )

    async def log_download(
        self,
        context: AuditContext,
        resource_type: str,
        resource_id: ResourceId,
        description: Optional[str] = None,
    ) -> Optional[AuditEntry]:
        return await self.create_entry(
            context,
            action=AuditAction.download,
            resource_type=resource_type,
            resource_id=resource_id,
            severity=AuditSeverity.medium,
            description=description or f"Downloaded files for {resource_type} #{resource_id}",
        )

    async def log_login(
        self,
        context: AuditContext,
        description: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Optional[AuditEntry]:
        return await self.create_entry(
            context,
            action=AuditAction.login,
            resource_type="User",
            resource_id=context.actor.id if context.actor else None,
            severity=AuditSeverity.low,
            description=description or "User logged in",
            ip_address=ip_address,
            user_agent=user_agent,
        )

    async def log_logout(
        self,
        context: AuditContext,
        description: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Optional[AuditEntry]:
        return await self.create_entry(
            context,
            action=AuditAction.logout,
            resource_type="User",
            resource_id=context.actor.id if context.actor else None,
            severity=AuditSeverity.low,
            description=description or "User logged out",
            ip_address=ip_address,
            user_agent=user_agent,
        )

    async def log_failed_login(
        self,
        context: AuditContext,
        email: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Optional[AuditEntry]:
        """Failed login by email. Nobody is authenticated, so no actor is recorded."""
        return await self.create_entry(
            AuditContext.anonymous(context.request),
            action=AuditAction.login_failed,
            resource_type="User",
            resource_id=email,
            severity=AuditSeverity.medium,
            description=description or f"Failed login attempt for {email}",
            ip_address=ip_address,
            user_agent=user_agent,
        )

    async def log_password_confirmation(
        self,
        context: AuditContext,
        confirmed: bool,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Optional[AuditEntry]:
        actor = context.actor
        name = actor.name if actor else "unknown"
        if confirmed:
            action = AuditAction.password_confirmed
            severity = AuditSeverity.low
            description = f"Password confirmed for user: {name}"
        else:
            action = AuditAction.password_confirm_failed
            severity = AuditSeverity.medium
            description = f"Failed password confirmation for user: {name}"

        return await self.create_entry(
            context,
            action=action,
            resource_type="User",
            resource_id=actor.id if actor else None,
            severity=severity,
            description=description,
            ip_address=ip_address,
            user_agent=user_agent,
        )
