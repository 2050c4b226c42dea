"""
Auditor Service

Lifecycle hooks for Auditable entities. Use cases call these after the
entity change has been committed; the entity's own audit policy decides
whether an entry is written and what it contains.
"""

from typing import Any, Dict, Mapping, Optional

from dctrack.app.services.audit_log import AuditLog
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.context import AuditContext
from dctrack.domain.entities import (
    AuditAction,
    AuditEntry,
    AuditSeverity,
    Auditable,
    diff,
)


class Auditor:
    """
    Turns entity lifecycle notifications into audit entries.

    Business Rules:
    - At most one entry per notification
    - Create and delete store the full auditable snapshot, update stores a diff
    - Updates that only touch excluded fields write nothing
    """

    def __init__(self, uow: UnitOfWork):
        self.audit_log = AuditLog(uow)

    async def on_created(
        self, entity: Auditable, context: AuditContext
    ) -> Optional[AuditEntry]:
        action = AuditAction.create
        if not entity.should_audit(action, context):
            return None

        return await self.audit_log.log_create(
            context,
            entity.resource_type(),
            entity.audit_identifier(),
            entity.auditable_attributes(),
            description=entity.audit_description(action),
            severity=entity.audit_severity(action),
        )

    async def on_updated(
        self,
        entity: Auditable,
        before: Mapping[str, Any],
        context: AuditContext,
    ) -> Optional[AuditEntry]:
        """
        Args:
            entity: The entity in its committed, updated state
            before: entity.audit_snapshot() taken before the change
            context: Actor and request context
        """
        action = AuditAction.update
        old_values, new_values = diff(
            before, entity.audit_snapshot(), entity.excluded_audit_fields()
        )

        if not old_values and not new_values:
            return None

        if not entity.should_audit(action, context, frozenset(new_values)):
            return None

        return await self.audit_log.log_update(
            context,
            entity.resource_type(),
            entity.audit_identifier(),
            old_values,
            new_values,
            description=entity.audit_description(action),
            severity=entity.audit_severity(action),
        )

    async def on_deleted(
        self,
        entity: Auditable,
        context: AuditContext,
        snapshot: Optional[Dict[str, Any]] = None,
    ) -> Optional[AuditEntry]:
        """
        Args:
            snapshot: entity.auditable_attributes() taken before removal.
                Defaults to the entity's current attributes.
        """
        action = AuditAction.delete
        if not entity.should_audit(action, context):
            return None

        old_values = snapshot if snapshot is not None else entity.auditable_attributes()
        return await self.audit_log.log_delete(
            context,
            entity.resource_type(),
            entity.audit_identifier(),
            old_values,
            description=entity.audit_description(action),
            severity=entity.audit_severity(action),
        )

    async def audit_view(
        self,
        entity: Auditable,
        context: AuditContext,
        description: Optional[str] = None,
    ) -> Optional[AuditEntry]:
        if not context.is_authenticated:
            return None

        return await self.audit_log.log_view(
            context,
            entity.resource_type(),
            entity.audit_identifier(),
            description or entity.audit_description(AuditAction.view),
        )

    async def audit_download(
        self,
        entity: Auditable,
        context: AuditContext,
        description: Optional[str] = None,
    ) -> Optional[AuditEntry]:
        if not context.is_authenticated:
            return None

        return await self.audit_log.log_download(
            context,
            entity.resource_type(),
            entity.audit_identifier(),
            description or entity.audit_description(AuditAction.download),
        )

    async def audit_share(
        self,
        entity: Auditable,
        context: AuditContext,
        description: Optional[str] = None,
    ) -> Optional[AuditEntry]:
        if not context.is_authenticated:
            return None

        return await self.audit_log.create_entry(
            context,
            action=AuditAction.share,
            resource_type=entity.resource_type(),
            resource_id=entity.audit_identifier(),
            severity=AuditSeverity.medium,
            description=description or entity.audit_description(AuditAction.share),
        )
