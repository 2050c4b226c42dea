"""
Auditable capability

Mixin for SQLModel entities that opt into the audit trail. It exposes the
audit policy of an entity (resource label, identifier, exclusions, severity,
whether an action is audited at all). The Auditor service reads this policy
when a use case reports a committed create/update/delete.
"""

from typing import Any, ClassVar, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from dctrack.domain.context import AuditContext
from .enums import AuditAction, AuditSeverity

# Never part of an audit diff or snapshot
ALWAYS_EXCLUDED: FrozenSet[str] = frozenset({"id", "created_at", "updated_at", "deleted_at"})


def diff(
    before: Mapping[str, Any],
    after: Mapping[str, Any],
    excluded: Iterable[str] = (),
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Compare two plain snapshots of the same entity.

    Args:
        before: Field values prior to the change
        after: Field values after the change
        excluded: Field names that must never appear in the result

    Returns:
        Tuple of (old_values, new_values) holding only the changed,
        non-excluded fields. Both are empty when nothing auditable changed.
    """
    skip = ALWAYS_EXCLUDED | frozenset(excluded)
    keys = list(after) + [key for key in before if key not in after]

    old_values: Dict[str, Any] = {}
    new_values: Dict[str, Any] = {}
    for key in keys:
        if key in skip:
            continue
        if before.get(key) != after.get(key):
            old_values[key] = before.get(key)
            new_values[key] = after.get(key)
    return old_values, new_values


class Auditable:
    """
    Audit policy hooks for an entity.

    Subclasses tune the class-level configuration or override the hook
    methods for richer behaviour (see DCInstallation).
    """

    audit_exclude: ClassVar[Tuple[str, ...]] = ()
    audit_actions: ClassVar[Tuple[AuditAction, ...]] = (
        AuditAction.create,
        AuditAction.update,
        AuditAction.delete,
    )
    audit_severity_map: ClassVar[Dict[AuditAction, AuditSeverity]] = {
        AuditAction.create: AuditSeverity.low,
        AuditAction.update: AuditSeverity.low,
        AuditAction.delete: AuditSeverity.high,
    }
    # Business identifier preferred over the surrogate key, e.g. "sr_no"
    audit_identifier_field: ClassVar[Optional[str]] = None

    def resource_type(self) -> str:
        return type(self).__name__

    def audit_identifier(self) -> str:
        if self.audit_identifier_field:
            value = getattr(self, self.audit_identifier_field, None)
            if value:
                return str(value)
        return str(getattr(self, "id", None))

    def audit_snapshot(self) -> Dict[str, Any]:
        """All field values in JSON form, suitable for diffing and storage"""
        return self.model_dump(mode="json")

    def excluded_audit_fields(self) -> FrozenSet[str]:
        return ALWAYS_EXCLUDED | frozenset(self.audit_exclude)

    def auditable_attributes(self) -> Dict[str, Any]:
        excluded = self.excluded_audit_fields()
        return {
            key: value
            for key, value in self.audit_snapshot().items()
            if key not in excluded
        }

    def should_audit(
        self,
        action: AuditAction,
        context: AuditContext,
        changed_fields: Optional[FrozenSet[str]] = None,
    ) -> bool:
        # System actions (no authenticated actor) are not audited
        if not context.is_authenticated:
            return False
        return action in self.audit_actions

    def audit_description(self, action: AuditAction) -> str:
        verb = action.past_tense.capitalize()
        return f"{verb} {self.resource_type()} #{self.audit_identifier()}"

    def audit_severity(self, action: AuditAction) -> AuditSeverity:
        return self.audit_severity_map.get(action, AuditSeverity.low)
