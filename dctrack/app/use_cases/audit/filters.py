"""
Audit query-string parsing.

Every filter is optional. "all", blank strings and malformed values are
treated as absent so a bad query never turns into an error.
"""

from datetime import date
from enum import Enum
from typing import Optional, Type, TypeVar

from dctrack.app.repositories.audit_entry_repository import AuditFilters
from dctrack.domain.entities import AuditAction, AuditSeverity

E = TypeVar("E", bound=Enum)


def _clean(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    value = raw.strip()
    if value == "" or value.lower() == "all":
        return None
    return value


def _parse_enum(enum_cls: Type[E], raw: Optional[str]) -> Optional[E]:
    value = _clean(raw)
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _parse_int(raw: Optional[str]) -> Optional[int]:
    value = _clean(raw)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _parse_date(raw: Optional[str]) -> Optional[date]:
    value = _clean(raw)
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def parse_audit_filters(
    action: Optional[str] = None,
    resource: Optional[str] = None,
    severity: Optional[str] = None,
    user: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    search: Optional[str] = None,
) -> AuditFilters:
    """
    Build AuditFilters from raw query-string values.

    >>> parse_audit_filters(action="all", severity="high").severity
    <AuditSeverity.high: 'high'>
    >>> parse_audit_filters(user="abc").actor_id is None
    True
    """
    return AuditFilters(
        action=_parse_enum(AuditAction, action),
        resource_type=_clean(resource),
        severity=_parse_enum(AuditSeverity, severity),
        actor_id=_parse_int(user),
        date_from=_parse_date(date_from),
        date_to=_parse_date(date_to),
        search=_clean(search),
    )
