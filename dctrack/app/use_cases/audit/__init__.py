"""
Audit Use Cases

All audit-trail administration logic.
"""

from .filters import parse_audit_filters
from .list_audit_entries_use_case import ListAuditEntriesUseCase
from .clear_audit_entries_use_case import ClearAuditEntriesUseCase
from .dtos import (
    AuditEntriesResponse,
    AuditEntryResponse,
    ClearAuditEntriesResponse,
)

__all__ = [
    # Use Cases
    "ListAuditEntriesUseCase",
    "ClearAuditEntriesUseCase",
    # Helpers
    "parse_audit_filters",
    # DTOs - Responses
    "AuditEntriesResponse",
    "AuditEntryResponse",
    "ClearAuditEntriesResponse",
]
