"""
Audit Use Case DTOs
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from dctrack.domain.entities import AuditAction, AuditEntry, AuditSeverity


class AuditEntryResponse(BaseModel):
    """Single audit entry in response"""

    id: int
    actor_id: Optional[int]
    actor_name: Optional[str]
    actor_email: Optional[str]
    actor_role: Optional[str]
    action: AuditAction
    resource_type: str
    resource_id: Optional[str]
    old_values: Optional[Dict[str, Any]]
    new_values: Optional[Dict[str, Any]]
    ip_address: Optional[str]
    user_agent: Optional[str]
    request_url: Optional[str]
    http_method: Optional[str]
    severity: AuditSeverity
    description: str
    metadata: Optional[Dict[str, Any]]
    created_at: datetime

    @classmethod
    def from_entity(cls, entry: AuditEntry) -> "AuditEntryResponse":
        return cls(
            **entry.model_dump(exclude={"entry_metadata"}),
            metadata=entry.entry_metadata,
        )


class AuditEntriesResponse(BaseModel):
    """GET /audit response payload"""

    entries: List[AuditEntryResponse]
    total: int
    page: int
    per_page: int
    last_page: int


class ClearAuditEntriesResponse(BaseModel):
    """DELETE /audit response payload"""

    deleted_count: int
    days: Optional[int]
    message: str
