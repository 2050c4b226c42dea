"""
AuditEntry Entity

Append-only record of an action performed on a resource.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from dctrack.domain.base import utcnow
from .enums import AuditAction, AuditSeverity


class AuditEntry(SQLModel, table=True):
    """
    AuditEntry entity - immutable log of changes and security events.

    Business Rules:
    - Never updated; removed only by the administrative clear operation
    - Actor fields are a snapshot, NULL for anonymous/system actions
    - old_values/new_values only for actions that mutate state
    - Request fields are NULL outside an HTTP request
    """

    __tablename__ = "audit_entries"

    id: Optional[int] = Field(default=None, primary_key=True)

    # Actor snapshot
    actor_id: Optional[int] = Field(default=None)
    actor_name: Optional[str] = Field(default=None, max_length=255)
    actor_email: Optional[str] = Field(default=None, max_length=255)
    actor_role: Optional[str] = Field(default=None, max_length=50)

    # Action details
    action: AuditAction = Field(nullable=False)
    resource_type: str = Field(max_length=100)
    resource_id: Optional[str] = Field(default=None, max_length=255)

    # Data changes
    old_values: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))
    new_values: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))

    # Request information
    ip_address: Optional[str] = Field(default=None, max_length=45)
    user_agent: Optional[str] = Field(default=None)
    request_url: Optional[str] = Field(default=None)
    http_method: Optional[str] = Field(default=None, max_length=10)

    severity: AuditSeverity = Field(default=AuditSeverity.low, nullable=False)
    description: str = Field(default="")
    entry_metadata: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_entry_actor_created", "actor_id", "created_at"),
        Index("idx_audit_entry_action_created", "action", "created_at"),
        Index("idx_audit_entry_resource_created", "resource_type", "created_at"),
        Index("idx_audit_entry_severity_created", "severity", "created_at"),
        Index("idx_audit_entry_created_at", "created_at"),
    )
