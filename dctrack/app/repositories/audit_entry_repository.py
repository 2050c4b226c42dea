from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel

from dctrack.domain.entities import AuditAction, AuditEntry, AuditSeverity


class AuditFilters(BaseModel):
    """
    Optional, independent predicates ANDed into an audit query.

    A None field means "no filter". Use parse_audit_filters() to build one
    from raw query-string values.
    """

    action: Optional[AuditAction] = None
    resource_type: Optional[str] = None
    severity: Optional[AuditSeverity] = None
    actor_id: Optional[int] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    search: Optional[str] = None


class AuditPage(BaseModel):
    """One page of audit entries, newest first"""

    entries: List[AuditEntry]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        if self.total == 0:
            return 1
        return (self.total + self.per_page - 1) // self.per_page


class IAuditEntryRepository(ABC):
    """AuditEntry repository interface - application layer"""

    @abstractmethod
    async def create(self, entry: AuditEntry) -> AuditEntry:
        """Insert a new audit entry (immutable)"""
        pass

    @abstractmethod
    async def find_many(
        self, filters: AuditFilters, page: int = 1, per_page: int = 25
    ) -> AuditPage:
        """
        Get audit entries matching all filters with page-based pagination.

        Entries are ordered by created_at DESC, then id DESC.
        """
        pass

    @abstractmethod
    async def delete_all(self) -> int:
        """Remove every audit entry, returns number removed"""
        pass

    @abstractmethod
    async def delete_older_than(self, cutoff: datetime) -> int:
        """Remove entries created before cutoff, returns number removed"""
        pass
