from datetime import datetime, time, timedelta

from sqlalchemy import delete, func, or_
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from dctrack.app.repositories.audit_entry_repository import (
    AuditFilters,
    AuditPage,
    IAuditEntryRepository,
)
from dctrack.domain.entities import AuditEntry
from .search import LIKE_ESCAPE, contains_pattern


class AuditEntryRepository(IAuditEntryRepository):
    """AuditEntry repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: AuditEntry) -> AuditEntry:
        """Insert a new audit entry (immutable)"""
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    @staticmethod
    def _apply_filters(stmt, filters: AuditFilters):
        if filters.action is not None:
            stmt = stmt.where(AuditEntry.action == filters.action)
        if filters.resource_type is not None:
            stmt = stmt.where(AuditEntry.resource_type == filters.resource_type)
        if filters.severity is not None:
            stmt = stmt.where(AuditEntry.severity == filters.severity)
        if filters.actor_id is not None:
            stmt = stmt.where(AuditEntry.actor_id == filters.actor_id)

        # Date bounds are inclusive calendar days
        if filters.date_from is not None:
            start = datetime.combine(filters.date_from, time.min)
            stmt = stmt.where(col(AuditEntry.created_at) >= start)
        if filters.date_to is not None:
            end = datetime.combine(filters.date_to + timedelta(days=1), time.min)
            stmt = stmt.where(col(AuditEntry.created_at) < end)

        if filters.search:
            pattern = contains_pattern(filters.search)
            stmt = stmt.where(
                or_(
                    col(AuditEntry.description).ilike(pattern, escape=LIKE_ESCAPE),
                    col(AuditEntry.resource_id).ilike(pattern, escape=LIKE_ESCAPE),
                    col(AuditEntry.actor_name).ilike(pattern, escape=LIKE_ESCAPE),
                    col(AuditEntry.actor_email).ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        return stmt

    async def find_many(
        self, filters: AuditFilters, page: int = 1, per_page: int = 25
    ) -> AuditPage:
        """
        Get audit entries matching all filters with page-based pagination.

        Ties on created_at are broken by id so insertion order is preserved.
        """
        page = max(page, 1)

        count_stmt = self._apply_filters(
            select(func.count()).select_from(AuditEntry), filters
        )
        total = (await self.session.exec(count_stmt)).one()

        stmt = (
            self._apply_filters(select(AuditEntry), filters)
            .order_by(col(AuditEntry.created_at).desc(), col(AuditEntry.id).desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        result = await self.session.exec(stmt)
        entries = list(result.all())

        return AuditPage(entries=entries, total=total, page=page, per_page=per_page)

    async def delete_all(self) -> int:
        """Remove every audit entry"""
        result = await self.session.execute(delete(AuditEntry))
        return result.rowcount or 0

    async def delete_older_than(self, cutoff: datetime) -> int:
        """Remove entries created before cutoff"""
        stmt = delete(AuditEntry).where(col(AuditEntry.created_at) < cutoff)
        result = await self.session.execute(stmt)
        return result.rowcount or 0
