from typing import List, Optional

from sqlalchemy import or_
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from dctrack.app.repositories.installation_repository import (
    IInstallationRepository,
    InstallationFilters,
)
from dctrack.domain.entities import DCInstallation
from .search import LIKE_ESCAPE, contains_pattern


class InstallationRepository(IInstallationRepository):
    """DCInstallation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, installation_id: int) -> Optional[DCInstallation]:
        """Get a non-deleted installation by ID"""
        stmt = select(DCInstallation).where(
            DCInstallation.id == installation_id,
            col(DCInstallation.deleted_at).is_(None),
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_sr_no(self, sr_no: str) -> Optional[DCInstallation]:
        """Get installation by serial number, soft-deleted included"""
        stmt = select(DCInstallation).where(DCInstallation.sr_no == sr_no)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_latest_sr_no(self) -> Optional[str]:
        """sr_no of the most recently inserted record, soft-deleted included"""
        stmt = (
            select(DCInstallation.sr_no)
            .order_by(col(DCInstallation.id).desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def find_many(
        self, filters: InstallationFilters, limit: int = 50, offset: int = 0
    ) -> List[DCInstallation]:
        """List non-deleted installations, newest first"""
        stmt = select(DCInstallation).where(col(DCInstallation.deleted_at).is_(None))

        if filters.delivery_status is not None:
            stmt = stmt.where(DCInstallation.delivery_status == filters.delivery_status)
        if filters.installation_status is not None:
            stmt = stmt.where(
                DCInstallation.installation_status == filters.installation_status
            )
        if filters.priority is not None:
            stmt = stmt.where(DCInstallation.priority == filters.priority)
        if filters.search:
            pattern = contains_pattern(filters.search)
            stmt = stmt.where(
                or_(
                    col(DCInstallation.sr_no).ilike(pattern, escape=LIKE_ESCAPE),
                    col(DCInstallation.receiver_name).ilike(pattern, escape=LIKE_ESCAPE),
                    col(DCInstallation.region_division).ilike(pattern, escape=LIKE_ESCAPE),
                    col(DCInstallation.district).ilike(pattern, escape=LIKE_ESCAPE),
                    col(DCInstallation.tahsil).ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        stmt = (
            stmt.order_by(col(DCInstallation.created_at).desc(), col(DCInstallation.id).desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, installation: DCInstallation) -> DCInstallation:
        """Create a new installation"""
        self.session.add(installation)
        await self.session.flush()
        await self.session.refresh(installation)
        return installation

    async def update(self, installation: DCInstallation) -> DCInstallation:
        """Update existing installation"""
        self.session.add(installation)
        await self.session.flush()
        await self.session.refresh(installation)
        return installation
