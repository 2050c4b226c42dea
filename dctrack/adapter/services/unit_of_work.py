from sqlmodel.ext.asyncio.session import AsyncSession

from dctrack.adapter.repositories.audit_entry_repository import AuditEntryRepository
from dctrack.adapter.repositories.installation_repository import InstallationRepository
from dctrack.adapter.repositories.user_repository import UserRepository
from dctrack.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.installations = InstallationRepository(self.session)
        self.audit_entries = AuditEntryRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
