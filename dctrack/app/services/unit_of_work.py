from abc import ABC, abstractmethod

from dctrack.app.repositories.audit_entry_repository import IAuditEntryRepository
from dctrack.app.repositories.installation_repository import IInstallationRepository
from dctrack.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    installations: IInstallationRepository
    audit_entries: IAuditEntryRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
