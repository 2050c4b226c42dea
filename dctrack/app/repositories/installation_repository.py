from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic import BaseModel

from dctrack.domain.entities import (
    DCInstallation,
    DeliveryStatus,
    InstallationStatus,
    Priority,
)


class InstallationFilters(BaseModel):
    """Optional predicates for listing installations"""

    delivery_status: Optional[DeliveryStatus] = None
    installation_status: Optional[InstallationStatus] = None
    priority: Optional[Priority] = None
    search: Optional[str] = None


class IInstallationRepository(ABC):
    """DCInstallation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, installation_id: int) -> Optional[DCInstallation]:
        """Get a non-deleted installation by ID"""
        pass

    @abstractmethod
    async def get_by_sr_no(self, sr_no: str) -> Optional[DCInstallation]:
        """Get installation by serial number, soft-deleted included"""
        pass

    @abstractmethod
    async def get_latest_sr_no(self) -> Optional[str]:
        """sr_no of the most recently inserted record, soft-deleted included"""
        pass

    @abstractmethod
    async def find_many(
        self, filters: InstallationFilters, limit: int = 50, offset: int = 0
    ) -> List[DCInstallation]:
        """List non-deleted installations, newest first"""
        pass

    @abstractmethod
    async def create(self, installation: DCInstallation) -> DCInstallation:
        """Create a new installation"""
        pass

    @abstractmethod
    async def update(self, installation: DCInstallation) -> DCInstallation:
        """Update existing installation"""
        pass
