"""
List Installations Use Case
"""

from enum import Enum
from typing import Optional, Type, TypeVar

from dctrack.libs.result import Error, Result, Return
from dctrack.app.repositories.installation_repository import InstallationFilters
from dctrack.app.services.file_storage import IFileStorage
from dctrack.app.services.security import has_role
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.context import AuditContext
from dctrack.domain.entities import (
    DeliveryStatus,
    InstallationStatus,
    Priority,
    UserType,
)
from .dtos import InstallationListResponse, InstallationResponse

E = TypeVar("E", bound=Enum)


def _enum_or_none(enum_cls: Type[E], raw: Optional[str]) -> Optional[E]:
    if raw is None or raw.strip() in ("", "all"):
        return None
    try:
        return enum_cls(raw.strip())
    except ValueError:
        return None


def parse_installation_filters(
    delivery_status: Optional[str] = None,
    installation_status: Optional[str] = None,
    priority: Optional[str] = None,
    search: Optional[str] = None,
) -> InstallationFilters:
    """Build filters from query-string values; "all", blank and unknown values are ignored"""
    return InstallationFilters(
        delivery_status=_enum_or_none(DeliveryStatus, delivery_status),
        installation_status=_enum_or_none(InstallationStatus, installation_status),
        priority=_enum_or_none(Priority, priority),
        search=search.strip() if search and search.strip() else None,
    )


class ListInstallationsUseCase:
    """
    Use case for listing installations.

    Business Rules:
    - Any signed-in role may list
    - Soft-deleted installations are hidden
    - Newest first
    """

    def __init__(self, uow: UnitOfWork, storage: IFileStorage):
        self.uow = uow
        self.storage = storage

    async def execute(
        self,
        context: AuditContext,
        filters: InstallationFilters,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[InstallationListResponse]:
        async with self.uow:
            if not has_role(context, UserType.admin, UserType.client, UserType.user):
                return Return.err(
                    Error("INSUFFICIENT_ROLE", "You do not have permission to view installations")
                )

            installations = await self.uow.installations.find_many(
                filters, limit=limit, offset=offset
            )
            return Return.ok(
                InstallationListResponse(
                    installations=[
                        InstallationResponse.from_entity(installation, self.storage)
                        for installation in installations
                    ],
                    limit=limit,
                    offset=offset,
                )
            )
