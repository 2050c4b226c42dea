"""
Get Installation Use Case
"""

from dctrack.libs.result import Error, Result, Return
from dctrack.app.services.auditor import Auditor
from dctrack.app.services.file_storage import IFileStorage
from dctrack.app.services.security import has_role
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.context import AuditContext
from dctrack.domain.entities import UserType
from .dtos import InstallationResponse


class GetInstallationUseCase:
    """
    Use case for viewing one installation.

    Business Rules:
    - Any signed-in role may view
    - Soft-deleted installations are not found
    - Every view is recorded (VIEW, low)
    """

    def __init__(self, uow: UnitOfWork, storage: IFileStorage):
        self.uow = uow
        self.storage = storage

    async def execute(
        self, context: AuditContext, installation_id: int
    ) -> Result[InstallationResponse]:
        async with self.uow:
            if not has_role(context, UserType.admin, UserType.client, UserType.user):
                return Return.err(
                    Error("INSUFFICIENT_ROLE", "You do not have permission to view installations")
                )

            installation = await self.uow.installations.get_by_id(installation_id)
            if installation is None:
                return Return.err(Error("INSTALLATION_NOT_FOUND", "Installation not found"))

            await Auditor(self.uow).audit_view(
                installation, context, installation.view_description()
            )

            return Return.ok(InstallationResponse.from_entity(installation, self.storage))
