"""
Update Installation Use Case
"""

from dctrack.libs.result import Error, Result, Return
from dctrack.app.services.auditor import Auditor
from dctrack.app.services.file_storage import IFileStorage
from dctrack.app.services.security import has_role
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.base import utcnow
from dctrack.domain.context import AuditContext
from dctrack.domain.entities import UserType
from .dtos import InstallationCommand, InstallationResponse


class UpdateInstallationUseCase:
    """
    Use case for updating an installation.

    Business Rules:
    - Caller must be an Admin or a Client
    - Only fields present in the command are applied
    - sr_no stays unique
    - An UPDATE entry is written only when an important field changed
    """

    def __init__(self, uow: UnitOfWork, storage: IFileStorage):
        self.uow = uow
        self.storage = storage

    async def execute(
        self,
        context: AuditContext,
        installation_id: int,
        command: InstallationCommand,
    ) -> Result[InstallationResponse]:
        """
        Execute update installation use case.

        Args:
            context: Actor and request context
            installation_id: ID of the installation to update
            command: Fields to change

        Returns:
            Result with InstallationResponse, or Error
        """
        async with self.uow:
            if not has_role(context, UserType.admin, UserType.client):
                return Return.err(
                    Error(
                        "INSUFFICIENT_ROLE",
                        "You do not have permission to manage installations",
                    )
                )

            installation = await self.uow.installations.get_by_id(installation_id)
            if installation is None:
                return Return.err(Error("INSTALLATION_NOT_FOUND", "Installation not found"))

            changes = command.model_dump(exclude_unset=True)

            new_sr_no = changes.pop("sr_no", None)
            if new_sr_no and new_sr_no != installation.sr_no:
                existing = await self.uow.installations.get_by_sr_no(new_sr_no)
                if existing is not None:
                    return Return.err(
                        Error("SR_NO_ALREADY_EXISTS", f"Serial number {new_sr_no} is taken")
                    )
                changes["sr_no"] = new_sr_no

            before = installation.audit_snapshot()

            for field, value in changes.items():
                setattr(installation, field, value)
            installation.updated_by = context.actor.name
            installation.updated_at = utcnow()

            installation = await self.uow.installations.update(installation)
            await self.uow.commit()

            await Auditor(self.uow).on_updated(installation, before, context)

            return Return.ok(InstallationResponse.from_entity(installation, self.storage))
