"""
Create Installation Use Case

Registers a new DC installation and assigns its serial number.
"""

import logging

from dctrack.libs.result import Error, Result, Return
from dctrack.app.services.auditor import Auditor
from dctrack.app.services.file_storage import IFileStorage
from dctrack.app.services.security import has_role
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.context import AuditContext
from dctrack.domain.entities import DCInstallation, UserType, next_sr_no
from .dtos import InstallationCommand, InstallationResponse

logger = logging.getLogger(__name__)


class CreateInstallationUseCase:
    """
    Use case for creating an installation.

    Business Rules:
    - Caller must be an Admin
    - sr_no, when supplied, must be unique
    - sr_no, when omitted, follows the most recent record (DC-0001-IN, ...)
    - CREATE entry written after the record is committed
    """

    def __init__(self, uow: UnitOfWork, storage: IFileStorage):
        self.uow = uow
        self.storage = storage

    async def execute(
        self, context: AuditContext, command: InstallationCommand
    ) -> Result[InstallationResponse]:
        """
        Execute create installation use case.

        Args:
            context: Actor and request context
            command: Validated installation fields

        Returns:
            Result with InstallationResponse, or Error
        """
        async with self.uow:
            if not has_role(context, UserType.admin):
                return Return.err(
                    Error(
                        "INSUFFICIENT_ROLE",
                        "You do not have permission to manage installations",
                    )
                )

            if command.sr_no:
                existing = await self.uow.installations.get_by_sr_no(command.sr_no)
                if existing is not None:
                    return Return.err(
                        Error("SR_NO_ALREADY_EXISTS", f"Serial number {command.sr_no} is taken")
                    )
                sr_no = command.sr_no
            else:
                sr_no = next_sr_no(await self.uow.installations.get_latest_sr_no())

            installation = DCInstallation(
                **command.model_dump(exclude={"sr_no"}),
                sr_no=sr_no,
                created_by=context.actor.name,
                updated_by=context.actor.name,
            )
            installation = await self.uow.installations.create(installation)
            await self.uow.commit()
            logger.info(f"Installation {installation.sr_no} created by {context.actor.id}")

            await Auditor(self.uow).on_created(installation, context)

            return Return.ok(InstallationResponse.from_entity(installation, self.storage))
