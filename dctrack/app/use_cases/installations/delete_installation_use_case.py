"""
Delete Installation Use Case

Soft-deletes an installation and removes its attached files.
"""

import logging

from dctrack.libs.result import Error, Result, Return
from dctrack.app.services.auditor import Auditor
from dctrack.app.services.file_storage import IFileStorage
from dctrack.app.services.security import has_role
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.base import utcnow
from dctrack.domain.context import AuditContext
from dctrack.domain.entities import UserType
from .dtos import DeleteInstallationResponse

logger = logging.getLogger(__name__)


class DeleteInstallationUseCase:
    """
    Use case for deleting an installation.

    Business Rules:
    - Caller must be an Admin
    - Record is soft-deleted (deleted_at set), its sr_no stays reserved
    - Attached files and additional documents are removed from storage
    - DELETE entry keeps the record's last attributes
    """

    def __init__(self, uow: UnitOfWork, storage: IFileStorage):
        self.uow = uow
        self.storage = storage

    async def execute(
        self, context: AuditContext, installation_id: int
    ) -> Result[DeleteInstallationResponse]:
        async with self.uow:
            if not has_role(context, UserType.admin):
                return Return.err(
                    Error(
                        "INSUFFICIENT_ROLE",
                        "You do not have permission to manage installations",
                    )
                )

            installation = await self.uow.installations.get_by_id(installation_id)
            if installation is None:
                return Return.err(Error("INSTALLATION_NOT_FOUND", "Installation not found"))

            snapshot = installation.auditable_attributes()
            paths = list(installation.attached_files().values())
            paths.extend(installation.additional_documents or [])

            installation.deleted_at = utcnow()
            installation.updated_by = context.actor.name
            installation = await self.uow.installations.update(installation)
            await self.uow.commit()

            files_removed = 0
            for path in paths:
                try:
                    if self.storage.delete(path):
                        files_removed += 1
                except (OSError, ValueError):
                    logger.exception(
                        f"Failed to remove file {path} of installation {installation.sr_no}"
                    )

            await Auditor(self.uow).on_deleted(installation, context, snapshot)

            return Return.ok(
                DeleteInstallationResponse(
                    status="deleted",
                    message=f"DC Installation #{installation.sr_no} deleted",
                    files_removed=files_removed,
                )
            )
