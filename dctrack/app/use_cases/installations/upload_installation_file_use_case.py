"""
Upload Installation File Use Case

Stores an attachment for an installation and points the record at it.
"""

import logging
from pathlib import PurePosixPath

from dctrack.libs.result import Error, Result, Return
from dctrack.app.services.auditor import Auditor
from dctrack.app.services.file_storage import IFileStorage
from dctrack.app.services.security import has_role
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.base import utcnow
from dctrack.domain.context import AuditContext
from dctrack.domain.entities import (
    ADDITIONAL_DOCUMENTS,
    MAX_UPLOAD_BYTES,
    UPLOAD_EXTENSIONS,
    UserType,
)
from .dtos import InstallationResponse

logger = logging.getLogger(__name__)


class UploadInstallationFileUseCase:
    """
    Use case for uploading an installation attachment.

    Business Rules:
    - Caller must be an Admin or a Client
    - file_type is one of the attachment fields or additional_documents
    - The extension must be accepted for that field, size at most 10 MB
    - Attachment fields hold one file; the replaced file is removed after commit
    - additional_documents collects any number of files
    - The record change goes through the Auditor like any other update
    """

    def __init__(self, uow: UnitOfWork, storage: IFileStorage):
        self.uow = uow
        self.storage = storage

    async def execute(
        self,
        context: AuditContext,
        installation_id: int,
        file_type: str,
        filename: str,
        content: bytes,
    ) -> Result[InstallationResponse]:
        """
        Execute upload installation file use case.

        Args:
            context: Actor and request context
            installation_id: ID of the installation
            file_type: Attachment field (e.g. delivery_report_file) or additional_documents
            filename: Client-side file name, only its extension is kept
            content: File bytes

        Returns:
            Result with the updated InstallationResponse, or Error
        """
        async with self.uow:
            if not has_role(context, UserType.admin, UserType.client):
                return Return.err(
                    Error(
                        "INSUFFICIENT_ROLE",
                        "You do not have permission to upload installation files",
                    )
                )

            allowed = UPLOAD_EXTENSIONS.get(file_type)
            if allowed is None:
                return Return.err(Error("INVALID_FILE_TYPE", f"Unknown file type: {file_type}"))

            extension = PurePosixPath(filename).suffix.lower().lstrip(".")
            if extension not in allowed:
                return Return.err(
                    Error(
                        "INVALID_FILE_EXTENSION",
                        f"{file_type} accepts: {', '.join(sorted(allowed))}",
                    )
                )
            if not content:
                return Return.err(Error("EMPTY_FILE", "Uploaded file is empty"))
            if len(content) > MAX_UPLOAD_BYTES:
                return Return.err(Error("FILE_TOO_LARGE", "Files are limited to 10 MB"))

            installation = await self.uow.installations.get_by_id(installation_id)
            if installation is None:
                return Return.err(Error("INSTALLATION_NOT_FOUND", "Installation not found"))

            before = installation.audit_snapshot()

            try:
                path = self.storage.store(
                    f"dc-installations/{installation.sr_no}", filename, content
                )
            except (OSError, ValueError) as e:
                logger.exception(f"Failed to store {file_type} for {installation.sr_no}")
                return Return.err(Error("FILE_STORE_FAILED", str(e)))

            replaced = None
            if file_type == ADDITIONAL_DOCUMENTS:
                installation.additional_documents = [
                    *(installation.additional_documents or []),
                    path,
                ]
            else:
                replaced = getattr(installation, file_type)
                setattr(installation, file_type, path)
            installation.updated_by = context.actor.name
            installation.updated_at = utcnow()

            installation = await self.uow.installations.update(installation)
            await self.uow.commit()

            if replaced:
                try:
                    self.storage.delete(replaced)
                except (OSError, ValueError):
                    logger.exception(f"Failed to remove replaced file {replaced}")

            await Auditor(self.uow).on_updated(installation, before, context)

            return Return.ok(InstallationResponse.from_entity(installation, self.storage))
