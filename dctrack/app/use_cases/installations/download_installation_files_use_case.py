"""
Download Installation Files Use Case

Resolves download links for one attachment or for all of them and
records the download in the audit trail.
"""

from pathlib import PurePosixPath
from typing import Optional

from dctrack.libs.result import Error, Result, Return
from dctrack.app.services.auditor import Auditor
from dctrack.app.services.file_storage import IFileStorage
from dctrack.app.services.security import has_role
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.context import AuditContext
from dctrack.domain.entities import FILE_FIELDS, UserType
from .dtos import DownloadResponse, FileLink


class DownloadInstallationFilesUseCase:
    """
    Use case for downloading installation attachments.

    Business Rules:
    - Any signed-in role may download
    - file_field selects one attachment, None means all attachments
    - Every download is recorded (DOWNLOAD, medium)
    """

    def __init__(self, uow: UnitOfWork, storage: IFileStorage):
        self.uow = uow
        self.storage = storage

    async def execute(
        self,
        context: AuditContext,
        installation_id: int,
        file_field: Optional[str] = None,
    ) -> Result[DownloadResponse]:
        """
        Execute download use case.

        Args:
            context: Actor and request context
            installation_id: ID of the installation
            file_field: Attachment field name (e.g. delivery_report_file), or None

        Returns:
            Result with DownloadResponse listing file URLs, or Error
        """
        async with self.uow:
            if not has_role(context, UserType.admin, UserType.client, UserType.user):
                return Return.err(
                    Error("INSUFFICIENT_ROLE", "You do not have permission to download files")
                )

            if file_field is not None and file_field not in FILE_FIELDS:
                return Return.err(Error("INVALID_FILE_TYPE", f"Unknown file type: {file_field}"))

            installation = await self.uow.installations.get_by_id(installation_id)
            if installation is None:
                return Return.err(Error("INSTALLATION_NOT_FOUND", "Installation not found"))

            auditor = Auditor(self.uow)

            if file_field is not None:
                path = getattr(installation, file_field)
                if not path or not self.storage.exists(path):
                    return Return.err(Error("FILE_NOT_FOUND", "File not found"))

                await auditor.audit_download(
                    installation,
                    context,
                    installation.file_download_description(
                        file_field, PurePosixPath(path).name
                    ),
                )
                links = [FileLink(field=file_field, url=self.storage.url(path))]
            else:
                attached = {
                    field: path
                    for field, path in installation.attached_files().items()
                    if self.storage.exists(path)
                }
                if not attached:
                    return Return.err(Error("FILE_NOT_FOUND", "No files available for download"))

                await auditor.audit_download(
                    installation, context, installation.bulk_download_description()
                )
                links = [
                    FileLink(field=field, url=self.storage.url(path))
                    for field, path in attached.items()
                ]

            return Return.ok(DownloadResponse(sr_no=installation.sr_no, files=links))
