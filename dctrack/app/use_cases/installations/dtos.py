"""
Installation Use Case DTOs (Data Transfer Objects)

Commands reuse the editable field set of DCInstallationBase so validation
rules live in one place.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel
from sqlmodel import Field

from dctrack.app.services.file_storage import IFileStorage
from dctrack.domain.entities import DCInstallation, DCInstallationBase


# ============================================================================
# Command DTOs
# ============================================================================


class InstallationCommand(DCInstallationBase):
    """
    Command for creating or updating an installation.

    sr_no is generated on create when omitted. On update only the fields
    present in the request are applied.
    """

    sr_no: Optional[str] = Field(default=None, max_length=50)


# ============================================================================
# Response DTOs
# ============================================================================


class InstallationResponse(DCInstallationBase):
    """Installation as returned by the API, with file URLs and progress"""

    id: int
    sr_no: str
    files: Dict[str, str] = {}
    additional_documents: List[str] = []
    completion_percentage: int
    status_badge: str
    is_overdue: bool
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(
        cls, installation: DCInstallation, storage: IFileStorage
    ) -> "InstallationResponse":
        data = installation.model_dump()
        data.update(
            files={
                field: storage.url(path)
                for field, path in installation.attached_files().items()
            },
            additional_documents=[
                storage.url(path) for path in installation.additional_documents or []
            ],
            completion_percentage=installation.completion_percentage,
            status_badge=installation.status_badge,
            is_overdue=installation.is_overdue(),
        )
        return cls.model_validate(data)


class InstallationListResponse(BaseModel):
    """Response for list installations use case"""

    installations: List[InstallationResponse]
    limit: int
    offset: int


class DeleteInstallationResponse(BaseModel):
    """Response for delete installation use case"""

    status: str
    message: str
    files_removed: int


class FileLink(BaseModel):
    """One downloadable attachment"""

    field: str
    url: str


class DownloadResponse(BaseModel):
    """Response for download installation files use case"""

    sr_no: str
    files: List[FileLink]


class ShareLinkResponse(BaseModel):
    """Response for share installation use case"""

    sr_no: str
    url: str
    token: str
    expires_at: datetime
