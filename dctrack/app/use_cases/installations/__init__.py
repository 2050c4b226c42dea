"""
Installation Use Cases

DC installation records, their attachments and share links.
"""

from .create_installation_use_case import CreateInstallationUseCase
from .get_installation_use_case import GetInstallationUseCase
from .list_installations_use_case import (
    ListInstallationsUseCase,
    parse_installation_filters,
)
from .update_installation_use_case import UpdateInstallationUseCase
from .delete_installation_use_case import DeleteInstallationUseCase
from .download_installation_files_use_case import DownloadInstallationFilesUseCase
from .upload_installation_file_use_case import UploadInstallationFileUseCase
from .share_installation_use_case import (
    GetSharedInstallationUseCase,
    ShareInstallationUseCase,
)
from .dtos import (
    DeleteInstallationResponse,
    DownloadResponse,
    FileLink,
    InstallationCommand,
    InstallationListResponse,
    InstallationResponse,
    ShareLinkResponse,
)

__all__ = [
    # Use Cases
    "CreateInstallationUseCase",
    "GetInstallationUseCase",
    "ListInstallationsUseCase",
    "UpdateInstallationUseCase",
    "DeleteInstallationUseCase",
    "DownloadInstallationFilesUseCase",
    "UploadInstallationFileUseCase",
    "ShareInstallationUseCase",
    "GetSharedInstallationUseCase",
    # Helpers
    "parse_installation_filters",
    # DTOs - Commands
    "InstallationCommand",
    # DTOs - Responses
    "InstallationResponse",
    "InstallationListResponse",
    "DeleteInstallationResponse",
    "DownloadResponse",
    "ShareLinkResponse",
    # DTOs - Nested Models
    "FileLink",
]
