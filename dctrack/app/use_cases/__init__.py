"""
Use Cases

Organized into domain folders:
- auth/: Login, logout, password confirmation
- users/: User account administration
- installations/: DC installation records and attachments
- audit/: Audit trail administration

Import from subdirectories for better organization.
"""

from .auth import (
    ConfirmPasswordUseCase,
    LoginUseCase,
    LogoutUseCase,
)
from .users import (
    CreateUserUseCase,
    DeleteUserUseCase,
    ListUsersUseCase,
    ToggleUserStatusUseCase,
    UpdateUserUseCase,
)
from .installations import (
    CreateInstallationUseCase,
    DeleteInstallationUseCase,
    DownloadInstallationFilesUseCase,
    UploadInstallationFileUseCase,
    GetInstallationUseCase,
    GetSharedInstallationUseCase,
    ListInstallationsUseCase,
    ShareInstallationUseCase,
    UpdateInstallationUseCase,
)
from .audit import (
    ClearAuditEntriesUseCase,
    ListAuditEntriesUseCase,
)

__all__ = [
    # Auth
    "LoginUseCase",
    "LogoutUseCase",
    "ConfirmPasswordUseCase",
    # Users
    "ListUsersUseCase",
    "CreateUserUseCase",
    "UpdateUserUseCase",
    "DeleteUserUseCase",
    "ToggleUserStatusUseCase",
    # Installations
    "CreateInstallationUseCase",
    "GetInstallationUseCase",
    "ListInstallationsUseCase",
    "UpdateInstallationUseCase",
    "DeleteInstallationUseCase",
    "DownloadInstallationFilesUseCase",
    "UploadInstallationFileUseCase",
    "ShareInstallationUseCase",
    "GetSharedInstallationUseCase",
    # Audit
    "ListAuditEntriesUseCase",
    "ClearAuditEntriesUseCase",
]
