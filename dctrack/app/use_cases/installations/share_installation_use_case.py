"""
Share Installation Use Cases

Generates expiring read-only links to an installation and resolves them.
"""

from datetime import UTC, datetime, timedelta

from dctrack.libs.result import Error, Result, Return
from dctrack.app.services.auditor import Auditor
from dctrack.app.services.file_storage import IFileStorage
from dctrack.app.services.security import has_role
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.context import AuditContext
from dctrack.domain.entities import UserType
from dctrack.api.utils.jwt import generate_share_token, verify_share_token
from .dtos import InstallationResponse, ShareLinkResponse


class ShareInstallationUseCase:
    """
    Use case for generating a shareable link.

    Business Rules:
    - Caller must be an Admin or a Client
    - Link is a signed token valid for link_hours
    - Every generated link is recorded (SHARE, medium)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        context: AuditContext,
        installation_id: int,
        base_url: str,
        link_hours: int = 24,
    ) -> Result[ShareLinkResponse]:
        """
        Execute share installation use case.

        Args:
            context: Actor and request context
            installation_id: ID of the installation to share
            base_url: Public URL the shared path is appended to
            link_hours: Hours until the link expires

        Returns:
            Result with ShareLinkResponse, or Error
        """
        async with self.uow:
            if not has_role(context, UserType.admin, UserType.client):
                return Return.err(
                    Error(
                        "INSUFFICIENT_ROLE",
                        "You do not have permission to share installations",
                    )
                )

            installation = await self.uow.installations.get_by_id(installation_id)
            if installation is None:
                return Return.err(Error("INSTALLATION_NOT_FOUND", "Installation not found"))

            expires_in = timedelta(hours=link_hours)
            token = generate_share_token(installation.id, expires_in)

            await Auditor(self.uow).audit_share(
                installation, context, installation.share_description()
            )

            return Return.ok(
                ShareLinkResponse(
                    sr_no=installation.sr_no,
                    url=f"{base_url.rstrip('/')}/installations/shared/{token}",
                    token=token,
                    expires_at=datetime.now(UTC) + expires_in,
                )
            )


class GetSharedInstallationUseCase:
    """
    Use case for opening a shared link.

    Business Rules:
    - No sign-in required, the token is the credential
    - Expired or tampered tokens are rejected
    - Soft-deleted installations are not found
    """

    def __init__(self, uow: UnitOfWork, storage: IFileStorage):
        self.uow = uow
        self.storage = storage

    async def execute(self, token: str) -> Result[InstallationResponse]:
        installation_id = verify_share_token(token)
        if installation_id is None:
            return Return.err(Error("INVALID_SHARE_TOKEN", "Share link is invalid or expired"))

        async with self.uow:
            installation = await self.uow.installations.get_by_id(installation_id)
            if installation is None:
                return Return.err(Error("INSTALLATION_NOT_FOUND", "Installation not found"))

            return Return.ok(InstallationResponse.from_entity(installation, self.storage))
