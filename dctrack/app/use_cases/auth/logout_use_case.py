"""
Logout Use Case

Records the logout in the audit trail. Access tokens are stateless, the
client discards its token after this call.
"""

from dctrack.libs.result import Result, Return
from dctrack.app.services.audit_log import AuditLog
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.context import AuditContext
from .dtos import LogoutResponse


class LogoutUseCase:
    """
    Use case for user logout.

    Business Rules:
    - LOGOUT entry is written while the actor is still known
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, context: AuditContext) -> Result[LogoutResponse]:
        async with self.uow:
            if context.is_authenticated:
                request = context.request
                await AuditLog(self.uow).log_logout(
                    context,
                    ip_address=request.ip if request else None,
                    user_agent=request.user_agent if request else None,
                )

            return Return.ok(
                LogoutResponse(status="logged_out", message="Logged out successfully")
            )
