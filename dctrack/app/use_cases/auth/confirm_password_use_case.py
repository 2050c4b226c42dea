"""
Confirm Password Use Case

Re-checks the signed-in user's password before a sensitive operation.
"""

from dctrack.libs.result import Error, Result, Return
from dctrack.app.services.audit_log import AuditLog
from dctrack.app.services.security import verify_password
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.context import AuditContext
from .dtos import ConfirmPasswordResponse


class ConfirmPasswordUseCase:
    """
    Use case for password confirmation.

    Business Rules:
    - Success writes PASSWORD_CONFIRMED (low)
    - Failure writes PASSWORD_CONFIRM_FAILED (medium)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, context: AuditContext, password: str
    ) -> Result[ConfirmPasswordResponse]:
        """
        Execute confirm password use case.

        Args:
            context: Actor and request context, actor required
            password: Plain text password to check

        Returns:
            Result with ConfirmPasswordResponse, or Error
        """
        async with self.uow:
            if context.actor is None:
                return Return.err(Error("UNAUTHENTICATED", "Authentication required"))

            user = await self.uow.users.get_by_id(context.actor.id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            confirmed = verify_password(password, user.password_hash)
            await AuditLog(self.uow).log_password_confirmation(context, confirmed)

            if not confirmed:
                return Return.err(
                    Error("INVALID_PASSWORD", "The provided password is incorrect")
                )

            return Return.ok(
                ConfirmPasswordResponse(
                    status="confirmed", message="Password confirmed"
                )
            )
