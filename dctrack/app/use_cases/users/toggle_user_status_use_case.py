"""
Toggle User Status Use Case

Activates or deactivates a user account.
"""

from dctrack.libs.result import Error, Result, Return
from dctrack.app.services.auditor import Auditor
from dctrack.app.services.security import has_role
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.base import utcnow
from dctrack.domain.context import AuditContext
from dctrack.domain.entities import UserType
from .dtos import UserResponse


class ToggleUserStatusUseCase:
    """
    Use case for flipping a user's active flag.

    Business Rules:
    - Caller must be an Admin
    - Admins cannot deactivate their own account
    - Inactive users cannot log in
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, context: AuditContext, user_id: int) -> Result[UserResponse]:
        async with self.uow:
            if not has_role(context, UserType.admin):
                return Return.err(
                    Error("INSUFFICIENT_ROLE", "You do not have permission to manage users")
                )

            if context.actor.id == user_id:
                return Return.err(
                    Error("CANNOT_DEACTIVATE_SELF", "You cannot deactivate your own account")
                )

            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            before = user.audit_snapshot()
            user.is_active = not user.is_active
            user.updated_at = utcnow()

            user = await self.uow.users.update(user)
            await self.uow.commit()

            await Auditor(self.uow).on_updated(user, before, context)

            return Return.ok(UserResponse.from_entity(user))
