"""
Delete User Use Case
"""

from dctrack.libs.result import Error, Result, Return
from dctrack.app.services.auditor import Auditor
from dctrack.app.services.security import has_role
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.context import AuditContext
from dctrack.domain.entities import UserType
from .dtos import DeleteUserResponse


class DeleteUserUseCase:
    """
    Use case for permanently deleting a user account.

    Business Rules:
    - Caller must be an Admin
    - Admins cannot delete their own account
    - DELETE entry (critical) keeps the account's last attributes
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, context: AuditContext, user_id: int) -> Result[DeleteUserResponse]:
        async with self.uow:
            if not has_role(context, UserType.admin):
                return Return.err(
                    Error("INSUFFICIENT_ROLE", "You do not have permission to manage users")
                )

            if context.actor.id == user_id:
                return Return.err(
                    Error("CANNOT_DELETE_SELF", "You cannot delete your own account")
                )

            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            snapshot = user.auditable_attributes()
            await self.uow.users.delete(user)
            await self.uow.commit()

            await Auditor(self.uow).on_deleted(user, context, snapshot)

            return Return.ok(
                DeleteUserResponse(status="deleted", message="User deleted successfully")
            )
