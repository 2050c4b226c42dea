"""
Update User Use Case
"""

from dctrack.libs.result import Error, Result, Return
from dctrack.app.services.auditor import Auditor
from dctrack.app.services.security import has_role, hash_password
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.base import utcnow
from dctrack.domain.context import AuditContext
from dctrack.domain.entities import UserType
from .dtos import UpdateUserCommand, UserResponse


class UpdateUserUseCase:
    """
    Use case for updating a user account.

    Business Rules:
    - Caller must be an Admin
    - Email must stay unique
    - A supplied password is re-hashed
    - UPDATE entry carries only changed, non-secret fields
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, context: AuditContext, user_id: int, command: UpdateUserCommand
    ) -> Result[UserResponse]:
        """
        Execute update user use case.

        Args:
            context: Actor and request context
            user_id: ID of the account to update
            command: Fields to change

        Returns:
            Result with UserResponse, or Error
        """
        async with self.uow:
            if not has_role(context, UserType.admin):
                return Return.err(
                    Error("INSUFFICIENT_ROLE", "You do not have permission to manage users")
                )

            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            changes = command.model_dump(exclude_unset=True, exclude_none=True)

            new_email = changes.get("email")
            if new_email and new_email != user.email:
                existing = await self.uow.users.get_by_email(new_email)
                if existing is not None:
                    return Return.err(
                        Error("EMAIL_ALREADY_EXISTS", "A user with this email already exists")
                    )

            before = user.audit_snapshot()

            password = changes.pop("password", None)
            if password:
                user.password_hash = hash_password(password)
            for field, value in changes.items():
                setattr(user, field, value)
            user.updated_at = utcnow()

            user = await self.uow.users.update(user)
            await self.uow.commit()

            await Auditor(self.uow).on_updated(user, before, context)

            return Return.ok(UserResponse.from_entity(user))
