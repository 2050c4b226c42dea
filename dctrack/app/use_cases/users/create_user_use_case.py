"""
Create User Use Case

Handles creation of user accounts by an Admin.
"""

import logging

from dctrack.libs.result import Error, Result, Return
from dctrack.app.services.auditor import Auditor
from dctrack.app.services.security import has_role, hash_password
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.context import AuditContext
from dctrack.domain.entities import User, UserType
from .dtos import CreateUserCommand, UserResponse

logger = logging.getLogger(__name__)


class CreateUserUseCase:
    """
    Use case for creating a user account.

    Business Rules:
    - Caller must be an Admin
    - Email must be unique
    - Password stored as bcrypt hash
    - CREATE entry written after the account is committed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, context: AuditContext, command: CreateUserCommand
    ) -> Result[UserResponse]:
        """
        Execute create user use case.

        Args:
            context: Actor and request context
            command: Validated account details

        Returns:
            Result with UserResponse, or Error
        """
        async with self.uow:
            if not has_role(context, UserType.admin):
                return Return.err(
                    Error("INSUFFICIENT_ROLE", "You do not have permission to manage users")
                )

            existing = await self.uow.users.get_by_email(command.email)
            if existing is not None:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "A user with this email already exists")
                )

            user = User(
                name=command.name,
                email=command.email,
                password_hash=hash_password(command.password),
                user_type=command.user_type,
                is_active=command.is_active,
            )
            user = await self.uow.users.create(user)
            await self.uow.commit()
            logger.info(f"User {user.id} created by {context.actor.id}")

            await Auditor(self.uow).on_created(user, context)

            return Return.ok(UserResponse.from_entity(user))
