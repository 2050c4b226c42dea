"""
List Users Use Case
"""

from typing import List

from dctrack.libs.result import Error, Result, Return
from dctrack.app.services.security import has_role
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.context import AuditContext
from dctrack.domain.entities import UserType
from .dtos import UserResponse


class ListUsersUseCase:
    """
    Use case for listing user accounts.

    Business Rules:
    - Caller must be an Admin
    - Users ordered by name
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, context: AuditContext) -> Result[List[UserResponse]]:
        async with self.uow:
            if not has_role(context, UserType.admin):
                return Return.err(
                    Error("INSUFFICIENT_ROLE", "You do not have permission to manage users")
                )

            users = await self.uow.users.list_all()
            return Return.ok([UserResponse.from_entity(user) for user in users])
