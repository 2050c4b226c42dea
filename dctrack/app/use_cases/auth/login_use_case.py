"""
Login Use Case

Authenticates a user, records the attempt in the audit trail and
returns a JWT access token.
"""

import logging
from typing import Optional

import bcrypt

from dctrack.libs.result import Error, Result, Return
from dctrack.app.services.audit_log import AuditLog
from dctrack.app.services.security import actor_from_user, verify_password
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.domain.context import AuditContext, RequestInfo
from dctrack.domain.entities import AuditAction, AuditSeverity
from dctrack.api.utils.jwt import generate_jwt
from .dtos import LoginResponse, UserInfo

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Password check runs even when the email is unknown
    - Unknown email or wrong password: LOGIN_FAILED entry without actor
    - Inactive account: LOGIN_FAILED entry with the user as actor
    - Success: LOGIN entry with the caller's IP address and user agent
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, email: str, password: str, request: Optional[RequestInfo] = None
    ) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password
            request: Request metadata of the login attempt

        Returns:
            Result with LoginResponse containing the access token, or Error
        """
        ip_address = request.ip if request else None
        user_agent = request.user_agent if request else None

        async with self.uow:
            audit_log = AuditLog(self.uow)
            user = await self.uow.users.get_by_email(email)

            if user is None:
                # Hash dummy password to maintain constant time
                bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(12))
                password_valid = False
            else:
                password_valid = verify_password(password, user.password_hash)

            if not password_valid:
                logger.info(f"Failed login attempt for {email}")
                await audit_log.log_failed_login(
                    AuditContext.anonymous(request),
                    email,
                    ip_address=ip_address,
                    user_agent=user_agent,
                )
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            context = AuditContext(actor=actor_from_user(user), request=request)

            if not user.is_active:
                await audit_log.create_entry(
                    context,
                    action=AuditAction.login_failed,
                    resource_type="User",
                    resource_id=user.id,
                    severity=AuditSeverity.medium,
                    description=(
                        f"Login attempt blocked - account inactive: "
                        f"{user.name} ({user.email})"
                    ),
                    ip_address=ip_address,
                    user_agent=user_agent,
                )
                return Return.err(
                    Error(
                        "USER_INACTIVE",
                        "Your account has been deactivated. Please contact administrator.",
                    )
                )

            await audit_log.log_login(
                context, ip_address=ip_address, user_agent=user_agent
            )

            actor = context.actor
            access_token = generate_jwt(actor.id, actor.name, actor.email, actor.role)

            return Return.ok(
                LoginResponse(
                    access_token=access_token,
                    user=UserInfo(
                        id=actor.id, name=actor.name, email=actor.email, role=actor.role
                    ),
                )
            )
