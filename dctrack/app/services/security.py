"""
Password hashing and actor helpers shared by auth and user use cases.
"""

import bcrypt

from dctrack.domain.context import ActorInfo, AuditContext
from dctrack.domain.entities import User, UserType


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(12)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode(), password_hash.encode())


def actor_from_user(user: User) -> ActorInfo:
    role = user.user_type.value if isinstance(user.user_type, UserType) else user.user_type
    return ActorInfo(id=user.id, name=user.name, email=user.email, role=role)


def has_role(context: AuditContext, *roles: UserType) -> bool:
    """True when the context carries an actor holding one of the roles"""
    if context.actor is None:
        return False
    return context.actor.role in {role.value for role in roles}
