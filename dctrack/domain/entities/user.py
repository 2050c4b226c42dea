"""
User Entity

A person who signs in to the tracker as an Admin, Client or User.
"""

from datetime import datetime
from typing import ClassVar, Dict, Optional, Tuple

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from dctrack.domain.base import utcnow
from .auditable import Auditable
from .enums import AuditAction, AuditSeverity, UserType


class User(Auditable, SQLModel, table=True):
    """
    User entity - an account with a single application role.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash, never audited
    - Inactive users cannot log in
    - Admins cannot delete or deactivate themselves
    """

    __tablename__ = "users"

    audit_exclude: ClassVar[Tuple[str, ...]] = ("password_hash", "remember_token")
    audit_severity_map: ClassVar[Dict[AuditAction, AuditSeverity]] = {
        AuditAction.create: AuditSeverity.medium,
        AuditAction.update: AuditSeverity.medium,
        AuditAction.delete: AuditSeverity.critical,
    }

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    user_type: UserType = Field(default=UserType.user)
    is_active: bool = Field(default=True)
    remember_token: Optional[str] = Field(default=None, max_length=100)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_type", "user_type"),
        Index("idx_user_is_active", "is_active"),
    )

    def is_admin(self) -> bool:
        return self.user_type == UserType.admin

    def has_any_role(self, *roles: UserType) -> bool:
        return self.user_type in roles
