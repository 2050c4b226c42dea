"""
DC Tracker Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AuditAction,
    AuditSeverity,
    DeliveryStatus,
    InstallationStatus,
    Priority,
    UserType,
)

# Audit capability
from .auditable import ALWAYS_EXCLUDED, Auditable, diff

# Export all entities
from .user import User
from .dc_installation import (
    ADDITIONAL_DOCUMENTS,
    DCInstallation,
    DCInstallationBase,
    FILE_FIELDS,
    IMPORTANT_FIELDS,
    MAX_UPLOAD_BYTES,
    UPLOAD_EXTENSIONS,
    next_sr_no,
)
from .audit_entry import AuditEntry

__all__ = [
    # Enums
    "AuditAction",
    "AuditSeverity",
    "DeliveryStatus",
    "InstallationStatus",
    "Priority",
    "UserType",
    # Audit capability
    "ALWAYS_EXCLUDED",
    "Auditable",
    "diff",
    # Entities
    "User",
    "DCInstallation",
    "DCInstallationBase",
    "IMPORTANT_FIELDS",
    "FILE_FIELDS",
    "ADDITIONAL_DOCUMENTS",
    "UPLOAD_EXTENSIONS",
    "MAX_UPLOAD_BYTES",
    "next_sr_no",
    "AuditEntry",
]
