"""
DC Tracker Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserType(str, Enum):
    """Application role of a user"""

    admin = "Admin"
    client = "Client"
    user = "User"


class DeliveryStatus(str, Enum):
    """Delivery progress of an installation"""

    delivered = "Delivered"
    pending = "Pending"
    in_transit = "In Transit"


class InstallationStatus(str, Enum):
    """Installation progress of an installation"""

    installed = "Installed"
    pending = "Pending"
    in_progress = "In Progress"


class Priority(str, Enum):
    """Installation priority"""

    high = "High"
    medium = "Medium"
    low = "Low"


class AuditAction(str, Enum):
    """What happened to the audited resource"""

    create = "CREATE"
    update = "UPDATE"
    delete = "DELETE"
    view = "VIEW"
    download = "DOWNLOAD"
    login = "LOGIN"
    logout = "LOGOUT"
    login_failed = "LOGIN_FAILED"
    password_confirmed = "PASSWORD_CONFIRMED"
    password_confirm_failed = "PASSWORD_CONFIRM_FAILED"
    share = "SHARE"

    @property
    def past_tense(self) -> str:
        """Verb used in generated descriptions, e.g. 'created'"""
        return _PAST_TENSE.get(self, self.value.lower())


_PAST_TENSE = {
    AuditAction.create: "created",
    AuditAction.update: "updated",
    AuditAction.delete: "deleted",
    AuditAction.view: "viewed",
    AuditAction.download: "downloaded",
    AuditAction.share: "shared",
}


class AuditSeverity(str, Enum):
    """How much attention an audit entry deserves"""

    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"
