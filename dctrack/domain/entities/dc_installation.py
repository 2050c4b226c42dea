"""
DCInstallation Entity

A delivery challan (DC) installation record: one piece of equipment
shipped to a site, delivered, installed and documented.
"""

from datetime import date, datetime, timedelta
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional, Tuple

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from dctrack.domain.base import utcnow
from dctrack.domain.context import AuditContext
from .auditable import Auditable
from .enums import (
    AuditAction,
    AuditSeverity,
    DeliveryStatus,
    InstallationStatus,
    Priority,
)

SR_NO_PREFIX = "DC-"
SR_NO_SUFFIX = "-IN"

# Days after delivery by which installation is expected
INSTALLATION_DUE_DAYS = 7

# Changes to any other field are not worth an audit entry
IMPORTANT_FIELDS: FrozenSet[str] = frozenset(
    {
        "installation_status",
        "delivery_status",
        "priority",
        "assigned_technician",
        "installation_date",
        "delivery_date",
        "receiver_name",
        "location_address",
        "district",
        "region_division",
    }
)

FILE_FIELDS: Tuple[str, ...] = (
    "delivery_report_file",
    "installation_report_file",
    "belarc_report_file",
    "back_side_photo_file",
    "os_installation_photo_file",
    "keyboard_photo_file",
    "mouse_photo_file",
    "screenshot_file",
    "evidence_file",
)

ADDITIONAL_DOCUMENTS = "additional_documents"

# Accepted extensions per attachment field
_IMAGES = frozenset({"jpg", "jpeg", "png"})
UPLOAD_EXTENSIONS: Dict[str, FrozenSet[str]] = {
    "delivery_report_file": _IMAGES | {"pdf"},
    "installation_report_file": _IMAGES | {"pdf"},
    "belarc_report_file": frozenset({"pdf"}),
    "back_side_photo_file": _IMAGES,
    "os_installation_photo_file": _IMAGES,
    "keyboard_photo_file": _IMAGES,
    "mouse_photo_file": _IMAGES,
    "screenshot_file": _IMAGES,
    "evidence_file": _IMAGES | {"pdf", "doc", "docx"},
    ADDITIONAL_DOCUMENTS: _IMAGES | {"pdf", "doc", "docx"},
}

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

_COMPLETION_FLAGS = (
    "soft_copy_dc",
    "soft_copy_ir",
    "original_pod_received",
    "original_dc_received",
    "ir_original_copy_received",
    "back_side_photo_taken",
    "os_installation_photo_taken",
    "belarc_report_generated",
)


def next_sr_no(last_sr_no: Optional[str]) -> str:
    """
    Serial number following the most recent one.

    >>> next_sr_no("DC-0041-IN")
    'DC-0042-IN'
    >>> next_sr_no(None)
    'DC-0001-IN'
    """
    last_number = 0
    if last_sr_no:
        digits = last_sr_no.replace(SR_NO_PREFIX, "").replace(SR_NO_SUFFIX, "")
        try:
            last_number = int(digits)
        except ValueError:
            last_number = 0
    return f"{SR_NO_PREFIX}{last_number + 1:04d}{SR_NO_SUFFIX}"


def _plain(value: Any) -> Any:
    return getattr(value, "value", value)


class DCInstallationBase(SQLModel):
    """Editable installation fields shared by the table model and its commands"""

    # Basic information
    region_division: str = Field(max_length=255)
    location_address: str
    district: Optional[str] = Field(default=None, max_length=255)
    tahsil: str = Field(max_length=255)
    pin_code: str = Field(max_length=20)
    receiver_name: str = Field(max_length=255)
    contact_no: str = Field(max_length=50)
    contact_no_two: Optional[str] = Field(default=None, max_length=50)
    dc_ir_no: str = Field(max_length=100)

    # Dates
    dispatch_date: Optional[date] = None
    delivery_date: Optional[date] = None
    installation_date: Optional[date] = None

    # Delivery details
    total_boxes: Optional[int] = None
    courier_docket_no: Optional[str] = Field(default=None, max_length=100)
    representative_name: Optional[str] = Field(default=None, max_length=255)

    # Status
    delivery_status: DeliveryStatus = Field(default=DeliveryStatus.pending)
    installation_status: InstallationStatus = Field(default=InstallationStatus.pending)

    # Document status
    soft_copy_dc: bool = Field(default=False)
    soft_copy_ir: bool = Field(default=False)
    original_pod_received: bool = Field(default=False)
    original_dc_received: bool = Field(default=False)
    ir_original_copy_received: bool = Field(default=False)

    # Photo/evidence status
    back_side_photo_taken: bool = Field(default=False)
    os_installation_photo_taken: bool = Field(default=False)
    belarc_report_generated: bool = Field(default=False)

    # Equipment details
    serial_number: Optional[str] = Field(default=None, max_length=100)
    aio_hp_serial: Optional[str] = Field(default=None, max_length=100)
    keyboard_serial: Optional[str] = Field(default=None, max_length=100)
    mouse_serial: Optional[str] = Field(default=None, max_length=100)
    ups_serial: Optional[str] = Field(default=None, max_length=100)
    antivirus: Optional[str] = Field(default=None, max_length=100)
    breakage_notes: Optional[str] = None

    # Replacement equipment details
    hp_440_g9_serial: Optional[str] = Field(default=None, max_length=100)
    hp_keyboard_serial: Optional[str] = Field(default=None, max_length=100)
    hp_mouse_serial: Optional[str] = Field(default=None, max_length=100)
    updated_antivirus: Optional[str] = Field(default=None, max_length=100)
    updated_breakage_notes: Optional[str] = None

    # Installation details
    ir_receiver_name: Optional[str] = Field(default=None, max_length=255)
    ir_receiver_designation: Optional[str] = Field(default=None, max_length=255)
    entity_vendor_name: Optional[str] = Field(default=None, max_length=255)
    vendor_contact_number: Optional[str] = Field(default=None, max_length=50)
    charges: Optional[float] = None
    remarks: Optional[str] = None

    # Revised installation details
    updated_ir_receiver_name: Optional[str] = Field(default=None, max_length=255)
    updated_ir_receiver_designation: Optional[str] = Field(default=None, max_length=255)
    updated_installation_date: Optional[date] = None
    updated_remarks: Optional[str] = None
    hostname: Optional[str] = Field(default=None, max_length=255)
    updated_entity_vendor: Optional[str] = Field(default=None, max_length=255)
    updated_contact_number: Optional[str] = Field(default=None, max_length=50)

    # Priority and assignment
    priority: Priority = Field(default=Priority.medium)
    assigned_technician: Optional[str] = Field(default=None, max_length=255)
    internal_notes: Optional[str] = None

    is_active: bool = Field(default=True)


class DCInstallation(Auditable, DCInstallationBase, table=True):
    """
    DCInstallation entity - delivery and installation lifecycle of a site.

    Business Rules:
    - sr_no is unique and generated (DC-0001-IN, DC-0002-IN, ...) when absent
    - Soft delete: deleted_at marks removal, attached files are deleted
    - Only changes to important fields (status, priority, assignment,
      key dates, location) are audited
    - High priority installations are audited with raised severity
    """

    __tablename__ = "dc_installations"

    audit_identifier_field: ClassVar[Optional[str]] = "sr_no"
    audit_exclude: ClassVar[Tuple[str, ...]] = ("created_by", "updated_by")

    id: Optional[int] = Field(default=None, primary_key=True)
    sr_no: Optional[str] = Field(default=None, unique=True, index=True, max_length=50)

    # Attached files (storage paths)
    delivery_report_file: Optional[str] = None
    installation_report_file: Optional[str] = None
    belarc_report_file: Optional[str] = None
    back_side_photo_file: Optional[str] = None
    os_installation_photo_file: Optional[str] = None
    keyboard_photo_file: Optional[str] = None
    mouse_photo_file: Optional[str] = None
    screenshot_file: Optional[str] = None
    evidence_file: Optional[str] = None
    additional_documents: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))

    # Tracking
    created_by: Optional[str] = Field(default=None, max_length=255)
    updated_by: Optional[str] = Field(default=None, max_length=255)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    deleted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_installation_statuses", "delivery_status", "installation_status"),
        Index("idx_installation_region", "region_division"),
        Index("idx_installation_district", "district"),
        Index("idx_installation_priority", "priority"),
        Index("idx_installation_technician", "assigned_technician"),
        Index("idx_installation_deleted_at", "deleted_at"),
    )

    # Audit policy

    def audit_description(self, action: AuditAction) -> str:
        status_info = ""
        if self.installation_status:
            status_info = f" (Status: {_plain(self.installation_status)})"
        verb = action.past_tense.capitalize()
        return f"{verb} DC Installation #{self.audit_identifier()}{status_info}"

    def audit_severity(self, action: AuditAction) -> AuditSeverity:
        if _plain(self.priority) == Priority.high.value:
            if action == AuditAction.delete:
                return AuditSeverity.critical
            return AuditSeverity.medium
        return super().audit_severity(action)

    def should_audit(
        self,
        action: AuditAction,
        context: AuditContext,
        changed_fields: Optional[FrozenSet[str]] = None,
    ) -> bool:
        if not super().should_audit(action, context, changed_fields):
            return False

        if action == AuditAction.update:
            return bool(changed_fields and changed_fields & IMPORTANT_FIELDS)

        return True

    def view_description(self) -> str:
        return f"Viewed DC Installation #{self.audit_identifier()}"

    def file_download_description(self, file_type: str, file_name: Optional[str] = None) -> str:
        name_info = f" ({file_name})" if file_name else ""
        return f"Downloaded {file_type}{name_info} for DC Installation #{self.audit_identifier()}"

    def bulk_download_description(self) -> str:
        return f"Downloaded all files for DC Installation #{self.audit_identifier()}"

    def share_description(self) -> str:
        return f"Generated shareable link for DC Installation #{self.audit_identifier()}"

    # Derived values

    def attached_files(self) -> Dict[str, str]:
        """Non-empty file fields keyed by field name"""
        files = {}
        for field_name in FILE_FIELDS:
            path = getattr(self, field_name)
            if path:
                files[field_name] = path
        return files

    @property
    def completion_percentage(self) -> int:
        steps = [
            _plain(self.delivery_status) == DeliveryStatus.delivered.value,
            _plain(self.installation_status) == InstallationStatus.installed.value,
        ]
        steps.extend(bool(getattr(self, flag)) for flag in _COMPLETION_FLAGS)
        return round(sum(steps) / len(steps) * 100)

    @property
    def status_badge(self) -> str:
        delivery = _plain(self.delivery_status)
        installation = _plain(self.installation_status)

        if delivery == DeliveryStatus.delivered.value:
            if installation == InstallationStatus.installed.value:
                return "Completed"
            if installation == InstallationStatus.pending.value:
                return "Ready for Installation"
        if delivery == DeliveryStatus.pending.value:
            return "Pending Delivery"
        if delivery == DeliveryStatus.in_transit.value:
            return "In Transit"
        if installation == InstallationStatus.in_progress.value:
            return "Installation in Progress"
        return "Unknown Status"

    def is_overdue(self, today: Optional[date] = None) -> bool:
        if _plain(self.installation_status) != InstallationStatus.pending.value:
            return False
        if self.delivery_date is None:
            return False
        today = today or utcnow().date()
        return self.delivery_date + timedelta(days=INSTALLATION_DUE_DAYS) < today
