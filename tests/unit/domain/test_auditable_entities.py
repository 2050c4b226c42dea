from datetime import date

import pytest

from dctrack.domain.context import ActorInfo, AuditContext
from dctrack.domain.entities import (
    AuditAction,
    AuditSeverity,
    DeliveryStatus,
    InstallationStatus,
    Priority,
    diff,
    next_sr_no,
)
from tests.unit.factories import make_installation, make_user

ADMIN = AuditContext(
    actor=ActorInfo(id=1, name="Admin User", email="admin@example.com", role="Admin")
)


# ============================================================================
# diff
# ============================================================================


def test_diff_returns_only_changed_fields():
    before = {"installation_status": "Pending", "remarks": "ok", "priority": "Low"}
    after = {"installation_status": "Installed", "remarks": "ok", "priority": "Low"}

    old_values, new_values = diff(before, after)

    assert old_values == {"installation_status": "Pending"}
    assert new_values == {"installation_status": "Installed"}


def test_diff_never_reports_timestamps_or_id():
    before = {"id": 1, "updated_at": "2024-01-01T00:00:00", "name": "a"}
    after = {"id": 2, "updated_at": "2024-02-01T00:00:00", "name": "a"}

    assert diff(before, after) == ({}, {})


def test_diff_honours_extra_exclusions():
    before = {"password_hash": "x", "name": "Old"}
    after = {"password_hash": "y", "name": "New"}

    old_values, new_values = diff(before, after, excluded={"password_hash"})

    assert old_values == {"name": "Old"}
    assert new_values == {"name": "New"}


def test_diff_reports_removed_keys_as_none():
    old_values, new_values = diff({"a": 1, "b": 2}, {"a": 1})

    assert old_values == {"b": 2}
    assert new_values == {"b": None}


# ============================================================================
# Default policy (User)
# ============================================================================


def test_user_identifier_falls_back_to_id():
    user = make_user(user_id=42)

    assert user.resource_type() == "User"
    assert user.audit_identifier() == "42"
    assert user.audit_description(AuditAction.create) == "Created User #42"


def test_user_attributes_hide_credentials_and_timestamps():
    user = make_user(remember_token="abc")

    attributes = user.auditable_attributes()

    assert "password_hash" not in attributes
    assert "remember_token" not in attributes
    assert "created_at" not in attributes
    assert "id" not in attributes
    assert attributes["email"] == "jane@example.com"
    assert attributes["user_type"] == "User"


def test_user_severity_overrides():
    user = make_user()

    assert user.audit_severity(AuditAction.create) == AuditSeverity.medium
    assert user.audit_severity(AuditAction.update) == AuditSeverity.medium
    assert user.audit_severity(AuditAction.delete) == AuditSeverity.critical


def test_nothing_is_audited_without_actor():
    user = make_user()

    assert user.should_audit(AuditAction.create, AuditContext.anonymous()) is False
    assert user.should_audit(AuditAction.create, ADMIN) is True


# ============================================================================
# DCInstallation policy
# ============================================================================


def test_installation_uses_sr_no_as_identifier():
    installation = make_installation(installation_id=7, sr_no="DC-0007-IN")

    assert installation.audit_identifier() == "DC-0007-IN"


def test_installation_identifier_without_sr_no_uses_id():
    installation = make_installation(installation_id=7, sr_no=None)

    assert installation.audit_identifier() == "7"


def test_installation_description_includes_status():
    installation = make_installation(installation_status=InstallationStatus.in_progress)

    assert (
        installation.audit_description(AuditAction.update)
        == "Updated DC Installation #DC-0001-IN (Status: In Progress)"
    )


@pytest.mark.parametrize(
    "action, expected",
    [
        (AuditAction.create, AuditSeverity.low),
        (AuditAction.update, AuditSeverity.low),
        (AuditAction.delete, AuditSeverity.high),
    ],
)
def test_installation_default_severity(action, expected):
    installation = make_installation(priority=Priority.medium)

    assert installation.audit_severity(action) == expected


@pytest.mark.parametrize(
    "action, expected",
    [
        (AuditAction.create, AuditSeverity.medium),
        (AuditAction.update, AuditSeverity.medium),
        (AuditAction.delete, AuditSeverity.critical),
    ],
)
def test_high_priority_installation_raises_severity(action, expected):
    installation = make_installation(priority=Priority.high)

    assert installation.audit_severity(action) == expected


def test_installation_update_audited_only_for_important_fields():
    installation = make_installation()

    assert installation.should_audit(
        AuditAction.update, ADMIN, frozenset({"installation_status"})
    )
    assert not installation.should_audit(
        AuditAction.update, ADMIN, frozenset({"remarks", "antivirus"})
    )
    assert not installation.should_audit(AuditAction.update, ADMIN, frozenset())


def test_installation_attributes_exclude_tracking_fields():
    installation = make_installation(created_by="Admin User", updated_by="Admin User")

    attributes = installation.auditable_attributes()

    assert "created_by" not in attributes
    assert "updated_by" not in attributes
    assert attributes["sr_no"] == "DC-0001-IN"
    assert attributes["installation_status"] == "Pending"


def test_installation_download_descriptions():
    installation = make_installation()

    assert (
        installation.file_download_description("delivery_report_file", "dr.pdf")
        == "Downloaded delivery_report_file (dr.pdf) for DC Installation #DC-0001-IN"
    )
    assert (
        installation.bulk_download_description()
        == "Downloaded all files for DC Installation #DC-0001-IN"
    )
    assert (
        installation.share_description()
        == "Generated shareable link for DC Installation #DC-0001-IN"
    )


# ============================================================================
# Derived values
# ============================================================================


def test_next_sr_no():
    assert next_sr_no(None) == "DC-0001-IN"
    assert next_sr_no("DC-0041-IN") == "DC-0042-IN"
    assert next_sr_no("garbage") == "DC-0001-IN"


def test_completion_percentage():
    installation = make_installation(
        delivery_status=DeliveryStatus.delivered,
        installation_status=InstallationStatus.installed,
        soft_copy_dc=True,
        soft_copy_ir=True,
        belarc_report_generated=True,
    )

    assert make_installation().completion_percentage == 0
    assert installation.completion_percentage == 50


@pytest.mark.parametrize(
    "delivery, installation_status, badge",
    [
        (DeliveryStatus.delivered, InstallationStatus.installed, "Completed"),
        (DeliveryStatus.delivered, InstallationStatus.pending, "Ready for Installation"),
        (DeliveryStatus.pending, InstallationStatus.pending, "Pending Delivery"),
        (DeliveryStatus.in_transit, InstallationStatus.pending, "In Transit"),
        (DeliveryStatus.delivered, InstallationStatus.in_progress, "Installation in Progress"),
    ],
)
def test_status_badge(delivery, installation_status, badge):
    installation = make_installation(
        delivery_status=delivery, installation_status=installation_status
    )

    assert installation.status_badge == badge


def test_is_overdue_after_seven_days_pending():
    installation = make_installation(delivery_date=date(2024, 1, 1))

    assert installation.is_overdue(today=date(2024, 1, 9)) is True
    assert installation.is_overdue(today=date(2024, 1, 8)) is False


def test_installed_is_never_overdue():
    installation = make_installation(
        delivery_date=date(2024, 1, 1),
        installation_status=InstallationStatus.installed,
    )

    assert installation.is_overdue(today=date(2024, 6, 1)) is False


def test_attached_files_skips_empty_fields():
    installation = make_installation(
        delivery_report_file="installations/1/dr.pdf",
        evidence_file="",
    )

    assert installation.attached_files() == {
        "delivery_report_file": "installations/1/dr.pdf"
    }
