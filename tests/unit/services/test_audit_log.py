import pytest
from sqlalchemy.exc import OperationalError

from dctrack.app.services.audit_log import AuditLog
from dctrack.domain.context import AuditContext, RequestInfo
from dctrack.domain.entities import AuditAction, AuditSeverity
from tests.unit.factories import audit_entries_written


@pytest.mark.asyncio
async def test_create_entry_copies_actor_and_request(mock_uow, admin_context):
    """Actor and request context are stamped on the entry"""
    entry = await AuditLog(mock_uow).create_entry(
        admin_context,
        action=AuditAction.view,
        resource_type="DCInstallation",
        resource_id="DC-0001-IN",
        description="Viewed DC Installation #DC-0001-IN",
    )

    assert entry is not None
    assert entry.actor_id == 1
    assert entry.actor_name == "Admin User"
    assert entry.actor_email == "admin@example.com"
    assert entry.actor_role == "Admin"
    assert entry.ip_address == "192.168.1.10"
    assert entry.user_agent == "pytest-agent"
    assert entry.request_url == "http://test/installations/1"
    assert entry.http_method == "PUT"
    assert entry.severity == AuditSeverity.low
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_caller_supplied_ip_and_user_agent_win(mock_uow, admin_context):
    entry = await AuditLog(mock_uow).create_entry(
        admin_context,
        action=AuditAction.login,
        resource_type="User",
        resource_id=1,
        description="User logged in",
        ip_address="10.9.9.9",
        user_agent="curl/8",
    )

    assert entry.ip_address == "10.9.9.9"
    assert entry.user_agent == "curl/8"
    assert entry.resource_id == "1"


@pytest.mark.asyncio
async def test_entry_without_actor_has_null_actor_fields(mock_uow):
    entry = await AuditLog(mock_uow).create_entry(
        AuditContext.anonymous(),
        action=AuditAction.view,
        resource_type="System",
        resource_id=None,
        description="System check",
    )

    assert entry.actor_id is None
    assert entry.actor_name is None
    assert entry.actor_email is None
    assert entry.actor_role is None
    assert entry.ip_address is None
    assert entry.request_url is None


@pytest.mark.asyncio
async def test_storage_failure_is_swallowed(mock_uow, admin_context):
    """Audit write failures never reach the caller"""
    mock_uow.audit_entries.create.side_effect = OperationalError("INSERT", {}, Exception("disk full"))

    entry = await AuditLog(mock_uow).log_view(admin_context, "DCInstallation", "DC-0001-IN")

    assert entry is None
    mock_uow.rollback.assert_awaited_once()
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "wrapper, action, severity, description",
    [
        ("log_view", AuditAction.view, AuditSeverity.low, "Viewed DCInstallation #7"),
        (
            "log_download",
            AuditAction.download,
            AuditSeverity.medium,
            "Downloaded files for DCInstallation #7",
        ),
    ],
)
async def test_read_wrappers_defaults(
    mock_uow, admin_context, wrapper, action, severity, description
):
    entry = await getattr(AuditLog(mock_uow), wrapper)(admin_context, "DCInstallation", 7)

    assert entry.action == action
    assert entry.severity == severity
    assert entry.description == description


@pytest.mark.asyncio
async def test_mutation_wrappers_defaults(mock_uow, admin_context):
    audit_log = AuditLog(mock_uow)

    created = await audit_log.log_create(admin_context, "User", 3, {"name": "A"})
    updated = await audit_log.log_update(admin_context, "User", 3, {"name": "A"}, {"name": "B"})
    deleted = await audit_log.log_delete(admin_context, "User", 3, {"name": "B"})

    assert (created.action, created.severity) == (AuditAction.create, AuditSeverity.low)
    assert created.description == "Created User #3"
    assert created.new_values == {"name": "A"}
    assert created.old_values is None

    assert (updated.action, updated.severity) == (AuditAction.update, AuditSeverity.low)
    assert updated.old_values == {"name": "A"}
    assert updated.new_values == {"name": "B"}

    assert (deleted.action, deleted.severity) == (AuditAction.delete, AuditSeverity.high)
    assert deleted.description == "Deleted User #3"
    assert deleted.new_values is None


@pytest.mark.asyncio
async def test_login_and_logout_use_actor_as_resource(mock_uow, admin_context):
    audit_log = AuditLog(mock_uow)

    login = await audit_log.log_login(admin_context, ip_address="10.0.0.2", user_agent="UA")
    logout = await audit_log.log_logout(admin_context)

    assert login.action == AuditAction.login
    assert login.resource_type == "User"
    assert login.resource_id == "1"
    assert login.description == "User logged in"
    assert login.ip_address == "10.0.0.2"
    assert logout.action == AuditAction.logout
    assert logout.description == "User logged out"


@pytest.mark.asyncio
async def test_failed_login_records_email_without_actor(mock_uow):
    """Failed login for a@b.com from 10.0.0.1"""
    context = AuditContext.anonymous(RequestInfo(ip="10.0.0.1", url="http://test/auth/login"))

    await AuditLog(mock_uow).log_failed_login(context, "a@b.com")

    [entry] = audit_entries_written(mock_uow)
    assert entry.action == AuditAction.login_failed
    assert entry.resource_type == "User"
    assert entry.resource_id == "a@b.com"
    assert entry.actor_id is None
    assert entry.severity == AuditSeverity.medium
    assert entry.ip_address == "10.0.0.1"
    assert entry.description == "Failed login attempt for a@b.com"


@pytest.mark.asyncio
async def test_failed_login_drops_actor_even_if_context_has_one(mock_uow, admin_context):
    entry = await AuditLog(mock_uow).log_failed_login(admin_context, "other@example.com")

    assert entry.actor_id is None
    assert entry.ip_address == "192.168.1.10"


@pytest.mark.asyncio
async def test_password_confirmation_outcomes(mock_uow, admin_context):
    audit_log = AuditLog(mock_uow)

    confirmed = await audit_log.log_password_confirmation(admin_context, True)
    failed = await audit_log.log_password_confirmation(admin_context, False)

    assert confirmed.action == AuditAction.password_confirmed
    assert confirmed.severity == AuditSeverity.low
    assert confirmed.description == "Password confirmed for user: Admin User"
    assert failed.action == AuditAction.password_confirm_failed
    assert failed.severity == AuditSeverity.medium
    assert failed.description == "Failed password confirmation for user: Admin User"
