from unittest.mock import AsyncMock, MagicMock

import pytest

from dctrack.app.services.file_storage import IFileStorage
from dctrack.domain.context import ActorInfo, AuditContext, RequestInfo


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories
    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.list_all = AsyncMock(return_value=[])
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.delete = AsyncMock()

    uow.installations = MagicMock()
    uow.installations.get_by_id = AsyncMock(return_value=None)
    uow.installations.get_by_sr_no = AsyncMock(return_value=None)
    uow.installations.get_latest_sr_no = AsyncMock(return_value=None)
    uow.installations.find_many = AsyncMock(return_value=[])
    uow.installations.create = AsyncMock(side_effect=lambda installation: installation)
    uow.installations.update = AsyncMock(side_effect=lambda installation: installation)

    uow.audit_entries = MagicMock()
    uow.audit_entries.create = AsyncMock(side_effect=lambda entry: entry)
    uow.audit_entries.find_many = AsyncMock()
    uow.audit_entries.delete_all = AsyncMock(return_value=0)
    uow.audit_entries.delete_older_than = AsyncMock(return_value=0)

    return uow


@pytest.fixture
def request_info():
    return RequestInfo(
        ip="192.168.1.10",
        user_agent="pytest-agent",
        url="http://test/installations/1",
        method="PUT",
    )


@pytest.fixture
def admin_context(request_info):
    return AuditContext(
        actor=ActorInfo(id=1, name="Admin User", email="admin@example.com", role="Admin"),
        request=request_info,
    )


@pytest.fixture
def client_context(request_info):
    return AuditContext(
        actor=ActorInfo(id=2, name="Client User", email="client@example.com", role="Client"),
        request=request_info,
    )


@pytest.fixture
def mock_storage():
    storage = MagicMock(spec=IFileStorage)
    storage.url.side_effect = lambda path: f"/storage/{path}"
    storage.exists.return_value = True
    storage.delete.return_value = True
    return storage


@pytest.fixture
def user_context(request_info):
    return AuditContext(
        actor=ActorInfo(id=3, name="Field User", email="user@example.com", role="User"),
        request=request_info,
    )
