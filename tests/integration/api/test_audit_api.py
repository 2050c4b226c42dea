from datetime import timedelta

import pytest
from httpx import AsyncClient

from dctrack.domain.base import utcnow


async def _fail_login(client: AsyncClient, email: str):
    response = await client.post("/auth/login", json={"email": email, "password": "wrong"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_entries_are_newest_first_and_paginated(client: AsyncClient, admin_headers):
    """Pagination

    Given five failed logins
    When I request the LOGIN_FAILED entries two per page
    Then the newest attempt comes first
    And the page count covers all five entries
    """
    for n in range(5):
        await _fail_login(client, f"intruder{n}@example.com")

    first = await client.get(
        "/audit", params={"action": "LOGIN_FAILED", "per_page": 2}, headers=admin_headers
    )
    last = await client.get(
        "/audit",
        params={"action": "LOGIN_FAILED", "per_page": 2, "page": 3},
        headers=admin_headers,
    )

    body = first.json()
    assert body["total"] == 5
    assert body["last_page"] == 3
    assert [e["resource_id"] for e in body["entries"]] == [
        "intruder4@example.com",
        "intruder3@example.com",
    ]
    assert [e["resource_id"] for e in last.json()["entries"]] == ["intruder0@example.com"]


@pytest.mark.asyncio
async def test_filters_are_combined(client: AsyncClient, admin_headers):
    await _fail_login(client, "Mallory@Example.com")

    by_search = await client.get(
        "/audit", params={"search": "mallory", "severity": "medium"}, headers=admin_headers
    )
    wrong_severity = await client.get(
        "/audit", params={"search": "mallory", "severity": "critical"}, headers=admin_headers
    )
    ignored = await client.get(
        "/audit",
        params={"search": "mallory", "action": "all", "severity": "urgent", "user": "abc"},
        headers=admin_headers,
    )

    assert by_search.json()["total"] == 1
    assert wrong_severity.json()["total"] == 0
    assert ignored.json()["total"] == 1


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(client: AsyncClient, admin_headers):
    """Literal search

    Given failed logins for a_b@example.com and axb@example.com
    When I search for "_" or "%"
    Then only entries containing that exact character match
    """
    await _fail_login(client, "a_b@example.com")
    await _fail_login(client, "axb@example.com")

    underscore = await client.get(
        "/audit", params={"action": "LOGIN_FAILED", "search": "_"}, headers=admin_headers
    )
    percent = await client.get(
        "/audit", params={"action": "LOGIN_FAILED", "search": "%"}, headers=admin_headers
    )

    assert [e["resource_id"] for e in underscore.json()["entries"]] == ["a_b@example.com"]
    assert percent.json()["total"] == 0


@pytest.mark.asyncio
async def test_date_range_is_inclusive(client: AsyncClient, admin_headers):
    await _fail_login(client, "someone@example.com")
    today = utcnow().date()
    yesterday = today - timedelta(days=1)

    same_day = await client.get(
        "/audit",
        params={"action": "LOGIN_FAILED", "date_from": str(today), "date_to": str(today)},
        headers=admin_headers,
    )
    before = await client.get(
        "/audit",
        params={"action": "LOGIN_FAILED", "date_to": str(yesterday)},
        headers=admin_headers,
    )

    assert same_day.json()["total"] == 1
    assert before.json()["total"] == 0


@pytest.mark.asyncio
async def test_viewing_audit_trail_is_recorded(client: AsyncClient, admin_headers):
    await client.get("/audit", params={"severity": "low"}, headers=admin_headers)

    response = await client.get(
        "/audit", params={"resource": "System", "action": "VIEW"}, headers=admin_headers
    )

    entries = response.json()["entries"]
    assert len(entries) == 2
    assert entries[0]["resource_id"] == "audit_trail"
    assert entries[0]["severity"] == "high"
    assert entries[1]["metadata"] == {"filters": {"severity": "low"}}


@pytest.mark.asyncio
async def test_clear_validates_retention(client: AsyncClient, admin_headers):
    response = await client.delete("/audit", params={"days": 10}, headers=admin_headers)

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_RETENTION_DAYS"


@pytest.mark.asyncio
async def test_clear_all_leaves_only_its_own_entry(client: AsyncClient, admin_headers):
    """Clearing the trail

    Given several audit entries
    When I clear the whole trail
    Then only the critical entry describing the clear remains
    """
    for n in range(3):
        await _fail_login(client, f"noise{n}@example.com")

    cleared = await client.delete("/audit", headers=admin_headers)

    assert cleared.status_code == 200
    assert cleared.json()["deleted_count"] >= 4
    assert cleared.json()["days"] is None

    response = await client.get("/audit", params={"action": "DELETE"}, headers=admin_headers)
    [entry] = response.json()["entries"]
    assert entry["resource_type"] == "System"
    assert entry["resource_id"] == "audit_logs"
    assert entry["severity"] == "critical"
    assert entry["metadata"]["deleted_count"] == cleared.json()["deleted_count"]
    assert response.json()["total"] == 1


@pytest.mark.asyncio
async def test_clear_with_retention_keeps_recent_entries(client: AsyncClient, admin_headers):
    await _fail_login(client, "recent@example.com")

    cleared = await client.delete("/audit", params={"days": 30}, headers=admin_headers)
    remaining = await client.get(
        "/audit", params={"action": "LOGIN_FAILED"}, headers=admin_headers
    )

    assert cleared.status_code == 200
    assert cleared.json()["deleted_count"] == 0
    assert remaining.json()["total"] == 1


@pytest.mark.asyncio
async def test_client_cannot_read_or_clear_audit(client: AsyncClient, client_headers):
    read = await client.get("/audit", headers=client_headers)
    clear = await client.delete("/audit", headers=client_headers)

    assert read.status_code == 403
    assert clear.status_code == 403
