import pytest
from httpx import AsyncClient

NEW_USER = {
    "name": "Field Tech",
    "email": "tech@example.com",
    "password": "TechPass123!",
    "user_type": "User",
}


@pytest.mark.asyncio
async def test_user_lifecycle_is_audited(client: AsyncClient, admin_headers):
    """User administration

    Given I am authenticated as an Admin
    When I create, update and delete a user
    Then each mutation leaves one audit entry
    And no entry exposes the password hash
    """
    created = await client.post("/users", json=NEW_USER, headers=admin_headers)
    assert created.status_code == 201
    user_id = created.json()["id"]
    assert "password_hash" not in created.json()

    updated = await client.put(
        f"/users/{user_id}", json={"name": "Senior Tech"}, headers=admin_headers
    )
    assert updated.status_code == 200
    assert updated.json()["name"] == "Senior Tech"

    deleted = await client.delete(f"/users/{user_id}", headers=admin_headers)
    assert deleted.status_code == 200

    response = await client.get(
        "/audit", params={"resource": "User", "search": str(user_id)}, headers=admin_headers
    )
    entries = [
        e for e in response.json()["entries"]
        if e["resource_id"] == str(user_id) and e["action"] in ("CREATE", "UPDATE", "DELETE")
    ]
    assert [e["action"] for e in entries] == ["DELETE", "UPDATE", "CREATE"]

    delete_entry, update_entry, create_entry = entries
    assert create_entry["severity"] == "medium"
    assert "password_hash" not in create_entry["new_values"]
    assert update_entry["old_values"] == {"name": "Field Tech"}
    assert update_entry["new_values"] == {"name": "Senior Tech"}
    assert delete_entry["severity"] == "critical"
    assert delete_entry["old_values"]["email"] == "tech@example.com"


@pytest.mark.asyncio
async def test_duplicate_email_conflict(client: AsyncClient, admin_headers):
    first = await client.post("/users", json=NEW_USER, headers=admin_headers)
    second = await client.post("/users", json=NEW_USER, headers=admin_headers)

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_admin_cannot_delete_self(client: AsyncClient, admin_headers, seeded_users):
    response = await client.delete(
        f"/users/{seeded_users['admin'].id}", headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "CANNOT_DELETE_SELF"


@pytest.mark.asyncio
async def test_client_cannot_manage_users(client: AsyncClient, client_headers):
    response = await client.get("/users", headers=client_headers)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_ROLE"
