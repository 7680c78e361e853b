"""Tests for the user CRUD endpoints on the in-memory store."""

from httpx import AsyncClient


async def _create(client: AsyncClient, name: str = "Alice", email: str = "alice@example.com", **extra):
    response = await client.post("/api/users", json={"name": name, "email": email, **extra})
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_create_user_returns_201(client: AsyncClient) -> None:
    response = await client.post(
        "/api/users", json={"name": "Alice", "email": "alice@example.com", "age": 30}
    )
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "User created successfully"
    user = body["data"]
    assert isinstance(user["id"], int)
    assert user["name"] == "Alice"
    assert user["email"] == "alice@example.com"
    assert user["age"] == 30
    assert user["created_at"]
    assert user["updated_at"]
    assert "password" not in user
    assert "hashed_password" not in user


async def test_create_user_missing_email_returns_400(client: AsyncClient) -> None:
    """Missing required fields are rejected before touching the store."""
    response = await client.post("/api/users", json={"name": "Alice"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Name and email are required"
    fields = {e["field"] for e in body["details"]["errors"]}
    assert fields == {"email"}


async def test_create_user_blank_name_returns_400(client: AsyncClient) -> None:
    response = await client.post("/api/users", json={"name": "   ", "email": "a@example.com"})
    assert response.status_code == 400
    assert response.json()["error"] == "Name and email are required"


async def test_create_user_invalid_email_returns_400(client: AsyncClient) -> None:
    response = await client.post("/api/users", json={"name": "Alice", "email": "not-an-email"})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid user data"


async def test_create_user_wrong_type_returns_400(client: AsyncClient) -> None:
    """Body type errors are reported in the envelope as 400, not 422."""
    response = await client.post("/api/users", json={"name": 123, "email": "a@example.com"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Invalid request"


async def test_create_duplicate_email_returns_409(client: AsyncClient) -> None:
    await _create(client)
    response = await client.post("/api/users", json={"name": "Other", "email": "alice@example.com"})
    assert response.status_code == 409
    assert response.json() == {
        "success": False,
        "error": "User with this email already exists",
    }


async def test_list_users_in_insertion_order(client: AsyncClient) -> None:
    await _create(client, "Alice", "alice@example.com")
    await _create(client, "Bob", "bob@example.com")
    response = await client.get("/api/users")
    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "database"
    assert body["message"] == "Users retrieved from database"
    assert [u["name"] for u in body["data"]] == ["Alice", "Bob"]
    assert "pagination" not in body


async def test_list_users_empty(client: AsyncClient) -> None:
    response = await client.get("/api/users")
    assert response.status_code == 200
    assert response.json()["data"] == []


async def test_list_users_paginated(client: AsyncClient) -> None:
    """25 users, page 2 of 10 holds users 11..20 and totalPages is 3."""
    for i in range(1, 26):
        await _create(client, f"user-{i}", f"user{i}@example.com")
    response = await client.get("/api/users", params={"page": 2, "limit": 10})
    assert response.status_code == 200
    body = response.json()
    assert [u["name"] for u in body["data"]] == [f"user-{i}" for i in range(11, 21)]
    assert body["pagination"] == {"page": 2, "limit": 10, "total": 25, "totalPages": 3}


async def test_list_users_last_partial_page(client: AsyncClient) -> None:
    for i in range(1, 26):
        await _create(client, f"user-{i}", f"user{i}@example.com")
    response = await client.get("/api/users", params={"page": 3, "limit": 10})
    assert len(response.json()["data"]) == 5


async def test_list_users_invalid_page_returns_400(client: AsyncClient) -> None:
    response = await client.get("/api/users", params={"page": 0, "limit": 10})
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "page"}


async def test_list_users_limit_too_large_returns_400(client: AsyncClient) -> None:
    response = await client.get("/api/users", params={"page": 1, "limit": 1000})
    assert response.status_code == 400


async def test_get_user_by_id(client: AsyncClient) -> None:
    created = await _create(client)
    response = await client.get(f"/api/users/{created['id']}")
    assert response.status_code == 200
    body = response.json()
    assert body["data"]["email"] == "alice@example.com"
    assert body["source"] == "database"


async def test_get_unknown_user_returns_404(client: AsyncClient) -> None:
    response = await client.get("/api/users/999999")
    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "User not found"
    assert body["details"] == {"resource_type": "user", "resource_id": "999999"}


async def test_get_non_numeric_id_returns_400(client: AsyncClient) -> None:
    response = await client.get("/api/users/abc")
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid user ID"


async def test_loosely_numeric_ids_return_400(client: AsyncClient) -> None:
    """Only plain ASCII digits are ids; int() leniencies are rejected."""
    for raw in ("1_0", "%201", "+5", "%EF%BC%91", "0"):
        response = await client.get(f"/api/users/{raw}")
        assert response.status_code == 400, raw
        assert response.json()["error"] == "Invalid user ID"


async def test_id_beyond_bigint_returns_400_on_every_method(client: AsyncClient) -> None:
    too_big = str(2**63)
    body = {"name": "Alice", "email": "alice@example.com"}
    responses = [
        await client.get(f"/api/users/{too_big}"),
        await client.put(f"/api/users/{too_big}", json=body),
        await client.patch(f"/api/users/{too_big}", json={"name": "Bob"}),
        await client.delete(f"/api/users/{too_big}"),
    ]
    assert [r.status_code for r in responses] == [400, 400, 400, 400]


async def test_largest_bigint_id_is_not_found(client: AsyncClient) -> None:
    response = await client.get(f"/api/users/{2**63 - 1}")
    assert response.status_code == 404


async def test_put_updates_user(client: AsyncClient) -> None:
    created = await _create(client)
    response = await client.put(
        f"/api/users/{created['id']}",
        json={"name": "Alice Smith", "email": "alice.smith@example.com"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "User updated successfully"
    assert body["data"]["name"] == "Alice Smith"
    assert body["data"]["email"] == "alice.smith@example.com"
    assert body["data"]["id"] == created["id"]


async def test_put_keeping_own_email_is_allowed(client: AsyncClient) -> None:
    created = await _create(client)
    response = await client.put(
        f"/api/users/{created['id']}",
        json={"name": "Renamed", "email": "alice@example.com"},
    )
    assert response.status_code == 200


async def test_put_requires_name_and_email(client: AsyncClient) -> None:
    created = await _create(client)
    response = await client.put(f"/api/users/{created['id']}", json={"name": "Only name"})
    assert response.status_code == 400
    assert response.json()["error"] == "Name and email are required"


async def test_put_email_of_other_user_returns_409(client: AsyncClient) -> None:
    await _create(client, "Alice", "alice@example.com")
    bob = await _create(client, "Bob", "bob@example.com")
    response = await client.put(
        f"/api/users/{bob['id']}", json={"name": "Bob", "email": "alice@example.com"}
    )
    assert response.status_code == 409
    assert response.json()["error"] == "Email is already taken by another user"


async def test_put_unknown_user_returns_404(client: AsyncClient) -> None:
    response = await client.put(
        "/api/users/424242", json={"name": "Ghost", "email": "ghost@example.com"}
    )
    assert response.status_code == 404


async def test_patch_changes_only_given_fields(client: AsyncClient) -> None:
    created = await _create(client, age=30)
    response = await client.patch(f"/api/users/{created['id']}", json={"age": 31})
    assert response.status_code == 200
    user = response.json()["data"]
    assert user["age"] == 31
    assert user["name"] == "Alice"
    assert user["email"] == "alice@example.com"


async def test_patch_empty_body_returns_400(client: AsyncClient) -> None:
    created = await _create(client)
    response = await client.patch(f"/api/users/{created['id']}", json={})
    assert response.status_code == 400


async def test_delete_user_returns_snapshot(client: AsyncClient) -> None:
    created = await _create(client)
    response = await client.delete(f"/api/users/{created['id']}")
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "User deleted successfully"
    assert body["data"]["id"] == created["id"]

    assert (await client.get(f"/api/users/{created['id']}")).status_code == 404
    assert (await client.delete(f"/api/users/{created['id']}")).status_code == 404


async def test_email_can_be_reused_after_delete(client: AsyncClient) -> None:
    created = await _create(client)
    await client.delete(f"/api/users/{created['id']}")
    again = await _create(client)
    assert again["id"] != created["id"]


async def test_delete_unknown_user_leaves_store_unchanged(client: AsyncClient) -> None:
    await _create(client)
    await _create(client, name="Bob", email="bob@example.com")
    before = (await client.get("/api/users")).json()["data"]

    response = await client.delete("/api/users/999999")
    assert response.status_code == 404
    assert response.json()["error"] == "User not found"

    after = (await client.get("/api/users")).json()["data"]
    assert after == before
