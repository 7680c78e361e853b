"""Cache-aside behaviour over HTTP: provenance tags and invalidation on writes."""

from httpx import AsyncClient


async def _create(client: AsyncClient, name: str, email: str) -> dict:
    response = await client.post("/api/users", json={"name": name, "email": email})
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_list_served_from_cache_on_second_read(cached_client: AsyncClient, fake_cache) -> None:
    await _create(cached_client, "Alice", "alice@example.com")

    first = await cached_client.get("/api/users")
    second = await cached_client.get("/api/users")

    assert first.json()["source"] == "database"
    assert second.json()["source"] == "cache"
    assert second.json()["message"] == "Users retrieved from cache"
    assert second.json()["data"] == first.json()["data"]
    assert fake_cache.ttls["users:all"] == 300


async def test_create_invalidates_list(cached_client: AsyncClient) -> None:
    """A read issued after a write completes sees the write."""
    await _create(cached_client, "Alice", "alice@example.com")
    await cached_client.get("/api/users")
    await _create(cached_client, "Bob", "bob@example.com")

    response = await cached_client.get("/api/users")
    body = response.json()
    assert body["source"] == "database"
    assert [u["name"] for u in body["data"]] == ["Alice", "Bob"]


async def test_empty_list_is_not_cached(cached_client: AsyncClient, fake_cache) -> None:
    await cached_client.get("/api/users")
    response = await cached_client.get("/api/users")
    assert response.json()["source"] == "database"
    assert "users:all" not in fake_cache.data


async def test_user_read_cached_then_invalidated_by_patch(cached_client: AsyncClient) -> None:
    user = await _create(cached_client, "Alice", "alice@example.com")
    url = f"/api/users/{user['id']}"

    assert (await cached_client.get(url)).json()["source"] == "database"
    assert (await cached_client.get(url)).json()["source"] == "cache"

    await cached_client.patch(url, json={"name": "Alicia"})

    response = await cached_client.get(url)
    assert response.json()["source"] == "database"
    assert response.json()["data"]["name"] == "Alicia"


async def test_delete_invalidates_user_and_list(cached_client: AsyncClient, fake_cache) -> None:
    user = await _create(cached_client, "Alice", "alice@example.com")
    await cached_client.get(f"/api/users/{user['id']}")
    await cached_client.get("/api/users")

    await cached_client.delete(f"/api/users/{user['id']}")

    assert f"user:{user['id']}" not in fake_cache.data
    assert "users:all" not in fake_cache.data
    assert (await cached_client.get(f"/api/users/{user['id']}")).status_code == 404
    assert (await cached_client.get("/api/users")).json()["data"] == []


async def test_not_found_is_not_cached(cached_client: AsyncClient, fake_cache) -> None:
    assert (await cached_client.get("/api/users/777")).status_code == 404
    assert "user:777" not in fake_cache.data


async def test_pages_are_cached_and_invalidated(cached_client: AsyncClient, fake_cache) -> None:
    for i in range(1, 4):
        await _create(cached_client, f"user-{i}", f"user{i}@example.com")

    first = await cached_client.get("/api/users", params={"page": 1, "limit": 2})
    second = await cached_client.get("/api/users", params={"page": 1, "limit": 2})
    assert first.json()["source"] == "database"
    assert second.json()["source"] == "cache"
    assert second.json()["pagination"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}
    assert "users:page:1:2" in fake_cache.data

    await _create(cached_client, "user-4", "user4@example.com")

    assert "users:page:1:2" not in fake_cache.data
    third = await cached_client.get("/api/users", params={"page": 2, "limit": 2})
    assert third.json()["pagination"]["total"] == 4


async def test_cache_outage_falls_back_to_store(cached_client: AsyncClient, fake_cache) -> None:
    """With the cache down every read comes from the store and writes still succeed."""
    fake_cache.available = False
    user = await _create(cached_client, "Alice", "alice@example.com")

    for _ in range(2):
        response = await cached_client.get(f"/api/users/{user['id']}")
        assert response.status_code == 200
        assert response.json()["source"] == "database"


async def test_cache_lookups_are_counted(cached_client: AsyncClient) -> None:
    await _create(cached_client, "Alice", "alice@example.com")
    await cached_client.get("/api/users")
    await cached_client.get("/api/users")

    body = (await cached_client.get("/metrics")).text
    assert 'cache_lookups_total{key_type="users_all",result="miss"} 1.0' in body
    assert 'cache_lookups_total{key_type="users_all",result="hit"} 1.0' in body
