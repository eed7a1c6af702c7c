"""Item CRUD tests.

Learn: All requests carry a valid token (auth_headers). Gate
rejections live in test_access_gate.py.

Pattern: Build up test data using the API, then check the responses
and the camelCase wire format.
"""

import pytest


@pytest.fixture
async def item(client, auth_headers):
    r = await client.post(
        "/api/items", json={"name": "buy milk", "isComplete": False}, headers=auth_headers
    )
    return r.json()


# ═══════════════════════════════════════════════════════════
# Create / read
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_item(client, auth_headers):
    r = await client.post(
        "/api/items", json={"name": "write tests", "isComplete": False}, headers=auth_headers
    )
    assert r.status_code == 201
    body = r.json()
    assert body["name"] == "write tests"
    assert body["isComplete"] is False
    assert isinstance(body["id"], int)
    assert r.headers["Location"] == f"/api/items/{body['id']}"


@pytest.mark.asyncio
async def test_create_ignores_client_id(client, auth_headers, item):
    r = await client.post(
        "/api/items",
        json={"id": item["id"], "name": "sneaky", "isComplete": True},
        headers=auth_headers,
    )
    assert r.status_code == 201
    assert r.json()["id"] != item["id"]


@pytest.mark.asyncio
async def test_create_allows_empty_and_duplicate_names(client, auth_headers):
    for name in ("", "same", "same"):
        r = await client.post("/api/items", json={"name": name}, headers=auth_headers)
        assert r.status_code == 201

    r = await client.get("/api/items", headers=auth_headers)
    assert [i["name"] for i in r.json()] == ["", "same", "same"]


@pytest.mark.asyncio
async def test_create_keeps_long_name(client, auth_headers):
    name = "x" * 500
    r = await client.post("/api/items", json={"name": name}, headers=auth_headers)
    assert r.status_code == 201

    r = await client.get(f"/api/items/{r.json()['id']}", headers=auth_headers)
    assert r.json()["name"] == name


@pytest.mark.asyncio
async def test_create_accepts_snake_case(client, auth_headers):
    r = await client.post(
        "/api/items", json={"name": "snake", "is_complete": True}, headers=auth_headers
    )
    assert r.status_code == 201
    assert r.json()["isComplete"] is True


@pytest.mark.asyncio
async def test_list_items(client, auth_headers):
    r = await client.get("/api/items", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == []

    for name in ("a", "b"):
        await client.post("/api/items", json={"name": name}, headers=auth_headers)

    r = await client.get("/api/items", headers=auth_headers)
    assert sorted(i["name"] for i in r.json()) == ["a", "b"]


@pytest.mark.asyncio
async def test_get_item(client, auth_headers, item):
    r = await client.get(f"/api/items/{item['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == item


@pytest.mark.asyncio
async def test_get_missing_item(client, auth_headers):
    r = await client.get("/api/items/99999", headers=auth_headers)
    assert r.status_code == 404


# ═══════════════════════════════════════════════════════════
# Update / delete
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_update_item(client, auth_headers, item):
    r = await client.put(
        f"/api/items/{item['id']}",
        json={"name": "x", "isComplete": True},
        headers=auth_headers,
    )
    assert r.status_code == 204
    assert r.content == b""

    r = await client.get(f"/api/items/{item['id']}", headers=auth_headers)
    assert r.json() == {"id": item["id"], "name": "x", "isComplete": True}


@pytest.mark.asyncio
async def test_update_never_changes_id(client, auth_headers, item):
    r = await client.put(
        f"/api/items/{item['id']}",
        json={"id": item["id"] + 100, "name": "moved?", "isComplete": False},
        headers=auth_headers,
    )
    assert r.status_code == 204

    r = await client.get(f"/api/items/{item['id']}", headers=auth_headers)
    assert r.json()["name"] == "moved?"
    r = await client.get(f"/api/items/{item['id'] + 100}", headers=auth_headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_update_missing_item(client, auth_headers):
    r = await client.put(
        "/api/items/99999", json={"name": "x", "isComplete": True}, headers=auth_headers
    )
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_delete_item(client, auth_headers, item):
    r = await client.delete(f"/api/items/{item['id']}", headers=auth_headers)
    assert r.status_code == 204

    r = await client.get(f"/api/items/{item['id']}", headers=auth_headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_delete_missing_item(client, auth_headers):
    r = await client.delete("/api/items/99999", headers=auth_headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_crud_lifecycle(client, auth_headers):
    """create → get → update → get → delete → get."""
    r = await client.post(
        "/api/items", json={"name": "lifecycle", "isComplete": False}, headers=auth_headers
    )
    created = r.json()

    r = await client.get(f"/api/items/{created['id']}", headers=auth_headers)
    assert r.json() == created

    await client.put(
        f"/api/items/{created['id']}",
        json={"name": "x", "isComplete": True},
        headers=auth_headers,
    )
    r = await client.get(f"/api/items/{created['id']}", headers=auth_headers)
    assert r.json() == {"id": created["id"], "name": "x", "isComplete": True}

    await client.delete(f"/api/items/{created['id']}", headers=auth_headers)
    r = await client.get(f"/api/items/{created['id']}", headers=auth_headers)
    assert r.status_code == 404
