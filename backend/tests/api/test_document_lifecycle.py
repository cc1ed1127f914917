"""Document Lifecycle: read, update, delete and list through the HTTP surface.

Invariants:
    - GET /api/{slug} returns the stored JSON value exactly (no envelope)
    - PUT replaces jsonData and moves updatedAt past createdAt
    - DELETE is a hard delete: later reads 404, listing omits the slug
    - Invalid slugs are 400 on every path without touching the store
"""

import pytest


async def test_read_returns_stored_json_verbatim(client, seed_widgets):
    res = await client.get("/api/widgets")
    assert res.status_code == 200
    assert res.json() == {"a": 1}


async def test_read_preserves_nested_arrays_and_primitives(client):
    await client.post("/api/create", json={
        "name": "Grid", "jsonData": "[[1, 2], [3, 4]]", "slug": "grid",
    })
    await client.post("/api/create", json={
        "name": "Answer", "jsonData": "42", "slug": "answer",
    })
    assert (await client.get("/api/grid")).json() == [[1, 2], [3, 4]]
    assert (await client.get("/api/answer")).json() == 42


async def test_read_missing_returns_404(client):
    res = await client.get("/api/missing")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_update_then_read(client, store, seed_widgets):
    res = await client.put("/api/widgets", json={"jsonData": '{"a": 2}'})
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "API Updated"}

    assert (await client.get("/api/widgets")).json() == {"a": 2}
    doc = store.documents["widgets"]
    assert doc.updated_at > doc.created_at


async def test_update_missing_returns_404(client):
    res = await client.put("/api/nothing-here", json={"jsonData": "{}"})
    assert res.status_code == 404


async def test_update_with_invalid_json_keeps_document(client, store, seed_widgets):
    store.calls.clear()
    res = await client.put("/api/widgets", json={"jsonData": "{bad"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_JSON"
    assert store.calls == []
    assert store.documents["widgets"].json_data == {"a": 1}


async def test_update_with_overflowing_float_keeps_document(client, store, seed_widgets):
    store.calls.clear()
    res = await client.put("/api/widgets", json={"jsonData": "[1e400]"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_JSON"
    assert store.calls == []


async def test_update_without_json_data_returns_400(client, seed_widgets):
    res = await client.put("/api/widgets", json={})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "MISSING_FIELDS"


async def test_delete_then_read_and_list(client, seed_widgets):
    res = await client.delete("/api/widgets")
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "API Deleted"}

    assert (await client.get("/api/widgets")).status_code == 404
    listing = (await client.get("/api")).json()
    assert "widgets" not in [e["slug"] for e in listing["endpoints"]]


async def test_delete_missing_returns_404(client):
    res = await client.delete("/api/missing")
    assert res.status_code == 404


@pytest.mark.parametrize("method", ["get", "delete"])
async def test_invalid_slug_rejected_on_path(client, store, method):
    res = await getattr(client, method)("/api/Bad_Slug")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_SLUG"
    assert store.calls == []


async def test_invalid_slug_rejected_on_update(client, store):
    res = await client.put("/api/Bad_Slug", json={"jsonData": "{}"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_SLUG"
    assert store.calls == []


async def test_create_is_a_readable_slug(client):
    # "create" is only special for POST
    await client.post("/api/create", json={
        "name": "Create", "jsonData": '{"c": true}', "slug": "create",
    })
    res = await client.get("/api/create")
    assert res.status_code == 200
    assert res.json() == {"c": True}


# --- Listing ------------------------------------------------------------------

async def test_empty_listing(client):
    res = await client.get("/api")
    assert res.status_code == 200
    assert res.json() == {"count": 0, "endpoints": []}


async def test_listing_newest_first_without_json_data(client):
    for slug in ("first", "second", "third"):
        await client.post("/api/create", json={
            "name": slug.title(), "jsonData": "{}", "slug": slug,
        })

    res = await client.get("/api")
    body = res.json()
    assert body["count"] == 3
    assert [e["slug"] for e in body["endpoints"]] == ["third", "second", "first"]
    first = body["endpoints"][-1]
    assert set(first) == {"slug", "name", "createdAt", "endpoint"}
    assert first["endpoint"] == "/api/first"
    assert first["name"] == "First"


# --- Store failures -----------------------------------------------------------

async def test_store_failure_returns_500_with_details_in_development(client, store):
    store.fail_with = ConnectionError("firestore unavailable")
    res = await client.get("/api")
    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "STORE_ERROR"
    assert error["message"] == "Internal server error"
    assert "firestore unavailable" in error["details"]
