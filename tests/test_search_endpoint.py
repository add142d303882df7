from __future__ import annotations

import httpx
import pytest


@pytest.mark.asyncio
async def test_search_appends_photo_marker_without_persisting(client: httpx.AsyncClient, image_bytes) -> None:
    await client.post(
        "/register",
        data={"inventory_name": "Camera", "description": "Mirrorless"},
        files={"photo": ("camera.png", image_bytes(), "image/png")},
    )

    resp = await client.post("/search", data={"id": "1", "has_photo": "true"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["description"] == "Mirrorless\n[Photo: /inventory/1/photo]"
    assert body["photo_url"] == "/inventory/1/photo"

    fetched = (await client.get("/inventory/1")).json()
    assert fetched["description"] == "Mirrorless"


@pytest.mark.asyncio
async def test_search_without_flag_matches_get(client: httpx.AsyncClient, image_bytes) -> None:
    await client.post(
        "/register",
        data={"inventory_name": "Camera", "description": "Mirrorless"},
        files={"photo": ("camera.png", image_bytes(), "image/png")},
    )

    for flag in (None, "false", "TRUE"):
        data = {"id": "1"} if flag is None else {"id": "1", "has_photo": flag}
        resp = await client.post("/search", data=data)
        assert resp.status_code == 200
        assert resp.json() == (await client.get("/inventory/1")).json()


@pytest.mark.asyncio
async def test_search_flag_ignored_without_photo(client: httpx.AsyncClient) -> None:
    await client.post("/register", data={"inventory_name": "Desk", "description": "Oak"})

    resp = await client.post("/search", data={"id": "1", "has_photo": "true"})
    assert resp.status_code == 200
    assert resp.json()["description"] == "Oak"
    assert resp.json()["photo_url"] is None


@pytest.mark.asyncio
async def test_search_accepts_json_body(client: httpx.AsyncClient) -> None:
    await client.post("/register", data={"inventory_name": "Desk"})

    resp = await client.post("/search", json={"id": 1})
    assert resp.status_code == 200
    assert resp.json()["inventory_name"] == "Desk"


@pytest.mark.asyncio
async def test_search_requires_id(client: httpx.AsyncClient) -> None:
    for data in ({}, {"id": ""}, {"has_photo": "true"}):
        resp = await client.post("/search", data=data)
        assert resp.status_code == 400
        assert resp.json() == {"error": "ID is required"}


@pytest.mark.asyncio
async def test_search_unknown_id(client: httpx.AsyncClient) -> None:
    await client.post("/register", data={"inventory_name": "Desk"})

    for raw in ("7", "desk"):
        resp = await client.post("/search", data={"id": raw})
        assert resp.status_code == 404
        assert resp.json() == {"error": "Device not found"}


@pytest.mark.asyncio
async def test_search_treats_json_zero_as_missing(client: httpx.AsyncClient) -> None:
    await client.post("/register", data={"inventory_name": "Desk"})

    for raw in (0, None, ""):
        resp = await client.post("/search", json={"id": raw})
        assert resp.status_code == 400
        assert resp.json() == {"error": "ID is required"}

    resp = await client.post("/search", json={"id": "0"})
    assert resp.status_code == 404
