from __future__ import annotations

import httpx
import pytest

from inventory_service.api.deps import parse_record_id


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("GET", "/nope"),
        ("POST", "/inventory"),
        ("PATCH", "/inventory/1"),
        ("GET", "/register"),
        ("DELETE", "/search"),
        ("POST", "/inventory/1/photo"),
    ],
)
async def test_unmatched_routes_are_method_not_allowed(client: httpx.AsyncClient, method: str, path: str) -> None:
    resp = await client.request(method, path)
    assert resp.status_code == 405
    assert resp.json() == {"error": "Method Not Allowed"}


@pytest.mark.asyncio
@pytest.mark.parametrize(("path", "action"), [("/RegisterForm.html", "/register"), ("/SearchForm.html", "/search")])
async def test_static_forms_are_served(client: httpx.AsyncClient, path: str, action: str) -> None:
    resp = await client.get(path)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert f'action="{action}"' in resp.text


def test_parse_record_id_is_lenient() -> None:
    assert parse_record_id("42") == 42
    assert parse_record_id("  7") == 7
    assert parse_record_id("12abc") == 12
    assert parse_record_id("-3") == -3
    assert parse_record_id(5) == 5
    assert parse_record_id(2.9) == 2
    assert parse_record_id("abc") is None
    assert parse_record_id("") is None
    assert parse_record_id(None) is None
    assert parse_record_id(True) is None


@pytest.mark.asyncio
async def test_get_routes_answer_head(client: httpx.AsyncClient) -> None:
    await client.post("/register", data={"inventory_name": "Desk"})

    for path in ("/inventory", "/inventory/1", "/RegisterForm.html"):
        resp = await client.head(path)
        assert resp.status_code == 200

    assert (await client.head("/inventory/9")).status_code == 404
    assert (await client.head("/nope")).status_code == 405


@pytest.mark.asyncio
async def test_openapi_documents_error_envelope(client: httpx.AsyncClient) -> None:
    schema = (await client.get("/openapi.json")).json()

    assert schema["components"]["schemas"]["ErrorOut"]["required"] == ["error"]
    not_found = schema["paths"]["/inventory/{item_id}"]["delete"]["responses"]["404"]
    assert not_found["content"]["application/json"]["schema"]["$ref"] == "#/components/schemas/ErrorOut"
    register_errors = schema["paths"]["/register"]["post"]["responses"]
    assert {"400", "500"} <= set(register_errors)
