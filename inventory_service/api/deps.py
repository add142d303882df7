from __future__ import annotations

import re
from json import JSONDecodeError
from typing import Any

from fastapi import Request

from inventory_service.core.errors import ApiError
from inventory_service.services.photo_store import PhotoStore
from inventory_service.services.record_store import RecordStore


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def get_photo_store(request: Request) -> PhotoStore:
    return request.app.state.photo_store


def parse_record_id(raw: object) -> int | None:
    """
    Lenient id parse: the leading integer of ``raw`` or None.

    ``"12abc"`` gives 12 and ``"abc"`` gives None, which matches no record.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    m = _LEADING_INT.match(str(raw))
    if m is None:
        return None
    return int(m.group(1))


async def read_body_fields(request: Request) -> dict[str, Any]:
    """Read a JSON object or a url-encoded/multipart form body into a plain dict."""
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith("application/json"):
        body = await request.body()
        if not body.strip():
            return {}
        try:
            data = await request.json()
        except (JSONDecodeError, UnicodeDecodeError) as e:
            raise ApiError(400, "Invalid JSON body") from e
        return data if isinstance(data, dict) else {}

    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        return {k: v for k, v in form.items() if isinstance(v, str)}

    return {}
