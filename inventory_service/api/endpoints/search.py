from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from inventory_service.api.deps import get_record_store, parse_record_id, read_body_fields
from inventory_service.core.errors import ApiError
from inventory_service.schemas.inventory import error_responses, photo_url_for
from inventory_service.services.record_store import RecordStore, find_index


router = APIRouter()


@router.post("", responses=error_responses(400, 404))
async def search_inventory_item(request: Request, store: RecordStore = Depends(get_record_store)) -> dict[str, Any]:
    """
    Look a record up by ``id``.

    With ``has_photo == "true"`` and a stored photo, the photo link is appended
    to the description of the response only; the stored record is untouched.
    """
    data = await read_body_fields(request)
    raw_id = data.get("id")
    if raw_id is None or raw_id == "" or (isinstance(raw_id, (int, float)) and not raw_id):
        raise ApiError(400, "ID is required")

    records = store.load_all()
    idx = find_index(records, parse_record_id(raw_id))
    if idx is None:
        raise ApiError(404, "Device not found")

    record = records[idx]
    result = record.to_out()
    if data.get("has_photo") == "true" and record.photo_filename:
        result["description"] = f"{record.description}\n[Photo: {photo_url_for(record.id)}]"
    return result
