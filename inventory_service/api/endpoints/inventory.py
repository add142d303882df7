from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import FileResponse

from inventory_service.api.deps import get_photo_store, get_record_store, parse_record_id, read_body_fields
from inventory_service.core.errors import ApiError
from inventory_service.schemas.inventory import InventoryMutationOut, error_responses
from inventory_service.services.photo_store import PhotoStore, has_upload
from inventory_service.services.record_store import RecordStore, find_index


logger = logging.getLogger(__name__)

router = APIRouter()

UPDATABLE_FIELDS = ("inventory_name", "description")


@router.api_route("", methods=["GET", "HEAD"])
async def list_inventory(store: RecordStore = Depends(get_record_store)) -> list[dict[str, Any]]:
    return [r.to_out() for r in store.load_all()]


@router.api_route("/{item_id}", methods=["GET", "HEAD"], responses=error_responses(404))
async def get_inventory_item(item_id: str, store: RecordStore = Depends(get_record_store)) -> dict[str, Any]:
    records = store.load_all()
    idx = find_index(records, parse_record_id(item_id))
    if idx is None:
        raise ApiError(404, "Device not found")
    return records[idx].to_out()


@router.put("/{item_id}", response_model=InventoryMutationOut, responses=error_responses(400, 404, 500))
async def update_inventory_item(
    item_id: str,
    request: Request,
    store: RecordStore = Depends(get_record_store),
) -> InventoryMutationOut:
    data = await read_body_fields(request)

    records = store.load_all()
    idx = find_index(records, parse_record_id(item_id))
    if idx is None:
        raise ApiError(404, "Device not found")

    record = records[idx]
    # Present fields overwrite, including empty strings; null counts as absent.
    for field in UPDATABLE_FIELDS:
        value = data.get(field)
        if value is None:
            continue
        setattr(record, field, value if isinstance(value, str) else str(value))

    if not store.save_all(records):
        raise ApiError(500, "Data save error")

    logger.info("Updated inventory record %s", record.id)
    return InventoryMutationOut(message="Device updated successfully", inventory=record.model_dump())


@router.api_route(
    "/{item_id}/photo",
    methods=["GET", "HEAD"],
    responses={200: {"content": {"image/jpeg": {}}}, **error_responses(404)},
)
async def get_inventory_photo(
    item_id: str,
    store: RecordStore = Depends(get_record_store),
    photos: PhotoStore = Depends(get_photo_store),
) -> FileResponse:
    records = store.load_all()
    idx = find_index(records, parse_record_id(item_id))
    if idx is None or not records[idx].photo_filename:
        raise ApiError(404, "Photo not found")

    path = photos.path_for(records[idx].photo_filename)
    if path is None:
        raise ApiError(404, "Photo file not found")

    # Stored format is not tracked; always served as JPEG.
    return FileResponse(path=str(path), media_type="image/jpeg")


@router.put("/{item_id}/photo", response_model=InventoryMutationOut, responses=error_responses(400, 404, 500))
async def replace_inventory_photo(
    item_id: str,
    photo: UploadFile | None = File(default=None),
    store: RecordStore = Depends(get_record_store),
    photos: PhotoStore = Depends(get_photo_store),
) -> InventoryMutationOut:
    content = await photos.validate_upload(photo) if has_upload(photo) else None
    if content is None:
        raise ApiError(400, "No photo provided")

    records = store.load_all()
    idx = find_index(records, parse_record_id(item_id))
    if idx is None:
        raise ApiError(404, "Device not found")

    record = records[idx]
    new_filename = photos.save(content, photo.filename)
    photos.try_delete(record.photo_filename)
    record.photo_filename = new_filename

    if not store.save_all(records):
        photos.try_delete(new_filename)
        raise ApiError(500, "Data save error")

    logger.info("Replaced photo of inventory record %s with %s", record.id, new_filename)
    return InventoryMutationOut(message="Photo updated successfully", inventory=record.model_dump())


@router.delete("/{item_id}", response_model=InventoryMutationOut, responses=error_responses(404, 500))
async def delete_inventory_item(
    item_id: str,
    store: RecordStore = Depends(get_record_store),
    photos: PhotoStore = Depends(get_photo_store),
) -> InventoryMutationOut:
    records = store.load_all()
    idx = find_index(records, parse_record_id(item_id))
    if idx is None:
        raise ApiError(404, "Device not found")

    deleted = records.pop(idx)
    photos.try_delete(deleted.photo_filename)

    if not store.save_all(records):
        raise ApiError(500, "Data save error")

    logger.info("Deleted inventory record %s", deleted.id)
    return InventoryMutationOut(message="Device deleted successfully", inventory=deleted.model_dump())
