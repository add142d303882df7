from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from inventory_service.api.deps import get_photo_store, get_record_store
from inventory_service.core.errors import ApiError
from inventory_service.schemas.inventory import InventoryMutationOut, InventoryRecord, error_responses
from inventory_service.services.photo_store import PhotoStore, has_upload
from inventory_service.services.record_store import RecordStore


logger = logging.getLogger(__name__)

router = APIRouter()


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.post(
    "",
    response_model=InventoryMutationOut,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(400, 500),
)
async def register_inventory_item(
    inventory_name: str | None = Form(default=None),
    description: str | None = Form(default=None),
    photo: UploadFile | None = File(default=None),
    store: RecordStore = Depends(get_record_store),
    photos: PhotoStore = Depends(get_photo_store),
) -> InventoryMutationOut:
    # The upload filter runs before field validation.
    content = await photos.validate_upload(photo) if has_upload(photo) else None

    if not inventory_name:
        raise ApiError(400, "Name is required")

    records = store.load_all()
    photo_filename = photos.save(content, photo.filename) if content is not None else None
    record = InventoryRecord(
        id=store.next_id(records),
        inventory_name=inventory_name,
        description=description or "",
        photo_filename=photo_filename,
        created_at=_utc_timestamp(),
    )
    records.append(record)

    if not store.save_all(records):
        photos.try_delete(photo_filename)
        raise ApiError(500, "Data save error")

    logger.info("Registered inventory record %s (%s)", record.id, record.inventory_name)
    return InventoryMutationOut(message="Device registered successfully", inventory=record.model_dump())
