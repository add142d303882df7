from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


def photo_url_for(record_id: int) -> str:
    return f"/inventory/{record_id}/photo"


class InventoryRecord(BaseModel):
    # Unknown keys in the data file are kept so a rewrite does not drop them.
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: int
    inventory_name: str
    description: str = ""
    photo_filename: str | None = None
    created_at: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _fill_null_text(cls, data: Any) -> Any:
        # Older writers stored null for cleared text fields.
        if isinstance(data, dict):
            data = dict(data)
            for key in ("inventory_name", "description"):
                if key in data and data[key] is None:
                    data[key] = ""
        return data

    @property
    def photo_url(self) -> str | None:
        return photo_url_for(self.id) if self.photo_filename else None

    def to_out(self) -> dict[str, Any]:
        """Record as served by read endpoints: persisted fields plus ``photo_url``."""
        return {**self.model_dump(), "photo_url": self.photo_url}


class InventoryMutationOut(BaseModel):
    message: str
    inventory: dict[str, Any] = Field(..., description="Record as persisted, without derived fields")


class ErrorOut(BaseModel):
    error: str


def error_responses(*status_codes: int) -> dict[int | str, dict[str, Any]]:
    return {code: {"model": ErrorOut} for code in status_codes}
