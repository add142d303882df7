from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024
INVENTORY_FILE_NAME = "inventory.json"
PHOTO_DIR_NAME = "photos"

LogLevel = Literal["critical", "error", "warning", "info", "debug"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    host: str = Field(..., alias="INVENTORY_HOST")
    port: int = Field(..., alias="INVENTORY_PORT", ge=1, le=65535)
    cache_dir: Path = Field(..., alias="INVENTORY_CACHE_DIR")

    # Defaults to <cache_dir>/inventory.json when unset.
    data_file: Path | None = Field(None, alias="INVENTORY_DATA_FILE")

    max_upload_bytes: int = Field(DEFAULT_MAX_UPLOAD_BYTES, alias="INVENTORY_MAX_UPLOAD_BYTES", gt=0)
    log_level: LogLevel = Field("info", alias="INVENTORY_LOG_LEVEL")

    @field_validator("host", mode="before")
    @classmethod
    def _normalize_host(cls, v: object) -> object:
        if isinstance(v, str):
            host = v.strip()
            if not host:
                raise ValueError("host must not be empty")
            return host
        return v

    @field_validator("data_file", mode="before")
    @classmethod
    def _normalize_data_file(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower() or "info"
        return v

    @property
    def inventory_file(self) -> Path:
        return self.data_file if self.data_file is not None else self.cache_dir / INVENTORY_FILE_NAME

    @property
    def photo_dir(self) -> Path:
        return self.cache_dir / PHOTO_DIR_NAME

    def ensure_directories(self) -> None:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.photo_dir.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    return Settings()
