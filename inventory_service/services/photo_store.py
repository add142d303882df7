from __future__ import annotations

import logging
import random
import time
from pathlib import Path

from fastapi import UploadFile

from inventory_service.core.config import Settings
from inventory_service.core.errors import UploadRejected


logger = logging.getLogger(__name__)

_RANDOM_CEILING = 1_000_000_000


def generate_photo_filename(original_filename: str | None) -> str:
    suffix = Path(original_filename or "").suffix
    return f"{int(time.time() * 1000)}-{random.randint(0, _RANDOM_CEILING)}{suffix}"


def has_upload(upload: UploadFile | None) -> bool:
    # Browsers submit an empty file part when no file was picked.
    return upload is not None and bool(upload.filename)


class PhotoStore:
    def __init__(self, settings: Settings) -> None:
        self.photo_dir: Path = settings.photo_dir
        self.max_upload_bytes = settings.max_upload_bytes

    async def validate_upload(self, upload: UploadFile) -> bytes:
        """
        Read an uploaded photo and apply the upload filter.

        Raises UploadRejected if the declared content type is not ``image/*``
        or the payload exceeds the configured size ceiling.
        """
        content_type = (upload.content_type or "").lower()
        if not content_type.startswith("image/"):
            raise UploadRejected("Only images are allowed")

        if upload.size is not None and upload.size > self.max_upload_bytes:
            raise UploadRejected("File too large. Maximum 5MB")
        content = await upload.read()
        if len(content) > self.max_upload_bytes:
            raise UploadRejected("File too large. Maximum 5MB")
        return content

    def save(self, content: bytes, original_filename: str | None) -> str:
        self.photo_dir.mkdir(parents=True, exist_ok=True)
        name = generate_photo_filename(original_filename)
        (self.photo_dir / name).write_bytes(content)
        logger.debug("Stored photo %s (%d bytes)", name, len(content))
        return name

    def try_delete(self, filename: str | None) -> None:
        """Remove a stored photo; an absent file or failed unlink is not an error."""
        if not filename:
            return
        path = self._resolve(filename)
        if path is None:
            return
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not delete photo %s: %s", path, exc)

    def path_for(self, filename: str | None) -> Path | None:
        if not filename:
            return None
        path = self._resolve(filename)
        if path is None or not path.is_file():
            return None
        return path

    def _resolve(self, filename: str) -> Path | None:
        base_dir = self.photo_dir.resolve()
        abs_path = (self.photo_dir / filename).resolve()
        try:
            abs_path.relative_to(base_dir)
        except ValueError:
            logger.warning("Photo name %r escapes the photo directory", filename)
            return None
        if abs_path == base_dir:
            return None
        return abs_path
