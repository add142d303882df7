from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from inventory_service.core.config import Settings
from inventory_service.schemas.inventory import InventoryRecord


logger = logging.getLogger(__name__)


class RecordStore:
    """
    Whole-file JSON store for inventory records.

    Every call reads or rewrites the complete file. There is no locking: two
    concurrent read-modify-write cycles can overwrite each other.
    """

    def __init__(self, settings: Settings) -> None:
        self.path: Path = settings.inventory_file

    def load_all(self) -> list[InventoryRecord]:
        """
        Return every stored record.

        A missing file, a file that is not JSON, or a JSON value that is not an
        array counts as empty. Inside a valid array, loosely typed fields are
        coerced per record; an entry that still has no usable id or name is
        skipped with a warning instead of discarding the whole collection.
        """
        if not self.path.is_file():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Inventory file %s unreadable, treating as empty: %s", self.path, exc)
            return []
        if not isinstance(data, list):
            logger.warning("Inventory file %s does not hold a JSON array, treating as empty", self.path)
            return []

        records: list[InventoryRecord] = []
        for position, entry in enumerate(data):
            try:
                records.append(InventoryRecord.model_validate(entry))
            except ValidationError as exc:
                logger.warning("Skipping invalid inventory entry #%d in %s: %s", position, self.path, exc)
        return records

    def save_all(self, records: Sequence[InventoryRecord]) -> bool:
        payload = json.dumps([r.model_dump() for r in records], indent=2, ensure_ascii=False)
        try:
            self.path.write_text(payload, encoding="utf-8")
        except OSError:
            logger.exception("Failed to write inventory file %s", self.path)
            return False
        return True

    @staticmethod
    def next_id(records: Sequence[InventoryRecord]) -> int:
        if not records:
            return 1
        return max(r.id for r in records) + 1


def find_index(records: Sequence[InventoryRecord], record_id: int | None) -> int | None:
    if record_id is None:
        return None
    for idx, record in enumerate(records):
        if record.id == record_id:
            return idx
    return None
