"""
FileStorage adapter for the Roster student store.

Implements the StudentStorage protocol on top of a single JSON file.
The file holds one object mapping slot keys to their text blobs, so several
named slots can share it.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from roster.kernel.store import StorageError, StudentStorage

logger = logging.getLogger(__name__)


class FileStorage(StudentStorage):
    """
    File-based storage for student slots.

    Every set() rewrites the whole file through a temporary sibling and an
    atomic replace, so a crash mid-write leaves the previous contents intact.
    """

    def __init__(self, path: str | os.PathLike[str]):
        self.path = Path(path)

    def get(self, key: str) -> str | None:
        """Fetch the blob for key. Returns None if the file or key is missing."""
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"{self.path}: slot {key!r} does not hold text")
        return value

    def set(self, key: str, value: str) -> None:
        """Write the blob for key, keeping other slots."""
        try:
            slots = self._read_all()
        except StorageError:
            self._set_aside()
            slots = {}
        slots[key] = value

        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(slots, f, indent=2)
            os.replace(tmp, self.path)
        except OSError as e:
            raise StorageError(f"{self.path}: {e}") from e

    def _read_all(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageError(f"{self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"{self.path}: expected a JSON object")
        return data

    def _set_aside(self) -> None:
        """Move an unreadable file to <name>.corrupt so its other slots survive."""
        corrupt = self.path.with_name(self.path.name + ".corrupt")
        try:
            os.replace(self.path, corrupt)
        except OSError as e:
            raise StorageError(f"{self.path}: {e}") from e
        logger.warning("file_storage: %s is unreadable, moved it to %s", self.path, corrupt)
