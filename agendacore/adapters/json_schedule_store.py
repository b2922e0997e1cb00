"""
File-backed schedule store: one JSON document keyed by owner (``store:42``).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..domain.exceptions import StorageError
from ..services.schedule_service import OwnerRef

logger = logging.getLogger(__name__)


class JsonScheduleStore:
    """
    Persists weekly schedules as opaque JSON values.

    The file is read on every ``load`` and rewritten on every ``save``, so
    several store instances pointing at the same path see each other's
    writes. Not safe for concurrent writers.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self, owner: OwnerRef) -> Optional[Any]:
        return self._read().get(owner.key)

    def save(self, owner: OwnerRef, payload: List[dict]) -> None:
        data = self._read()
        data[owner.key] = payload
        self._write(data)
        logger.info("Saved schedule for %s to %s", owner, self.path)

    def delete(self, owner: OwnerRef) -> None:
        data = self._read()
        if data.pop(owner.key, None) is None:
            return
        self._write(data)
        logger.info("Removed schedule for %s from %s", owner, self.path)

    def owners(self) -> List[str]:
        """Keys of all stored schedules."""
        return sorted(self._read())

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as file_handle:
                data = json.load(file_handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Could not read schedules from {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise StorageError(f"Schedule file {self.path} must contain a JSON object")
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as file_handle:
                json.dump(data, file_handle, ensure_ascii=False, indent=2)
            tmp_path.replace(self.path)
        except OSError as exc:
            logger.warning("Could not save schedules to %s: %s", self.path, exc)
            raise StorageError(f"Could not write schedules to {self.path}: {exc}") from exc
