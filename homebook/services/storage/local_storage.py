"""
Local Storage Implementations

Two KeyValueStore backends:
- MemoryStore: a dict, for tests and throwaway sessions
- JsonFileStore: one JSON object file holding every key

TRADEOFFS:
- JsonFileStore re-reads the file on every access and rewrites the
  whole file on every write. Fine for a personal ledger, and it means
  two processes never hold stale copies for long.
- No locking: two processes writing at once race, last write wins.

Both stores can enforce a quota (characters across keys and values),
mirroring the browser's local storage limit.
"""

import json
import os
from pathlib import Path
from typing import Optional, Union

import structlog

from homebook.models.audit import AuditEvent
from homebook.services.storage.interface import (
    AuditStorageInterface,
    CorruptDataError,
    KeyValueStore,
    QuotaExceededError,
    StorageError,
)

logger = structlog.get_logger(__name__)


def _usage(items: dict[str, str]) -> int:
    return sum(len(key) + len(value) for key, value in items.items())


def _check_quota(items: dict[str, str], quota: Optional[int]) -> None:
    if quota is not None and _usage(items) > quota:
        raise QuotaExceededError(
            f"Storage quota of {quota} characters exceeded ({_usage(items)})"
        )


class MemoryStore(KeyValueStore):
    """In-memory key-value store."""

    def __init__(self, quota: Optional[int] = None):
        self._items: dict[str, str] = {}
        self._quota = quota

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise StorageError(f"Values must be strings, got {type(value).__name__}")
        candidate = dict(self._items)
        candidate[key] = value
        _check_quota(candidate, self._quota)
        self._items = candidate

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class JsonFileStore(KeyValueStore):
    """
    Key-value store persisted as a single JSON object on disk.

    The file maps each key to its string value. Writes go to a
    temporary file first and are then moved into place.
    """

    def __init__(self, path: Union[str, Path], quota: Optional[int] = None):
        self._path = Path(path)
        self._quota = quota

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}")

        if not text.strip():
            return {}

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptDataError(f"Storage file {self._path} is not valid JSON: {e}")

        if not isinstance(data, dict):
            raise CorruptDataError(f"Storage file {self._path} must hold a JSON object")

        # Values are always strings, like browser local storage
        return {
            str(key): value if isinstance(value, str) else json.dumps(value)
            for key, value in data.items()
        }

    def _write_all(self, items: dict[str, str]) -> None:
        _check_quota(items, self._quota)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(items, indent=2), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}")
        logger.debug("storage_file_written", path=str(self._path), keys=len(items))

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise StorageError(f"Values must be strings, got {type(value).__name__}")
        items = self._read_all()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)

    def keys(self) -> list[str]:
        return list(self._read_all())


class InMemoryAuditStorage(AuditStorageInterface):
    """
    Audit trail kept for the lifetime of the process.

    Audit events are append-only.
    """

    def __init__(self):
        self._events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_entity(self, entity_id: str) -> list[AuditEvent]:
        events = [e for e in self._events if e.entity_id == entity_id]
        events.sort(key=lambda e: e.timestamp)
        return events

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        # Insertion order breaks timestamp ties
        return list(reversed(self._events))[:limit]
