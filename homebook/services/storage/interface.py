"""
Abstract Storage Interface

DESIGN DECISION: Repositories never touch a file or a dict directly.
They go through a KeyValueStore shaped like browser local storage:
string keys, string values, synchronous access. This allows us to:
1. Keep the JSON file backend for real use
2. Use in-memory storage for testing
3. Simulate quota failures without touching the disk

The interface is intentionally simple - one key per entity type,
the whole collection serialized under it.
"""

from abc import ABC, abstractmethod
from typing import Optional

from homebook.models.audit import AuditEvent


class KeyValueStore(ABC):
    """
    Abstract interface for a local key-value store.

    Any backend (JSON file, memory, ...) must implement these methods.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a value, replacing whatever was there.

        Raises:
            QuotaExceededError: If the write would exceed the store quota
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove a key. Removing a missing key is a no-op."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """All keys currently stored."""
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_events_by_entity(self, entity_id: str) -> list[AuditEvent]:
        """All events for one entity, in chronological order."""
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptDataError(StorageError):
    """Stored payload could not be decoded."""
    pass


class QuotaExceededError(StorageError):
    """The store refused a write because it is full."""
    pass
