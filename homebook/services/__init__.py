"""Services package."""

from homebook.services.storage import (
    AuditStorageInterface,
    CorruptDataError,
    InMemoryAuditStorage,
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    QuotaExceededError,
    StorageError,
)

__all__ = [
    "AuditStorageInterface",
    "CorruptDataError",
    "InMemoryAuditStorage",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "QuotaExceededError",
    "StorageError",
]
