"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Currently implements a JSON file store and an in-memory store, but the
repositories only ever see the KeyValueStore interface.
"""

from homebook.services.storage.interface import (
    AuditStorageInterface,
    CorruptDataError,
    KeyValueStore,
    QuotaExceededError,
    StorageError,
)
from homebook.services.storage.local_storage import (
    InMemoryAuditStorage,
    JsonFileStore,
    MemoryStore,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "KeyValueStore",
    # Exceptions
    "CorruptDataError",
    "QuotaExceededError",
    "StorageError",
    # Implementations
    "InMemoryAuditStorage",
    "JsonFileStore",
    "MemoryStore",
]
