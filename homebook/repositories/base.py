"""
JSON Array Repository

Shared plumbing for repositories that keep one entity collection as a
JSON array under a single storage key.

DESIGN DECISION: Reads fail soft, writes fail loud.
- A payload that cannot be decoded is logged and read as an empty list,
  so the UI always has something to render.
- A write that fails raises StorageError; each repository decides
  whether its callers need to see it.
"""

import json
from typing import Generic, Iterable, TypeVar

import structlog
from pydantic import BaseModel

from homebook.services.storage import CorruptDataError, KeyValueStore, StorageError

ModelT = TypeVar("ModelT", bound=BaseModel)

logger = structlog.get_logger(__name__)


class JsonArrayRepository(Generic[ModelT]):
    """Owns exclusive access to one storage key."""

    model: type[ModelT]

    def __init__(self, store: KeyValueStore, key: str):
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def get_all(self) -> list[ModelT]:
        """
        Load every stored entity, in stored order.

        Never raises: any read or decode failure is logged and
        an empty list is returned.
        """
        try:
            raw = self._store.get_item(self._key)
            if raw is None:
                return []
            data = json.loads(raw)
            if not isinstance(data, list):
                raise CorruptDataError(
                    f"Expected a JSON array under {self._key!r}, got {type(data).__name__}"
                )
            return [self.model.model_validate(record) for record in data]
        except (StorageError, ValueError, TypeError) as e:
            # json.JSONDecodeError and pydantic.ValidationError are ValueErrors
            logger.error(
                "storage_read_failed",
                key=self._key,
                error_type=type(e).__name__,
                error=str(e),
            )
            return []

    def _persist(self, entities: Iterable[ModelT]) -> None:
        """Rewrite the whole collection. Raises StorageError on failure."""
        payload = json.dumps([entity.model_dump(mode="json") for entity in entities])
        self._store.set_item(self._key, payload)
