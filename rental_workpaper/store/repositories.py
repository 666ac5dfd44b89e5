"""Typed repositories over the raw backend collections."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

from rental_workpaper.exceptions import StoreError
from rental_workpaper.sinks.serialization import to_dict
from rental_workpaper.store.backends import StorageBackend

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Repository(Generic[T]):
    """Keyed collection of one entity type.

    Backend failures are logged and treated as "no effect": reads fall back
    to an empty collection and failed writes return ``None``/``False``.

    Parameters
    ----------
    backend : StorageBackend
        Storage for the raw payloads.
    collection : str
        Collection name in the backend.
    key_field : str
        Attribute holding the entity identifier.
    decode : Callable[[dict], T]
        Builds an entity from its stored dict.
    parent_field : str | None
        Attribute holding the parent identifier, for ``list_by_parent``.
    """

    def __init__(
        self,
        backend: StorageBackend,
        collection: str,
        key_field: str,
        decode: Callable[[dict[str, Any]], T],
        parent_field: str | None = None,
    ) -> None:
        self.backend = backend
        self.collection = collection
        self.key_field = key_field
        self.parent_field = parent_field
        self._decode = decode

    def _load_records(self) -> list[dict[str, Any]]:
        try:
            data = self.backend.read(self.collection)
        except StoreError as e:
            logger.error("Failed to load %s: %s", self.collection, e)
            return []
        return data if isinstance(data, list) else []

    def _save_records(self, records: list[dict[str, Any]]) -> bool:
        try:
            self.backend.write(self.collection, records)
        except StoreError as e:
            logger.error("Failed to save %s: %s", self.collection, e)
            return False
        return True

    def _decode_all(self, records: list[dict[str, Any]]) -> list[T]:
        entities = []
        for record in records:
            try:
                entities.append(self._decode(record))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(
                    "Skipping unreadable %s record %s: %s",
                    self.collection,
                    record.get(self.key_field) if isinstance(record, dict) else None,
                    e,
                )
        return entities

    def _key(self, entity: T) -> str:
        return getattr(entity, self.key_field)

    def all(self) -> list[T]:
        """Return every entity in stored order."""
        return self._decode_all(self._load_records())

    def get(self, entity_id: str) -> T | None:
        """Return the entity with the given id, or ``None``."""
        for record in self._load_records():
            if record.get(self.key_field) == entity_id:
                found = self._decode_all([record])
                return found[0] if found else None
        return None

    def list_by_parent(self, parent_id: str) -> list[T]:
        """Return entities whose parent field equals ``parent_id``."""
        if self.parent_field is None:
            raise TypeError(f"{self.collection} has no parent field")
        records = [r for r in self._load_records() if r.get(self.parent_field) == parent_id]
        return self._decode_all(records)

    def find(self, predicate: Callable[[T], bool]) -> list[T]:
        """Return entities matching ``predicate``."""
        return [entity for entity in self.all() if predicate(entity)]

    def insert(self, entity: T) -> T | None:
        """Append a new entity; returns ``None`` if the write failed."""
        records = self._load_records()
        records.append(to_dict(entity))
        return entity if self._save_records(records) else None

    def update(self, entity: T) -> T | None:
        """Replace a stored entity by id; ``None`` if unknown or the write failed."""
        entity_id = self._key(entity)
        records = self._load_records()
        for idx, record in enumerate(records):
            if record.get(self.key_field) == entity_id:
                records[idx] = to_dict(entity)
                return entity if self._save_records(records) else None
        return None

    def delete(self, entity_id: str) -> T | None:
        """Remove an entity by id and return it, or ``None`` if unknown."""
        records = self._load_records()
        kept = [r for r in records if r.get(self.key_field) != entity_id]
        removed = [r for r in records if r.get(self.key_field) == entity_id]
        if not removed or not self._save_records(kept):
            return None
        decoded = self._decode_all(removed)
        return decoded[0] if decoded else None

    def delete_by_parent(self, parent_id: str) -> int:
        """Remove every entity of a parent; returns the number removed."""
        if self.parent_field is None:
            raise TypeError(f"{self.collection} has no parent field")
        records = self._load_records()
        kept = [r for r in records if r.get(self.parent_field) != parent_id]
        removed = len(records) - len(kept)
        if removed and not self._save_records(kept):
            return 0
        return removed

    def count(self) -> int:
        return len(self._load_records())


class SettingsRepository:
    """Single stored settings object."""

    collection = "settings"

    def __init__(self, backend: StorageBackend) -> None:
        self.backend = backend

    def load(self) -> dict[str, Any]:
        """Return the stored overrides, or an empty dict."""
        try:
            data = self.backend.read(self.collection)
        except StoreError as e:
            logger.error("Failed to load settings: %s", e)
            return {}
        return data if isinstance(data, dict) else {}

    def save(self, data: dict[str, Any]) -> bool:
        try:
            self.backend.write(self.collection, data)
        except StoreError as e:
            logger.error("Failed to save settings: %s", e)
            return False
        return True
