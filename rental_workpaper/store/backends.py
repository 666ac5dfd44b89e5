"""Storage backends holding the raw record collections.

A backend only knows collection names and JSON-compatible payloads;
typed access lives in :mod:`rental_workpaper.store.repositories`.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Protocol

from rental_workpaper.exceptions import StoreError

COLLECTIONS = ("properties", "workpapers", "evidence", "activities", "settings")


class StorageBackend(Protocol):
    """Keyed persistence for named collections."""

    def read(self, collection: str) -> Any | None:
        """Return the stored payload, or ``None`` if nothing was stored."""
        ...

    def write(self, collection: str, data: Any) -> None:
        """Replace the stored payload."""
        ...


class InMemoryBackend:
    """Backend keeping collections in a dict; payloads are copied in and out."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def read(self, collection: str) -> Any | None:
        if collection not in self._data:
            return None
        return copy.deepcopy(self._data[collection])

    def write(self, collection: str, data: Any) -> None:
        self._data[collection] = copy.deepcopy(data)

    def clear(self) -> None:
        """Drop every collection."""
        self._data.clear()


class JsonFileBackend:
    """Backend storing each collection as ``<data_dir>/<collection>.json``."""

    def __init__(self, data_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file backend.

        Parameters
        ----------
        data_dir : str | Path
            Directory holding the collection files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty

    def _path(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    def read(self, collection: str) -> Any | None:
        file_path = self._path(collection)
        if not file_path.exists():
            return None
        try:
            with open(file_path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise StoreError(f"Failed to load {collection} from {file_path}: {e}") from e

    def write(self, collection: str, data: Any) -> None:
        file_path = self._path(collection)
        tmp_path = file_path.with_suffix(".json.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                else:
                    json.dump(data, f, ensure_ascii=False)
            tmp_path.replace(file_path)
        except (OSError, TypeError, ValueError) as e:
            raise StoreError(f"Failed to save {collection} to {file_path}: {e}") from e
