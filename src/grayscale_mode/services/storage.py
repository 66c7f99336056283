"""Per-browser key/value storage backends.

Models the browser's persistent local storage: string keys to string values,
synchronous, and fallible. Backends raise ``StorageAccessError`` for any
access problem (storage disabled, quota exceeded, unreadable profile) so
callers have a single exception type to degrade on.

Two backends are provided:
 - ``InMemoryStorage``: one browser profile living for the process lifetime.
 - ``JsonFileStorage``: one browser profile persisted as a JSON object on disk,
   so a "reload" can be simulated by constructing a fresh instance.
"""

from __future__ import annotations

import json
import os
from typing import Dict, Optional, Protocol

__all__ = [
    "BrowserStorage",
    "StorageAccessError",
    "InMemoryStorage",
    "JsonFileStorage",
]


class StorageAccessError(RuntimeError):
    """Raised when the underlying storage cannot be read or written."""


class BrowserStorage(Protocol):  # noqa: D401 - structural
    def get_item(self, key: str) -> Optional[str]: ...  # pragma: no cover

    def set_item(self, key: str, value: str) -> None: ...  # pragma: no cover

    def remove_item(self, key: str) -> None: ...  # pragma: no cover


class InMemoryStorage:
    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def snapshot(self) -> Dict[str, str]:
        return dict(self._items)


class JsonFileStorage:
    """Browser profile persisted to a JSON file.

    A missing file is an empty profile. A file that exists but cannot be
    decoded is treated as an access failure rather than silently emptied,
    mirroring a browser refusing access to a damaged profile.
    """

    FILENAME = "browser_storage.json"

    def __init__(self, base_dir: str):
        self.base_dir = base_dir
        self.path = os.path.join(base_dir, self.FILENAME)

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as exc:
            raise StorageAccessError(f"cannot read {self.path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise StorageAccessError(f"unexpected storage layout in {self.path}")
        return {str(k): str(v) for k, v in raw.items()}

    def _dump(self, items: Dict[str, str]) -> None:
        try:
            os.makedirs(self.base_dir, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, sort_keys=True)
        except OSError as exc:
            raise StorageAccessError(f"cannot write {self.path}: {exc}") from exc

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = str(value)
        self._dump(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if items.pop(key, None) is not None:
            self._dump(items)
