from __future__ import annotations

from typing import Dict, Optional

from grayscale_mode.app.options_store import GrayscaleOptions
from grayscale_mode.services.configuration import Configuration
from grayscale_mode.services.document import Document
from grayscale_mode.services.storage import InMemoryStorage, StorageAccessError


class FailingStorage:
    """Storage whose reads and/or writes always fail (disabled / quota exceeded)."""

    def __init__(self, *, fail_reads: bool = True, fail_writes: bool = True) -> None:
        self._inner = InMemoryStorage()
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.write_attempts = 0

    def get_item(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise StorageAccessError("storage disabled")
        return self._inner.get_item(key)

    def set_item(self, key: str, value: str) -> None:
        self.write_attempts += 1
        if self.fail_writes:
            raise StorageAccessError("quota exceeded")
        self._inner.set_item(key, value)

    def remove_item(self, key: str) -> None:
        self._inner.remove_item(key)


class CrashingStorage:
    """Storage raising something other than StorageAccessError."""

    def get_item(self, key: str) -> Optional[str]:
        raise PermissionError("SecurityError: access denied")

    def set_item(self, key: str, value: str) -> None:
        raise OSError("disk full")

    def remove_item(self, key: str) -> None:
        raise OSError("disk full")


def make_config(**overrides) -> Configuration:
    return Configuration(**overrides)


def make_options(**overrides) -> GrayscaleOptions:
    return GrayscaleOptions(**overrides)


def make_storage(items: Dict[str, str] | None = None) -> InMemoryStorage:
    return InMemoryStorage(items)


def page_with_controls(*ids: str, kind: str = "inline") -> Document:
    buttons = "".join(
        f'<button id="{i}" data-sgm-surface="{kind}" aria-pressed="false">Toggle</button>' for i in ids
    )
    return Document.parse(f"<!DOCTYPE html><html><head></head><body>{buttons}</body></html>")
