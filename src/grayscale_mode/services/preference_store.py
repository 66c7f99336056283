"""Visitor "forced off" preference persistence.

Holds exactly one boolean in per-browser storage under ``STORAGE_KEY``:
whether the visitor has manually turned grayscale off. Both operations are
best-effort and never raise; a browser without usable storage simply gets
a preference that resets every page load.
"""

from __future__ import annotations

import logging
from typing import Optional

from grayscale_mode.config.settings import (
    FORCED_OFF_SENTINEL,
    NOT_FORCED_OFF_VALUE,
    STORAGE_KEY,
)
from .storage import BrowserStorage

__all__ = ["PreferenceStore"]

_logger = logging.getLogger(__name__)


class PreferenceStore:
    def __init__(self, storage: Optional[BrowserStorage], key: str = STORAGE_KEY):
        self._storage = storage
        self.key = key

    def read(self) -> bool:
        """Return True only when the stored value is exactly the sentinel."""
        if self._storage is None:
            return False
        try:
            value = self._storage.get_item(self.key)
        except Exception as exc:  # noqa: BLE001 - any storage failure reads as unset
            _logger.debug("Preference read failed for %s: %s", self.key, exc)
            return False
        return value == FORCED_OFF_SENTINEL

    def write(self, forced_off: bool) -> bool:
        """Persist the preference; returns whether the write went through."""
        if self._storage is None:
            return False
        value = FORCED_OFF_SENTINEL if forced_off else NOT_FORCED_OFF_VALUE
        try:
            self._storage.set_item(self.key, value)
        except Exception as exc:  # noqa: BLE001 - quota / disabled storage
            _logger.debug("Preference write failed for %s: %s", self.key, exc)
            return False
        return True
