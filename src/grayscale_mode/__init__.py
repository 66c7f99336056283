"""Site grayscale mode public API.

Curated, intentionally small surface for hosts, the CLI and tests.

Design Principles:
- Keep exports minimal & stable; prefer namespaced access for internals
  (e.g. ``grayscale_mode.services.document``).
- No side effects on import (no file access, no logging configuration).
"""

from __future__ import annotations

from .app.options_store import (  # noqa: F401
    GrayscaleOptions,
    default_options,
    load_options,
    sanitize_options,
    save_options,
)
from .plugin import GrayscalePlugin  # noqa: F401
from .services.configuration import Configuration, RenderContext  # noqa: F401
from .services.document import Document  # noqa: F401
from .services.effect_applier import EffectApplier, rendered_filter  # noqa: F401
from .services.preference_store import PreferenceStore  # noqa: F401
from .services.storage import InMemoryStorage, JsonFileStorage, StorageAccessError  # noqa: F401
from .services.trigger_surface import SurfaceKind, SurfaceState, TriggerSurface  # noqa: F401

__version__ = "1.1.0"

__all__ = [
    "GrayscaleOptions",
    "default_options",
    "load_options",
    "sanitize_options",
    "save_options",
    "GrayscalePlugin",
    "Configuration",
    "RenderContext",
    "Document",
    "EffectApplier",
    "rendered_filter",
    "PreferenceStore",
    "InMemoryStorage",
    "JsonFileStorage",
    "StorageAccessError",
    "SurfaceKind",
    "SurfaceState",
    "TriggerSurface",
]
