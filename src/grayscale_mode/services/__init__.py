"""Service layer exports.

Responsibilities:
 - Configuration snapshot and render context
 - Preference persistence over per-browser storage
 - Effect application and trigger surfaces over the document model
"""

from .configuration import Configuration, RenderContext  # noqa: F401
from .document import Document  # noqa: F401
from .effect_applier import EffectApplier, rendered_filter  # noqa: F401
from .permissions import PermissionContext, PermissionService  # noqa: F401
from .preference_store import PreferenceStore  # noqa: F401
from .storage import (  # noqa: F401
    BrowserStorage,
    InMemoryStorage,
    JsonFileStorage,
    StorageAccessError,
)
from .trigger_surface import SurfaceKind, SurfaceState, TriggerSurface  # noqa: F401

__all__ = [
    "Configuration",
    "RenderContext",
    "Document",
    "EffectApplier",
    "rendered_filter",
    "PermissionContext",
    "PermissionService",
    "PreferenceStore",
    "BrowserStorage",
    "InMemoryStorage",
    "JsonFileStorage",
    "StorageAccessError",
    "SurfaceKind",
    "SurfaceState",
    "TriggerSurface",
]
