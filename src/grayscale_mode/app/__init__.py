"""Application layer: operator option persistence (the settings provider)."""

from .options_store import (  # noqa: F401
    GrayscaleOptions,
    OPTIONS_VERSION,
    clamp_intensity,
    default_options,
    load_options,
    sanitize_options,
    save_options,
)

__all__ = [
    "GrayscaleOptions",
    "OPTIONS_VERSION",
    "clamp_intensity",
    "default_options",
    "load_options",
    "sanitize_options",
    "save_options",
]
