"""Resolved grayscale configuration for a single render.

The settings provider hands the core one ``Configuration`` per render; the
core never writes it back. All normalisation (intensity clamping, flag
coercion) happens at construction so consumers can trust every field.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from grayscale_mode.app.options_store import clamp_intensity
from grayscale_mode.config.settings import DEFAULT_BUTTON_LABEL

if TYPE_CHECKING:  # pragma: no cover
    from grayscale_mode.app.options_store import GrayscaleOptions

__all__ = ["Configuration", "RenderContext"]


class RenderContext(str, Enum):
    PUBLIC = "public"
    ADMIN = "admin"


@dataclass(frozen=True)
class Configuration:
    """Immutable settings snapshot.

    Attributes:
        enabled: Master switch for the public effect.
        intensity: Filter strength percentage, always within [0, 100].
        apply_to_admin: Whether the effect also covers the admin dashboard.
        allow_visitor_toggle: Whether any trigger surface may render.
        show_in_host_chrome: Whether the admin bar entry is offered.
        button_label: Already-sanitized plain text; escaped by renderers.
    """

    enabled: bool = True
    intensity: int = 100
    apply_to_admin: bool = False
    allow_visitor_toggle: bool = True
    show_in_host_chrome: bool = True
    button_label: str = DEFAULT_BUTTON_LABEL

    def __post_init__(self) -> None:
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "intensity", clamp_intensity(self.intensity))
        for name in ("enabled", "apply_to_admin", "allow_visitor_toggle", "show_in_host_chrome"):
            object.__setattr__(self, name, bool(getattr(self, name)))
        object.__setattr__(self, "button_label", str(self.button_label or ""))

    @classmethod
    def from_options(cls, opts: "GrayscaleOptions") -> "Configuration":
        return cls(
            enabled=opts.enabled,
            intensity=opts.intensity,
            apply_to_admin=opts.apply_admin,
            allow_visitor_toggle=opts.allow_toggle,
            show_in_host_chrome=opts.show_adminbar,
            button_label=opts.button_label,
        )

    def effect_enabled(self, context: RenderContext | str = RenderContext.PUBLIC) -> bool:
        """Return whether the filter is installed at all for ``context``."""
        if RenderContext(context) is RenderContext.ADMIN:
            return self.apply_to_admin
        return self.enabled

    def toggle_permitted(self, context: RenderContext | str = RenderContext.PUBLIC) -> bool:
        return self.allow_visitor_toggle and self.effect_enabled(context)
