"""Trigger surfaces: the visitor-facing grayscale toggles.

One abstraction covers every entry point (floating button, inline
shortcode button, admin bar link). A surface is parameterized by its kind,
the id of the element it mounts on, and an optional authorization predicate.

State machine per surface:

    OFF_SHOWN (grayscale active, aria-pressed="false")
        -- activate --> ON_SHOWN (grayscale suppressed, aria-pressed="true")
    ON_SHOWN
        -- activate --> OFF_SHOWN

Activation toggles the shared root override class, writes the new state
best-effort, then re-derives the display from the actual class membership
so the control shows what is visually true even if persistence failed.
Surfaces do not observe each other; they share state only through the
root class and the storage key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import html
import logging
from typing import Callable, Optional

from bs4.element import Tag  # type: ignore

from grayscale_mode.config.settings import (
    BUTTON_STYLE_ELEMENT_ID,
    TOGGLE_BUTTON_CLASS,
    USER_OFF_CLASS,
)
from grayscale_mode.design.grayscale_stylesheet import build_toggle_button_stylesheet
from grayscale_mode.design.toggle_scripts import TITLE_OFF, TITLE_ON, build_toggle_script
from .configuration import Configuration, RenderContext
from .document import Document
from .preference_store import PreferenceStore

__all__ = [
    "SurfaceKind",
    "SurfaceState",
    "TriggerSurface",
    "SURFACE_ATTRIBUTE",
    "FLOATING_ELEMENT_ID",
    "INLINE_ELEMENT_ID",
    "HOST_CHROME_ELEMENT_ID",
    "HOST_CHROME_TITLE",
    "HOST_CHROME_HINT",
]

_logger = logging.getLogger(__name__)

SURFACE_ATTRIBUTE = "data-sgm-surface"
FLOATING_ELEMENT_ID = "sgmToggleBtn"
INLINE_ELEMENT_ID = "sgmToggleInline"
HOST_CHROME_ELEMENT_ID = "sgmToggleAdminBar"
HOST_CHROME_TITLE = "Grayscale: Toggle"
HOST_CHROME_HINT = "Toggle grayscale for this browser"


class SurfaceKind(str, Enum):
    FLOATING = "floating"
    INLINE = "inline"
    HOST_CHROME = "host_chrome"


class SurfaceState(str, Enum):
    OFF_SHOWN = "off_shown"  # grayscale active
    ON_SHOWN = "on_shown"  # grayscale suppressed by the visitor


@dataclass
class TriggerSurface:
    kind: SurfaceKind
    element_id: str
    config: Configuration
    store: PreferenceStore
    authorize: Optional[Callable[[], bool]] = None
    _document: Optional[Document] = field(default=None, init=False, repr=False)
    _element: Optional[Tag] = field(default=None, init=False, repr=False)

    # Factories -------------------------------------------------------
    @classmethod
    def floating(cls, config: Configuration, store: PreferenceStore) -> "TriggerSurface":
        return cls(SurfaceKind.FLOATING, FLOATING_ELEMENT_ID, config, store)

    @classmethod
    def inline(cls, config: Configuration, store: PreferenceStore, instance: int = 1) -> "TriggerSurface":
        element_id = INLINE_ELEMENT_ID if instance <= 1 else f"{INLINE_ELEMENT_ID}-{instance}"
        return cls(SurfaceKind.INLINE, element_id, config, store)

    @classmethod
    def host_chrome(
        cls,
        config: Configuration,
        store: PreferenceStore,
        authorize: Callable[[], bool],
    ) -> "TriggerSurface":
        return cls(SurfaceKind.HOST_CHROME, HOST_CHROME_ELEMENT_ID, config, store, authorize)

    # Render gating ---------------------------------------------------
    def should_render(self, context: RenderContext | str = RenderContext.PUBLIC) -> bool:
        if not self.config.toggle_permitted(context):
            return False
        if self.kind is SurfaceKind.HOST_CHROME and not self.config.show_in_host_chrome:
            return False
        if self.authorize is not None and not self.authorize():
            return False
        return True

    def render(self, context: RenderContext | str = RenderContext.PUBLIC) -> str:
        """Control markup plus its behaviour script, or "" when not permitted."""
        if not self.should_render(context):
            return ""
        element_id = html.escape(self.element_id)
        script = f"<script>\n{build_toggle_script(self.element_id)}</script>\n"
        if self.kind is SurfaceKind.HOST_CHROME:
            return (
                f'<a href="#" id="{element_id}" class="ab-item" role="button" '
                f'{SURFACE_ATTRIBUTE}="{self.kind.value}" aria-pressed="false" '
                f'title="{html.escape(HOST_CHROME_HINT)}">{html.escape(HOST_CHROME_TITLE)}</a>\n' + script
            )
        label = html.escape(self.config.button_label)
        markup = (
            f'<button type="button" class="{TOGGLE_BUTTON_CLASS}" id="{element_id}" '
            f'{SURFACE_ATTRIBUTE}="{self.kind.value}" aria-pressed="false" aria-label="{label}">'
            f"{label}</button>\n" + script
        )
        if self.kind is SurfaceKind.FLOATING:
            style = f'<style id="{BUTTON_STYLE_ELEMENT_ID}">\n{build_toggle_button_stylesheet()}</style>\n'
            markup = style + markup
        return markup

    # Runtime ---------------------------------------------------------
    @property
    def mounted(self) -> bool:
        return self._element is not None

    def mount(self, document: Document) -> bool:
        """Attach to the control element; a missing element aborts this surface only."""
        element = document.get_element_by_id(self.element_id)
        if element is None:
            _logger.debug("Toggle element #%s not found; %s surface inactive", self.element_id, self.kind.value)
            return False
        self._document = document
        self._element = element
        if self.store.read():
            document.add_root_class(USER_OFF_CLASS)
        self.sync()
        return True

    def activate(self) -> Optional[SurfaceState]:
        if self._document is None or self._element is None:
            return None
        off = self._document.toggle_root_class(USER_OFF_CLASS)
        self.store.write(off)
        return self.sync()

    def sync(self) -> Optional[SurfaceState]:
        if self._document is None or self._element is None:
            return None
        off = self._document.has_root_class(USER_OFF_CLASS)
        self._element["aria-pressed"] = "true" if off else "false"
        self._element["title"] = TITLE_OFF if off else TITLE_ON
        return SurfaceState.ON_SHOWN if off else SurfaceState.OFF_SHOWN

    @property
    def pressed(self) -> bool:
        if self._element is None:
            return False
        return self._element.get("aria-pressed") == "true"

    @property
    def state(self) -> SurfaceState:
        return SurfaceState.ON_SHOWN if self.pressed else SurfaceState.OFF_SHOWN

    @property
    def title(self) -> Optional[str]:
        return self._element.get("title") if self._element is not None else None
