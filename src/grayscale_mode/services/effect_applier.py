"""Effect applier: installs the grayscale filter for one page load.

Given a resolved ``Configuration`` and the render context it decides whether
the filter exists at all on this page, then:

 - declares the filter / opt-out / print rules and the visitor override rule
 - marks the document root with the marker class
 - restores the visitor's "forced off" preference (best-effort)

The filter is purely class driven; nothing is written as inline style, so
every trigger surface can flip the effect by toggling one root class.
Applying twice with the same inputs leaves the document unchanged.
"""

from __future__ import annotations

import html
import logging
import re
from typing import Optional

from bs4.element import Tag  # type: ignore

from grayscale_mode.config.settings import (
    OPT_OUT_CLASS,
    OVERRIDE_STYLE_ELEMENT_ID,
    ROOT_CLASS,
    STYLE_ELEMENT_ID,
    USER_OFF_CLASS,
)
from grayscale_mode.design.grayscale_stylesheet import (
    build_grayscale_stylesheet,
    build_user_off_stylesheet,
)
from grayscale_mode.design.toggle_scripts import build_restore_script
from .configuration import Configuration, RenderContext
from .document import Document, class_list
from .preference_store import PreferenceStore

__all__ = ["EffectApplier", "rendered_filter"]

_logger = logging.getLogger(__name__)

_INTENSITY_RE = re.compile(r"grayscale\((\d+)%\)")


class EffectApplier:
    def __init__(self, config: Configuration, store: PreferenceStore):
        self.config = config
        self.store = store

    def should_apply(self, context: RenderContext | str = RenderContext.PUBLIC) -> bool:
        return self.config.effect_enabled(context)

    def apply(self, document: Document, context: RenderContext | str = RenderContext.PUBLIC) -> bool:
        """Install the effect on ``document``; returns whether it is installed."""
        if not self.should_apply(context):
            _logger.debug("Grayscale skipped for %s context", RenderContext(context).value)
            return False
        stylesheet, _meta = build_grayscale_stylesheet(self.config.intensity)
        document.declare_style(STYLE_ELEMENT_ID, stylesheet)
        document.declare_style(OVERRIDE_STYLE_ELEMENT_ID, build_user_off_stylesheet())
        document.add_root_class(ROOT_CLASS)
        # Restore step only; the rules above are already in place
        if self.store.read():
            document.add_root_class(USER_OFF_CLASS)
        return True

    def remove(self, document: Document) -> None:
        document.remove_root_class(ROOT_CLASS)
        document.remove_root_class(USER_OFF_CLASS)
        document.remove_element(STYLE_ELEMENT_ID)
        document.remove_element(OVERRIDE_STYLE_ELEMENT_ID)

    def render_markup(self, context: RenderContext | str = RenderContext.PUBLIC) -> str:
        """Head markup performing the same setup in a browser, or "" when off."""
        if not self.should_apply(context):
            return ""
        stylesheet, _meta = build_grayscale_stylesheet(self.config.intensity)
        return (
            f'<style id="{html.escape(STYLE_ELEMENT_ID)}">\n{stylesheet}</style>\n'
            f"<script>\n{build_restore_script()}</script>\n"
            f'<style id="{html.escape(OVERRIDE_STYLE_ELEMENT_ID)}">\n{build_user_off_stylesheet()}</style>\n'
        )


def _declared_intensity(document: Document) -> Optional[int]:
    style = document.get_element_by_id(STYLE_ELEMENT_ID)
    if style is None:
        return None
    match = _INTENSITY_RE.search(style.get_text())
    return int(match.group(1)) if match else None


def rendered_filter(document: Document, element: Optional[Tag] = None, *, media: str = "screen") -> str:
    """Return the filter the grayscale rules give ``element`` ("none" or "grayscale(N%)").

    Evaluates only the rules declared by ``EffectApplier``: print media,
    the opt-out class on the element or any ancestor, and the visitor
    override all yield "none".
    """
    if media == "print":
        return "none"
    target = element if element is not None else document.root
    for node in document.iter_ancestry(target):
        if OPT_OUT_CLASS in class_list(node):
            return "none"
    if document.has_root_class(USER_OFF_CLASS) or not document.has_root_class(ROOT_CLASS):
        return "none"
    intensity = _declared_intensity(document)
    if intensity is None:
        return "none"
    return f"grayscale({intensity}%)"
