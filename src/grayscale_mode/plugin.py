"""Host-facing entry points for grayscale mode.

``GrayscalePlugin`` is what a host page pipeline talks to. Each call pulls a
fresh ``Configuration`` from the settings provider, so option changes apply
on the next render without restarting anything:

 - ``output_styles``: head markup (filter rules + early restore script)
 - ``output_toggle_button``: floating visitor toggle for the page footer
 - ``render_shortcode`` / ``expand_shortcodes``: inline ``[grayscale_toggle]`` buttons
 - ``admin_bar_node``: menu node for the host's admin bar, privilege gated
 - ``body_classes``: adds the ``sgm-grayscale`` body class while enabled
 - ``render_page``: all of the above applied to a complete HTML page
 - ``mount``: browser-side setup on a parsed document (effect first, then surfaces)
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from grayscale_mode.app.options_store import GrayscaleOptions, load_options
from grayscale_mode.config.settings import ADMIN_BAR_NODE_ID, BODY_CLASS, SHORTCODE_TAG, STYLE_ELEMENT_ID
from grayscale_mode.design.toggle_scripts import build_toggle_onclick
from grayscale_mode.services.configuration import Configuration, RenderContext
from grayscale_mode.services.document import Document, class_list
from grayscale_mode.services.effect_applier import EffectApplier
from grayscale_mode.services.permissions import PermissionService
from grayscale_mode.services.preference_store import PreferenceStore
from grayscale_mode.services.storage import BrowserStorage
from grayscale_mode.services.trigger_surface import (
    FLOATING_ELEMENT_ID,
    HOST_CHROME_HINT,
    HOST_CHROME_TITLE,
    SURFACE_ATTRIBUTE,
    SurfaceKind,
    TriggerSurface,
)

__all__ = ["GrayscalePlugin"]

_logger = logging.getLogger(__name__)

_SHORTCODE_RE = re.compile(r"\[" + re.escape(SHORTCODE_TAG) + r"(?:\s[^\]]*)?\]")


class GrayscalePlugin:
    def __init__(
        self,
        options_provider: Optional[Callable[[], GrayscaleOptions]] = None,
        *,
        storage: Optional[BrowserStorage] = None,
        permissions: Optional[PermissionService] = None,
        options_dir: str | Path | None = None,
    ) -> None:
        self._options_provider = options_provider or (lambda: load_options(options_dir))
        self.storage = storage
        self.permissions = permissions or PermissionService()
        self._inline_count = 0

    # Collaborators ---------------------------------------------------
    def configuration(self) -> Configuration:
        return Configuration.from_options(self._options_provider())

    def preference_store(self) -> PreferenceStore:
        return PreferenceStore(self.storage)

    def _host_chrome_surface(
        self, config: Configuration, store: PreferenceStore, viewer_role: Optional[str]
    ) -> TriggerSurface:
        return TriggerSurface.host_chrome(
            config, store, authorize=lambda: self.permissions.can_manage_options(viewer_role)
        )

    # Markup output ---------------------------------------------------
    def output_styles(self, context: RenderContext | str = RenderContext.PUBLIC) -> str:
        # Head output opens a page, so inline ids start over from here
        self.reset_inline_instances()
        return EffectApplier(self.configuration(), self.preference_store()).render_markup(context)

    def output_toggle_button(self) -> str:
        surface = TriggerSurface.floating(self.configuration(), self.preference_store())
        return surface.render(RenderContext.PUBLIC)

    def reset_inline_instances(self) -> None:
        self._inline_count = 0

    def render_shortcode(self, atts: Optional[Mapping[str, Any]] = None) -> str:
        # Attributes are accepted for host compatibility; the shortcode has none.
        self._inline_count += 1
        surface = TriggerSurface.inline(self.configuration(), self.preference_store(), self._inline_count)
        return surface.render(RenderContext.PUBLIC)

    def expand_shortcodes(self, content: str) -> str:
        return _SHORTCODE_RE.sub(lambda _m: self.render_shortcode(), content)

    def admin_bar_node(
        self,
        viewer_role: Optional[str],
        context: RenderContext | str = RenderContext.PUBLIC,
    ) -> Optional[Dict[str, Any]]:
        surface = self._host_chrome_surface(self.configuration(), self.preference_store(), viewer_role)
        if not surface.should_render(context):
            return None
        return {
            "id": ADMIN_BAR_NODE_ID,
            "title": HOST_CHROME_TITLE,
            "href": "#",
            "meta": {"onclick": build_toggle_onclick(), "title": HOST_CHROME_HINT},
        }

    def body_classes(self, classes: Iterable[str]) -> List[str]:
        out = list(classes)
        if self.configuration().enabled and BODY_CLASS not in out:
            out.append(BODY_CLASS)
        return out

    def render_page(
        self,
        page_html: str,
        context: RenderContext | str = RenderContext.PUBLIC,
        viewer_role: Optional[str] = None,
    ) -> str:
        """Decorate a complete page the way the host hooks would.

        Rendering an already decorated page adds nothing twice: head markup,
        the admin bar link and the floating button are skipped when their
        elements are present, and inline ids continue past existing ones.
        """
        context = RenderContext(context)
        document = Document.parse(page_html)
        head = self.output_styles(context)
        if head and document.get_element_by_id(STYLE_ELEMENT_ID) is None:
            # earliest possible: before any other head content
            document.prepend_to_head(head)
        if context is RenderContext.PUBLIC:
            self._inline_count = len(document.find_by_attribute(SURFACE_ATTRIBUTE, SurfaceKind.INLINE.value))
            document.substitute_text(_SHORTCODE_RE, self.render_shortcode)
            document.body["class"] = self.body_classes(class_list(document.body))
            if not document.body["class"]:
                del document.body["class"]
        config = self.configuration()
        store = self.preference_store()
        admin_bar = self._host_chrome_surface(config, store, viewer_role)
        if document.get_element_by_id(admin_bar.element_id) is None:
            markup = admin_bar.render(context)
            if markup:
                document.append_to_body(markup)
        if context is RenderContext.PUBLIC and document.get_element_by_id(FLOATING_ELEMENT_ID) is None:
            button = self.output_toggle_button()
            if button:
                document.append_to_body(button)
        _logger.debug("Rendered %s page (effect=%s)", context.value, bool(head))
        return str(document)

    # Browser-side model ----------------------------------------------
    def mount(
        self,
        document: Document,
        context: RenderContext | str = RenderContext.PUBLIC,
        viewer_role: Optional[str] = None,
    ) -> List[TriggerSurface]:
        """Apply the effect, then attach every permitted control found in ``document``."""
        config = self.configuration()
        store = self.preference_store()
        EffectApplier(config, store).apply(document, context)
        surfaces: List[TriggerSurface] = []
        for element in document.find_by_attribute(SURFACE_ATTRIBUTE):
            element_id = element.get("id")
            try:
                kind = SurfaceKind(element.get(SURFACE_ATTRIBUTE))
            except ValueError:
                _logger.debug("Ignoring unknown toggle surface %r", element.get(SURFACE_ATTRIBUTE))
                continue
            if not element_id:
                continue
            if kind is SurfaceKind.HOST_CHROME:
                surface = self._host_chrome_surface(config, store, viewer_role)
            else:
                surface = TriggerSurface(kind, element_id, config, store)
            if not surface.should_render(context):
                continue
            if surface.mount(document):
                surfaces.append(surface)
        return surfaces
