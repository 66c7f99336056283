"""Grayscale stylesheet generator.

Generates the global CSS that drives the effect purely through classes on
the document root, so every trigger can flip it uniformly:

- ``html.sgm-grayscale-root``: the filter at the configured intensity.
- ``.no-grayscale``: opt-out for page authors (element and descendants).
- ``@media print``: printed output is never filtered.
- ``html.sgm-user-off``: visitor override, always wins over the filter rule.

Core goals:
- Deterministic output string for easy snapshot testing.
- Intensity clamped here as well, so a caller can never emit an invalid value.
"""

from __future__ import annotations

from dataclasses import dataclass

from grayscale_mode.app.options_store import clamp_intensity
from grayscale_mode.config.settings import (
    OPT_OUT_CLASS,
    ROOT_CLASS,
    TOGGLE_BUTTON_CLASS,
    USER_OFF_CLASS,
)

__all__ = [
    "GrayscaleStylesheetMeta",
    "build_grayscale_stylesheet",
    "build_user_off_stylesheet",
    "build_toggle_button_stylesheet",
]

_NO_FILTER = "-webkit-filter: none !important;\n  filter: none !important;"


@dataclass(frozen=True)
class GrayscaleStylesheetMeta:
    intensity: int
    rules: int


def build_grayscale_stylesheet(intensity: int) -> tuple[str, GrayscaleStylesheetMeta]:
    """Build the filter stylesheet and metadata.

    Returns
    -------
    (stylesheet, meta) tuple where stylesheet is a deterministic string.
    """
    value = clamp_intensity(intensity)
    parts = [
        f"html.{ROOT_CLASS} {{\n  -webkit-filter: grayscale({value}%);\n  filter: grayscale({value}%);\n}}",
        "/* Opt-out hook */\n"
        f".{OPT_OUT_CLASS}, .{OPT_OUT_CLASS} * {{\n  {_NO_FILTER}\n}}",
        f"@media print {{\n  html.{ROOT_CLASS} {{\n  {_NO_FILTER}\n  }}\n}}",
    ]
    stylesheet = "\n".join(parts) + "\n"
    return stylesheet, GrayscaleStylesheetMeta(intensity=value, rules=len(parts))


def build_user_off_stylesheet() -> str:
    # Declared apart from the filter rule so the override can be restored
    # even when the filter block is re-rendered.
    return f"/* When user turns OFF grayscale, remove the filter */\nhtml.{USER_OFF_CLASS} {{ {_NO_FILTER} }}\n"


def build_toggle_button_stylesheet() -> str:
    return (
        f".{TOGGLE_BUTTON_CLASS}[data-sgm-surface=\"floating\"] {{\n"
        "  position: fixed; z-index: 99999; bottom: 1rem; right: 1rem;\n"
        "  padding: .6rem .8rem; font-size: 14px; line-height: 1; cursor: pointer;\n"
        "  border: 1px solid rgba(0,0,0,.15); background: #fff; border-radius: .5rem;\n"
        "  box-shadow: 0 2px 8px rgba(0,0,0,.12);\n"
        "}\n"
        f".{TOGGLE_BUTTON_CLASS}:focus {{ outline: 2px solid #2271b1; outline-offset: 2px; }}\n"
        f"@media (prefers-reduced-motion: reduce) {{ .{TOGGLE_BUTTON_CLASS} {{ transition: none; }} }}\n"
    )
