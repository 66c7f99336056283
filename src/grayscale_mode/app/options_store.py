"""Operator option persistence for grayscale mode.

Stores the site-wide options an operator edits (master switch, intensity,
admin dashboard support, visitor toggle, admin bar entry, button label).

Design principles:
- Pure logic so it can be unit-tested headless.
- Explicit schema with version field to enable future migrations.
- Graceful fallback: corrupt or incompatible files produce defaults instead of raising.
- Checkbox semantics on sanitize: a submitted key means "on", an absent key means "off".
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
import json
import logging
import math
import re
from pathlib import Path
from typing import Any, Dict, Mapping

from grayscale_mode.config.settings import (
    DATA_DIR,
    DEFAULT_BUTTON_LABEL,
    INTENSITY_MAX,
    INTENSITY_MIN,
)
from .html_sanitizer import sanitize_text_field

__all__ = [
    "GrayscaleOptions",
    "default_options",
    "sanitize_options",
    "load_options",
    "save_options",
    "clamp_intensity",
    "OPTIONS_VERSION",
]

_logger = logging.getLogger(__name__)

OPTIONS_VERSION = 1  # Increment when structure changes

OPTIONS_FILENAME = "grayscale_options.json"

_LEADING_INT_RE = re.compile(r"\s*([+-]?)0*(\d+)")


def _leading_int(value: Any) -> int:
    """Integer value of ``value`` the way a submitted form field reads.

    Strings contribute their leading integer (``"50%"`` is 50); no leading
    digits reads as 0. Non-finite floats saturate by sign.
    """
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value):
            return 0
        if math.isinf(value):
            return INTENSITY_MAX if value > 0 else INTENSITY_MIN
        return int(value)
    match = _LEADING_INT_RE.match(str(value))
    if match is None:
        return 0
    sign, digits = match.groups()
    # anything past a handful of digits is out of range anyway
    magnitude = int(digits) if len(digits) <= 6 else 10**6
    return -magnitude if sign == "-" else magnitude


def clamp_intensity(value: Any, default: int = INTENSITY_MAX) -> int:
    """Coerce ``value`` to an int percentage within [0, 100].

    ``None`` falls back to ``default`` (itself clamped).
    """
    numeric = int(default) if value is None else _leading_int(value)
    clamped = max(INTENSITY_MIN, min(INTENSITY_MAX, numeric))
    if clamped != numeric:
        _logger.debug("Clamped grayscale intensity %s to %s", value, clamped)
    return clamped


def _flag(value: Any) -> bool:
    # "0" and "" are unset, like an unticked checkbox value
    if isinstance(value, str):
        return value.strip() not in ("", "0")
    return bool(value)


@dataclass
class GrayscaleOptions:
    """Serializable operator options.

    Attributes
    ----------
    version: Schema version for migration handling.
    enabled: Grayscale enabled on the public site.
    intensity: Filter strength percentage (0-100).
    apply_admin: Also apply the filter to the admin dashboard.
    allow_toggle: Offer visitors a toggle control.
    show_adminbar: Offer the admin bar toggle to managers.
    button_label: Plain-text label for the toggle controls.
    """

    version: int = OPTIONS_VERSION
    enabled: bool = True
    intensity: int = 100
    apply_admin: bool = False
    allow_toggle: bool = True
    show_adminbar: bool = True
    button_label: str = DEFAULT_BUTTON_LABEL

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GrayscaleOptions":
        # Stored values are trusted only after normalisation
        defaults = cls()
        return cls(
            version=int(data.get("version", OPTIONS_VERSION)),
            enabled=_flag(data.get("enabled", defaults.enabled)),
            intensity=clamp_intensity(data.get("intensity", defaults.intensity)),
            apply_admin=_flag(data.get("apply_admin", defaults.apply_admin)),
            allow_toggle=_flag(data.get("allow_toggle", defaults.allow_toggle)),
            show_adminbar=_flag(data.get("show_adminbar", defaults.show_adminbar)),
            button_label=sanitize_text_field(data.get("button_label", defaults.button_label)),
        )


def default_options() -> GrayscaleOptions:
    return GrayscaleOptions()


def sanitize_options(raw: Mapping[str, Any] | None) -> GrayscaleOptions:
    """Build options from a submitted settings form.

    Mirrors HTML form semantics: checkboxes are only submitted when ticked,
    so any flag key present counts as enabled and every absent flag is off.
    Intensity and label keep their defaults when not submitted.
    """
    raw = raw or {}
    out = GrayscaleOptions(
        enabled="enabled" in raw,
        apply_admin="apply_admin" in raw,
        allow_toggle="allow_toggle" in raw,
        show_adminbar="show_adminbar" in raw,
    )
    if "intensity" in raw:
        out.intensity = clamp_intensity(raw["intensity"])
    if "button_label" in raw:
        out.button_label = sanitize_text_field(raw["button_label"])
    return out


def _resolve_path(base_dir: str | Path | None) -> Path:
    base = Path(base_dir) if base_dir else Path(DATA_DIR)
    return base / OPTIONS_FILENAME


def load_options(base_dir: str | Path | None = None) -> GrayscaleOptions:
    """Load operator options from directory.

    Parameters
    ----------
    base_dir: The directory containing the options file (defaults to ``DATA_DIR``).
    """
    path = _resolve_path(base_dir)
    if not path.exists():
        return GrayscaleOptions()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("options root must be an object")
        opts = GrayscaleOptions.from_dict(data)
    except Exception as exc:  # noqa: BLE001
        _logger.warning("Unreadable grayscale options at %s, using defaults: %s", path, exc)
        return GrayscaleOptions()
    if opts.version != OPTIONS_VERSION:
        _logger.info("Grayscale options version %s unsupported; resetting", opts.version)
        return GrayscaleOptions()
    return opts


def save_options(opts: GrayscaleOptions, base_dir: str | Path | None = None) -> Path:
    """Persist operator options to directory.

    Returns the path written for convenience.
    """
    path = _resolve_path(base_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(opts.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)
    return path
