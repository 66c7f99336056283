"""Global configuration and constants for grayscale mode.

The storage key and sentinel form the persisted contract with visitors'
browsers; changing either silently resets every stored preference.
"""

from __future__ import annotations

import os
from typing import Final

# Persisted per-browser preference
STORAGE_KEY: Final = "sgmUserOff"
FORCED_OFF_SENTINEL: Final = "1"
NOT_FORCED_OFF_VALUE: Final = "0"

# Classes toggled on the document root / documented for page authors
ROOT_CLASS: Final = "sgm-grayscale-root"
USER_OFF_CLASS: Final = "sgm-user-off"
OPT_OUT_CLASS: Final = "no-grayscale"
BODY_CLASS: Final = "sgm-grayscale"

# Element ids
STYLE_ELEMENT_ID: Final = "sgm-grayscale-style"
OVERRIDE_STYLE_ELEMENT_ID: Final = "sgm-user-off-style"
BUTTON_STYLE_ELEMENT_ID: Final = "sgm-toggle-btn-style"
TOGGLE_BUTTON_CLASS: Final = "sgm-toggle-btn"
ADMIN_BAR_NODE_ID: Final = "sgm-toggle"

# Intensity bounds (percent)
INTENSITY_MIN: Final = 0
INTENSITY_MAX: Final = 100

DEFAULT_BUTTON_LABEL: Final = "Toggle grayscale"
SHORTCODE_TAG: Final = "grayscale_toggle"
MANAGE_CAPABILITY: Final = "manage_options"

DATA_DIR: Final = os.environ.get("GRAYSCALE_MODE_DATA_DIR", "data")
