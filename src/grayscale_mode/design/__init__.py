"""Design package.

CSS and inline-script generators for the grayscale effect and its controls.
"""

from .grayscale_stylesheet import (  # noqa: F401
    GrayscaleStylesheetMeta,
    build_grayscale_stylesheet,
    build_toggle_button_stylesheet,
    build_user_off_stylesheet,
)
from .toggle_scripts import (  # noqa: F401
    build_restore_script,
    build_toggle_onclick,
    build_toggle_script,
)

__all__ = [
    "GrayscaleStylesheetMeta",
    "build_grayscale_stylesheet",
    "build_toggle_button_stylesheet",
    "build_user_off_stylesheet",
    "build_restore_script",
    "build_toggle_onclick",
    "build_toggle_script",
]
