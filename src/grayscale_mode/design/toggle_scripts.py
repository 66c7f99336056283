"""Inline behaviour scripts emitted alongside the grayscale markup.

Every trigger surface shares one toggle routine so the browser behaviour
matches the Python model in ``grayscale_mode.services.trigger_surface``:
toggle the root override class, persist best-effort, then re-derive the
control's pressed state from the actual class list.
"""

from __future__ import annotations

import json

from grayscale_mode.config.settings import (
    FORCED_OFF_SENTINEL,
    NOT_FORCED_OFF_VALUE,
    ROOT_CLASS,
    STORAGE_KEY,
    USER_OFF_CLASS,
)

__all__ = ["build_restore_script", "build_toggle_script", "build_toggle_onclick"]

TITLE_OFF = "Grayscale is OFF"
TITLE_ON = "Grayscale is ON"


def _js(value: str) -> str:
    # JSON string literals are valid JS; escape "</" so nothing closes the script element
    return json.dumps(value).replace("</", "<\\/")


def build_restore_script() -> str:
    """Script run from the head: mark the root, then restore the preference."""
    return (
        "(function () {\n"
        f"  try {{ document.documentElement.classList.add({_js(ROOT_CLASS)}); }} catch (e) {{}}\n"
        "  try {\n"
        f"    if (localStorage.getItem({_js(STORAGE_KEY)}) === {_js(FORCED_OFF_SENTINEL)}) {{\n"
        f"      document.documentElement.classList.add({_js(USER_OFF_CLASS)});\n"
        "    }\n"
        "  } catch (e) {}\n"
        "})();\n"
    )


def build_toggle_script(element_id: str) -> str:
    """Per-surface script binding the shared toggle to one control element."""
    return (
        "(function () {\n"
        f"  var KEY = {_js(STORAGE_KEY)};\n"
        "  var docEl = document.documentElement;\n"
        "  try {\n"
        f"    if (localStorage.getItem(KEY) === {_js(FORCED_OFF_SENTINEL)}) docEl.classList.add({_js(USER_OFF_CLASS)});\n"
        "  } catch (e) {}\n"
        f"  var btn = document.getElementById({_js(element_id)});\n"
        "  if (!btn) return;\n"
        "  function sync() {\n"
        f"    var off = docEl.classList.contains({_js(USER_OFF_CLASS)});\n"
        "    btn.setAttribute('aria-pressed', off ? 'true' : 'false');\n"
        f"    btn.title = off ? {_js(TITLE_OFF)} : {_js(TITLE_ON)};\n"
        "  }\n"
        "  btn.addEventListener('click', function (event) {\n"
        "    if (event) event.preventDefault();\n"
        f"    var off = docEl.classList.toggle({_js(USER_OFF_CLASS)});\n"
        f"    try {{ localStorage.setItem(KEY, off ? {_js(FORCED_OFF_SENTINEL)} : {_js(NOT_FORCED_OFF_VALUE)}); }} catch (e) {{}}\n"
        "    sync();\n"
        "  });\n"
        "  sync();\n"
        "})();\n"
    )


def build_toggle_onclick() -> str:
    """Single-expression handler for host-provided menu nodes."""
    return (
        f"var off=document.documentElement.classList.toggle('{USER_OFF_CLASS}');"
        f"try{{localStorage.setItem('{STORAGE_KEY}',off?'{FORCED_OFF_SENTINEL}':'{NOT_FORCED_OFF_VALUE}');}}catch(e){{}}"
        "this.setAttribute('aria-pressed',off?'true':'false');"
        "event.preventDefault();"
    )
