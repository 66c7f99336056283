"""Text sanitization helpers for operator-supplied labels.

Uses BeautifulSoup to reduce arbitrary input to a single line of plain text:

  - <script> and <style> elements are dropped together with their content
  - all remaining tags are stripped, keeping their text
  - tabs, line breaks and runs of whitespace collapse to one space

The result is plain text, not markup. Renderers still escape it on output.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup  # type: ignore

__all__ = ["sanitize_text_field"]

_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_text_field(value: object) -> str:
    """Return ``value`` as a trimmed single line of plain text.

    ``None`` becomes an empty string; other non-string values are converted
    with ``str`` first.
    """
    if value is None:
        return ""
    text = str(value)
    if "<" in text:
        soup = BeautifulSoup(text, "html.parser")
        for tag_name in ("script", "style"):
            for t in soup.find_all(tag_name):
                t.decompose()
        text = soup.get_text()
    return _WHITESPACE_RE.sub(" ", text).strip()
