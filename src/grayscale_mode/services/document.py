"""Parsed page document used to model browser-side behaviour.

Wraps a BeautifulSoup tree and exposes the handful of DOM operations the
grayscale effect needs: the root element's class list, global style
declarations keyed by element id, element lookup, and markup insertion.

Design goals:
 - Headless: no browser or JS engine, only the HTML tree.
 - Idempotent style declarations: declaring an id twice replaces the rule text.
 - Tolerant parsing: fragments without <html>/<head>/<body> are completed.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, List, Optional, Pattern

from bs4 import BeautifulSoup, Doctype  # type: ignore
from bs4.element import NavigableString, PreformattedString, Tag  # type: ignore

__all__ = ["Document", "class_list"]

_BLANK_PAGE = "<!DOCTYPE html><html><head></head><body></body></html>"
# Elements whose text is never treated as page content
RAW_TEXT_TAGS = frozenset({"script", "style", "textarea", "title"})


def class_list(tag: Tag) -> List[str]:
    value = tag.get("class")
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return list(value)


def _parse_fragment(markup: str) -> List:
    fragment = BeautifulSoup(markup, "html.parser")
    return [node.extract() for node in list(fragment.contents)]


class Document:
    def __init__(self, soup: BeautifulSoup):
        self.soup = soup
        self._ensure_structure()

    @classmethod
    def parse(cls, html: str) -> "Document":
        return cls(BeautifulSoup(html or _BLANK_PAGE, "html.parser"))

    @classmethod
    def blank(cls) -> "Document":
        return cls.parse(_BLANK_PAGE)

    def _ensure_structure(self) -> None:
        soup = self.soup
        html = soup.find("html")
        if html is None:
            html = soup.new_tag("html")
            body = soup.new_tag("body")
            for child in list(soup.contents):
                if isinstance(child, Doctype):
                    continue
                body.append(child.extract())
            html.append(body)
            soup.append(html)
        if html.find("head") is None:
            html.insert(0, soup.new_tag("head"))
        if html.find("body") is None:
            html.append(soup.new_tag("body"))

    # Structure -------------------------------------------------------
    @property
    def root(self) -> Tag:
        return self.soup.find("html")

    @property
    def head(self) -> Tag:
        return self.root.find("head")

    @property
    def body(self) -> Tag:
        return self.root.find("body")

    def get_element_by_id(self, element_id: str) -> Optional[Tag]:
        return self.soup.find(id=element_id)

    def find_by_attribute(self, name: str, value: str | None = None) -> List[Tag]:
        return list(self.soup.find_all(attrs={name: value if value is not None else True}))

    # Root class list -------------------------------------------------
    def root_classes(self) -> List[str]:
        return class_list(self.root)

    def has_root_class(self, name: str) -> bool:
        return name in class_list(self.root)

    def add_root_class(self, name: str) -> bool:
        """Add ``name`` once; returns False when it was already present."""
        classes = class_list(self.root)
        if name in classes:
            return False
        classes.append(name)
        self.root["class"] = classes
        return True

    def remove_root_class(self, name: str) -> bool:
        classes = class_list(self.root)
        if name not in classes:
            return False
        classes = [c for c in classes if c != name]
        if classes:
            self.root["class"] = classes
        else:
            del self.root["class"]
        return True

    def toggle_root_class(self, name: str) -> bool:
        """Flip ``name``; returns membership after the flip (``classList.toggle``)."""
        if self.remove_root_class(name):
            return False
        self.add_root_class(name)
        return True

    # Styles ----------------------------------------------------------
    def declare_style(self, element_id: str, css: str) -> Tag:
        existing = self.get_element_by_id(element_id)
        if existing is not None and existing.name == "style":
            existing.string = css
            return existing
        tag = self.soup.new_tag("style", id=element_id)
        tag.string = css
        self.head.append(tag)
        return tag

    def remove_element(self, element_id: str) -> bool:
        tag = self.get_element_by_id(element_id)
        if tag is None:
            return False
        tag.decompose()
        return True

    def styles(self) -> List[Tag]:
        return list(self.soup.find_all("style"))

    # Markup insertion ------------------------------------------------
    def prepend_to_head(self, markup: str) -> None:
        for index, node in enumerate(_parse_fragment(markup)):
            self.head.insert(index, node)

    def append_to_head(self, markup: str) -> None:
        for node in _parse_fragment(markup):
            self.head.append(node)

    def append_to_body(self, markup: str) -> None:
        for node in _parse_fragment(markup):
            self.body.append(node)

    def substitute_text(
        self,
        pattern: Pattern[str],
        render: Callable[[], str],
        skip: Iterable[str] = RAW_TEXT_TAGS,
    ) -> int:
        """Replace each match of ``pattern`` in body text with markup from ``render``.

        Comments, attribute values and text inside ``skip`` elements are left
        alone. Returns the number of matches replaced.
        """
        skip = frozenset(skip)
        count = 0
        for text in list(self.body.find_all(string=pattern)):
            if isinstance(text, PreformattedString):
                continue
            if any(parent.name in skip for parent in text.parents):
                continue
            value = str(text)
            nodes: List = []
            pos = 0
            for match in pattern.finditer(value):
                if match.start() > pos:
                    nodes.append(NavigableString(value[pos:match.start()]))
                nodes.extend(_parse_fragment(render()))
                pos = match.end()
                count += 1
            if pos < len(value):
                nodes.append(NavigableString(value[pos:]))
            text.replace_with(*nodes)
        return count

    def iter_ancestry(self, tag: Tag) -> Iterator[Tag]:
        """Yield ``tag`` followed by each enclosing element."""
        yield tag
        for parent in tag.parents:
            if isinstance(parent, Tag) and parent is not self.soup:
                yield parent

    def __str__(self) -> str:
        return str(self.soup)
