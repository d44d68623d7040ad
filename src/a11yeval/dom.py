"""
DOM Access Layer

Thin adapter over BeautifulSoup and soupsieve giving rules the capability set
they need: CSS selector queries, attribute reads, text content and
ancestor/descendant traversal. Rules only read from the tree.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import soupsieve as sv
from bs4 import BeautifulSoup, Tag

from .exceptions import DocumentParseError

FOCUSABLE_SELECTOR = 'a[href], button, input, select, textarea, [tabindex]:not([tabindex="-1"])'
ELEMENT_SNIPPET_LENGTH = 100


class HtmlDocument:
    """A parsed, read-only HTML document."""

    def __init__(self, soup: BeautifulSoup) -> None:
        self.soup = soup

    @classmethod
    def parse(cls, html: str | bytes) -> HtmlDocument:
        """Build a document from markup.

        Args:
            html: HTML text, or bytes in a detectable encoding

        Raises:
            DocumentParseError: If the input is not markup or the parser fails
        """
        if not isinstance(html, (str, bytes)):
            raise DocumentParseError(f"expected str or bytes, got {type(html).__name__}")
        try:
            soup = BeautifulSoup(html, "html.parser")
        except Exception as e:
            raise DocumentParseError(str(e)) from e
        return cls(soup)

    def select(self, selector: str) -> list[Tag]:
        """All elements matching a CSS selector, in document order."""
        return list(self.soup.select(selector))

    def select_one(self, selector: str) -> Tag | None:
        return self.soup.select_one(selector)

    def count(self, selector: str) -> int:
        return len(self.soup.select(selector))

    def iter_with_attribute(self, attribute: str) -> Iterator[Tag]:
        """Elements carrying an attribute, whatever its value."""
        return iter(self.soup.select(f"[{attribute}]"))

    def element_by_id(self, element_id: str) -> Tag | None:
        """Element whose ``id`` equals ``element_id`` exactly."""
        if not element_id:
            return None
        return self.soup.find(id=element_id)


def get_attr(element: Tag, name: str) -> str | None:
    """Attribute value as a string, ``None`` when the attribute is absent."""
    value = element.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return value


def get_role(element: Tag) -> str | None:
    role = get_attr(element, "role")
    return role.strip() if role is not None else None


def outer_html(element: Tag, limit: int = ELEMENT_SNIPPET_LENGTH) -> str:
    """Serialized markup of an element, truncated to ``limit`` characters."""
    return str(element)[:limit]


def text_snippet(element: Tag, limit: int = 50) -> str:
    return element.get_text()[:limit]


def css_selector(element: Tag, prefer_role: bool = False) -> str:
    """A short human-readable selector for an element.

    Uses ``#id`` when present, then ``[role="..."]`` if ``prefer_role``, then
    ``tag.class1.class2`` and finally the bare tag name.
    """
    element_id = get_attr(element, "id")
    if element_id:
        return f"#{element_id}"

    if prefer_role:
        role = get_attr(element, "role")
        if role:
            return f'[role="{role}"]'

    classes = [c for c in element.get("class") or [] if c.strip()]
    if classes:
        return f"{element.name}.{'.'.join(classes)}"

    return element.name


def matches(element: Tag, selector: str) -> bool:
    return sv.match(selector, element)


def closest_with_role(element: Tag, roles: Iterable[str]) -> Tag | None:
    """Nearest ancestor whose ``role`` attribute is one of ``roles``."""
    wanted = set(roles)
    for ancestor in element.parents:
        if isinstance(ancestor, Tag) and get_role(ancestor) in wanted:
            return ancestor
    return None


def is_focusable(element: Tag) -> bool:
    return matches(element, FOCUSABLE_SELECTOR)


def has_focusable_descendant(element: Tag) -> bool:
    return element.select_one(FOCUSABLE_SELECTOR) is not None
