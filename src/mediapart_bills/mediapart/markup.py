#!/usr/bin/env python3
"""
Markup Adapter Module

Minimal traversable-document interface used by the bill extractors, and its
BeautifulSoup implementation. Extraction code only ever selects, reads text and
reads attributes, so it does not depend on a specific parsing library.
"""

from typing import Protocol

from bs4 import BeautifulSoup, Tag

DEFAULT_FEATURES = "lxml"


class MarkupNode(Protocol):
    """A selector-queryable element of a parsed HTML document."""

    def select(self, selector: str) -> list["MarkupNode"]:
        """Return all descendants matching a CSS selector, in document order."""
        ...

    def text(self) -> str:
        """Return the trimmed visible text of this element."""
        ...

    def attr(self, name: str) -> str | None:
        """Return an attribute value, or None if the attribute is absent."""
        ...


class SoupNode:
    """MarkupNode implementation backed by a BeautifulSoup tag."""

    def __init__(self, tag: Tag):
        self.tag = tag

    @classmethod
    def from_html(cls, html_content: str, features: str = DEFAULT_FEATURES) -> "SoupNode":
        """Parse raw HTML into a document node."""
        return cls(BeautifulSoup(html_content, features))

    def select(self, selector: str) -> list["SoupNode"]:
        return [SoupNode(tag) for tag in self.tag.select(selector)]

    def select_one(self, selector: str) -> "SoupNode | None":
        tag = self.tag.select_one(selector)
        return SoupNode(tag) if tag is not None else None

    def text(self) -> str:
        return self.tag.get_text().strip()

    def attr(self, name: str) -> str | None:
        value = self.tag.get(name)
        if value is None:
            return None
        # Multi-valued attributes (class, rel) come back as lists
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def __repr__(self) -> str:
        return f"SoupNode(<{self.tag.name}>)"
