"""
HTML fragment -> plain lyrics text.

Only the direct children of the container are walked:
  - <br> becomes a newline,
  - any other element contributes its flattened text,
  - text nodes are kept verbatim.
Nothing else is added, so every newline in the output maps to exactly one
<br> (or a newline already present in the source text).
"""

from __future__ import annotations

from typing import Iterable

from bs4.element import NavigableString, PageElement, PreformattedString, Tag


def is_line_break(node: PageElement) -> bool:
    return isinstance(node, Tag) and node.name == "br"


def is_text(node: PageElement) -> bool:
    # comments, doctypes, CDATA and friends are PreformattedString subclasses
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def strip_elements(container: Tag, selectors: Iterable[str]) -> int:
    """Remove every descendant matching one of the CSS selectors. Returns the count removed."""
    removed = 0
    for selector in selectors:
        for el in container.select(selector):
            el.decompose()
            removed += 1
    return removed


def extract_text(container: Tag) -> str:
    parts: list[str] = []
    for child in container.children:
        if is_line_break(child):
            parts.append("\n")
        elif isinstance(child, Tag):
            parts.append(child.get_text())
        elif is_text(child):
            parts.append(str(child))
    return "".join(parts)
