"""Output filters applied to block content before substitution."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum

import markdown as markdown_lib

MarkdownRenderer = Callable[[str], str]


class Filter(str, Enum):
    """The closed set of block filters."""

    TEXT = "text"
    HTML = "html"
    TRIM = "trim"


def markdown_renderer(extensions: Iterable[str] = ()) -> MarkdownRenderer:
    """Build a MarkDown to HTML converter.

    Args:
        extensions: Python-Markdown extension names to enable

    Returns:
        Callable converting MarkDown text to HTML
    """
    enabled = list(extensions)

    def render(text: str) -> str:
        return markdown_lib.markdown(text, extensions=enabled)

    return render


def _filter_table(markdown: MarkdownRenderer) -> dict[Filter, MarkdownRenderer]:
    return {
        Filter.TEXT: lambda text: text,
        Filter.TRIM: lambda text: text.strip(),
        Filter.HTML: markdown,
    }


def apply_filters(
    filters: Iterable[Filter], text: str, markdown: MarkdownRenderer
) -> str:
    """Run block content through its filters in declared order.

    An empty filter list converts the content from MarkDown to HTML.

    Args:
        filters: Filters to apply
        text: Raw block content
        markdown: MarkDown converter used by the ``html`` filter

    Returns:
        Filtered content
    """
    filters = list(filters)
    if not filters:
        return markdown(text)

    table = _filter_table(markdown)
    output = text
    for item in filters:
        output = table[Filter(item)](output)
    return output
