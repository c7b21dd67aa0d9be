"""Article metadata embedded in page templates as HTML comments.

A page declares its metadata with lines such as::

    <!-- define title: Hello World -->
    <!-- define category: notes -->

The declarations are stripped from the page before it is parsed.
"""

from __future__ import annotations

import html
import logging
import math
import re
import string
from pathlib import Path

from ..core.models import Article

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 160
UNKNOWN_READ_TIME = "&#119909;"

KNOWN_KEYS = frozenset(
    {
        "title",
        "description",
        "category",
        "subcategory",
        "genre",
        "keywords",
        "tags",
        "published",
        "image",
        "author",
    }
)

_DEFINE_PATTERN = re.compile(r"<!-- define (.*?): (.*?) -->\n?")
_HEADING_PATTERN = re.compile(
    r"<h([1-6])(\s[^>]*?)class=[\"']text-title[\"']([^>]*)>(.*?)</h\1>"
)
_HEADING_TRAILER = re.compile(r"[^a-zA-Z0-9]+$")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")

_METADATA_TEMPLATE = (
    '<meta name="keywords" content="{keywords}" />'
    '<meta name="category" content="{category}" />'
    '<meta name="topic" content="{subcategory}" />'
    '<meta name="revised" content="{published}" />'
    '<meta name="date" content="{published}" />'
    '<meta name="pagename" content="{title}" />'
    '<meta name="title" content="{title}" />'
    '<meta name="description" content="{description}" />'
    '<meta name="abstract" content="{description}" />'
    '<meta name="summary" content="{description}" />'
    '<meta name="og:type" content="{genre}" />'
    '<meta name="og:title" content="{title}" />'
    '<meta name="og:description" content="{description}" />'
    '<meta name="og:url" content="{url}" />'
    '<meta name="og:image" content="/images/{image}" />'
    '<link rel="bookmark" title="{title}" href="{url}" />'
    '<link rel="canonical" href="{url}" />'
)


def slugify(value: str) -> str:
    """Lower-case ``value`` and join its alphanumeric runs with hyphens."""
    return _NON_ALNUM.sub(" ", value.lower()).strip().replace(" ", "-")


def estimated_read_time(content: str) -> str:
    words = len(content.split())
    if not words:
        return f"{UNKNOWN_READ_TIME} minute read"
    return f"{math.ceil(words / WORDS_PER_MINUTE)} minute read"


def artwork_credit(image: str) -> str:
    """Derive a credit from an image name such as ``jane-doe:sunset.jpg``."""
    if ":" not in image:
        return ""
    return string.capwords(image.split(":", 1)[0].replace("-", " "))


def table_of_contents(content: str) -> tuple[str, str]:
    """Add ids to ``text-title`` headings and build a table of contents.

    Returns:
        The content with heading ids, and the table of contents markup
    """
    links: list[str] = []

    def add_id(match: re.Match[str]) -> str:
        level, before, after, text = match.groups()
        header = _HEADING_TRAILER.sub("", text)
        slug = slugify(header)
        links.append(f'<a href="#{slug}" data-level="{level}">{header}</a>')
        return f'<h{level} id="{slug}"{before}class="text-title"{after}>{text}</h{level}>'

    content = _HEADING_PATTERN.sub(add_id, content)
    return content, f'<section class="table-of-contents">{"".join(links)}</section>'


def extract_article(
    path: Path, content: str, url: str = ""
) -> tuple[Article | None, str]:
    """Extract define comments from a page template.

    Args:
        path: Source path of the page, used for logging and slug fallback
        content: Page template text
        url: Public URL of the rendered page

    Returns:
        The article metadata (``None`` when the page declares none) and the
        page content with define comments removed
    """
    fields: dict[str, str] = {}
    declared = False

    for match in _DEFINE_PATTERN.finditer(content):
        declared = True
        key, value = match.group(1).strip().lower(), match.group(2)
        if key not in KNOWN_KEYS:
            logger.warning(f'Ignoring unknown key "{key}" in "{path}"')
            continue
        fields[key] = value

    if not declared:
        return None, content

    content = _DEFINE_PATTERN.sub("", content)
    content, toc = table_of_contents(content)

    article = Article(**fields)
    article.slug = slugify(article.title) or slugify(path.stem)
    article.artwork_credit = artwork_credit(article.image)
    article.estimated_read_time = estimated_read_time(content)
    article.table_of_contents = toc
    article.url = url
    article.template_path = path
    article.metadata = _METADATA_TEMPLATE.format(
        **{
            key: html.escape(value)
            for key, value in article.model_dump(include=set(KNOWN_KEYS) | {"url"}).items()
        }
    )

    logger.debug(f'Extracted article "{article.title}" from {path}')
    return article, content
