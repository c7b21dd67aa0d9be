"""Block composition: substitute a page's blocks into its base template."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from ..core.errors import UnknownBlockInChildError, UnresolvedParentError
from ..core.models import Block, TemplateRecord
from .filters import Filter, MarkdownRenderer, apply_filters, markdown_renderer

logger = logging.getLogger(__name__)


class Compositor:
    """Resolves page templates against a fixed set of base templates."""

    def __init__(
        self,
        parents: Mapping[str, TemplateRecord],
        markdown: MarkdownRenderer | None = None,
    ) -> None:
        self.parents = parents
        self.markdown = markdown or markdown_renderer()

    def resolve_parent(self, child: TemplateRecord) -> TemplateRecord:
        parent = self.parents.get(child.declared_parent or "")
        if parent is None:
            raise UnresolvedParentError(child.declared_parent or "", child.identity)
        return parent

    def compose(self, child: TemplateRecord) -> str:
        """Render a page template into the HTML of its base template.

        Child blocks replace the matching base blocks. A child block with no
        filters inherits the filters the base declares for that block. Base
        blocks the child leaves out fall back to their own content.

        Args:
            child: Parsed page template

        Returns:
            Final HTML for the page
        """
        parent = self.resolve_parent(child)
        html = parent.raw_content

        for name, block in child.blocks.items():
            parent_block = parent.blocks.get(name)
            if parent_block is None:
                raise UnknownBlockInChildError(name, child.identity, parent.identity)
            filters = block.filters or parent_block.filters
            html = html.replace(parent_block.outer_text, self._render(filters, block))

        for parent_block in parent.blocks.values():
            # Overridden blocks are already gone from the output
            if parent_block.outer_text in html:
                html = html.replace(
                    parent_block.outer_text,
                    self._render(parent_block.filters, parent_block),
                )

        logger.debug(f"Composed {child.identity} from {parent.identity}")
        return html

    def compose_all(
        self, children: Iterable[TemplateRecord]
    ) -> list[tuple[TemplateRecord, str]]:
        """Compose every page before anything is written."""
        return [(child, self.compose(child)) for child in children]

    def _render(self, filters: Iterable[Filter], block: Block) -> str:
        return apply_filters(filters, block.inner_text, self.markdown)
