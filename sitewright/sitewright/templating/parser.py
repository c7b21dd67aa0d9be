"""Template parsing: extends statements and block declarations."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from ..core.errors import (
    ConflictingFiltersError,
    DuplicateBlockError,
    ExtendsInBaseError,
    MismatchedBlockNameError,
    MissingExtendsError,
    MultipleExtendsError,
    TemplateError,
    UnknownFilterError,
)
from ..core.models import Block, Role, TemplateRecord
from .filters import Filter

logger = logging.getLogger(__name__)

EXTENDS_PATTERN = r'\{%\s*extends\s+"(?P<parent>.*?)"\s*%\}'
BLOCK_PATTERN = (
    r"(?P<open>\{%\s*block\s+(?P<header>[^%]*?)\s*%\})"
    r"(?P<inner>.*?)"
    r"(?P<close>\{%\s*endblock\s+(?P<end>[^%]*?)\s*%\})"
)


class TemplateParser:
    """Parses template text into :class:`TemplateRecord` objects.

    The parser owns its compiled patterns; instances are immutable and may be
    shared freely.
    """

    def __init__(
        self,
        input_root: Path,
        output_root: Path,
        valid_filters: Iterable[Filter] = Filter,
    ) -> None:
        self.input_root = Path(input_root)
        self.output_root = Path(output_root)
        self.valid_filters = frozenset(f.value for f in valid_filters)
        self._extends = re.compile(EXTENDS_PATTERN)
        self._block = re.compile(BLOCK_PATTERN, re.DOTALL)

    def parse(self, identity: Path, content: str, role: Role) -> TemplateRecord:
        """Parse a single template.

        Args:
            identity: Source file path
            content: Template text
            role: ``Role.BASE`` for parent templates, ``Role.PAGE`` for children

        Returns:
            The parsed template record
        """
        identity = Path(identity)
        parent = self._declared_parent(identity, content, role)
        blocks = self._blocks(identity, content)
        output_target = self.output_target(identity) if role is Role.PAGE else None

        logger.debug(
            f"Parsed {role.value} template {identity}: {len(blocks)} block(s)"
            + (f', extends "{parent}"' if parent else "")
        )

        return TemplateRecord(
            identity=identity,
            name=self.logical_name(identity),
            role=role,
            declared_parent=parent,
            raw_content=content,
            blocks=blocks,
            output_target=output_target,
        )

    def logical_name(self, identity: Path) -> str:
        """Return the name other templates use to extend ``identity``."""
        relative = self._relative(identity)
        if relative is None:
            return PurePosixPath(*identity.parts).as_posix()
        return relative.as_posix()

    def output_target(self, identity: Path) -> Path:
        """Map a page's source path into the output directory."""
        relative = self._relative(identity)
        if relative is None:
            raise TemplateError(
                f'template "{identity}" is outside the input directory "{self.input_root}"'
            )
        return (self.output_root / relative).with_suffix(".html")

    def _relative(self, identity: Path) -> Path | None:
        try:
            return identity.relative_to(self.input_root)
        except ValueError:
            pass
        try:
            return identity.resolve().relative_to(self.input_root.resolve())
        except ValueError:
            return None

    def _declared_parent(self, identity: Path, content: str, role: Role) -> str | None:
        matches = list(self._extends.finditer(content))

        if role is Role.BASE:
            if matches:
                raise ExtendsInBaseError(identity)
            return None

        if not matches:
            raise MissingExtendsError(identity)
        if len(matches) > 1:
            raise MultipleExtendsError(identity)
        return matches[0].group("parent").strip()

    def _blocks(self, identity: Path, content: str) -> dict[str, Block]:
        blocks: dict[str, Block] = {}

        for match in self._block.finditer(content):
            name, *filter_names = (item.strip() for item in match.group("header").split("|"))
            end_name = match.group("end").strip()

            if not name:
                raise TemplateError(f'unnamed block in template "{identity}"')
            filters = self._filters(identity, name, filter_names)
            if name != end_name:
                raise MismatchedBlockNameError(name, end_name, identity)
            if name in blocks or content.count(match.group("open")) > 1:
                raise DuplicateBlockError(name, identity, "block")
            if content.count(match.group("close")) > 1:
                raise DuplicateBlockError(name, identity, "endblock")

            blocks[name] = Block(
                name=name,
                filters=filters,
                outer_text=match.group(0),
                inner_text=match.group("inner"),
            )

        return blocks

    def _filters(
        self, identity: Path, block: str, names: list[str]
    ) -> tuple[Filter, ...]:
        filters: dict[Filter, None] = {}
        for name in names:
            if name not in self.valid_filters:
                raise UnknownFilterError(name, identity)
            filters.setdefault(Filter(name))

        if Filter.TEXT in filters and Filter.HTML in filters:
            raise ConflictingFiltersError(block, identity)
        return tuple(filters)
