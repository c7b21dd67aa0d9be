"""Exception hierarchy for site builds."""

from __future__ import annotations

from pathlib import Path


class SitewrightError(Exception):
    """Base class for every error raised while building a site."""


class ConfigError(SitewrightError):
    """Raised when the site configuration cannot be loaded."""


class OutputError(SitewrightError):
    """Raised when reading or writing at the filesystem boundary fails."""


class StylesheetError(SitewrightError):
    """Raised when an SCSS stylesheet fails to compile."""


class RouteError(SitewrightError):
    """Raised when a Jinja2 route template fails to load or render."""


class TemplateError(SitewrightError):
    """Raised when a template is malformed or cannot be composed."""


class MissingExtendsError(TemplateError):
    def __init__(self, template: Path) -> None:
        super().__init__(f'missing "extends" statement in template "{template}"')
        self.template = template


class MultipleExtendsError(TemplateError):
    def __init__(self, template: Path) -> None:
        super().__init__(f'multiple "extends" statements in template "{template}"')
        self.template = template


class ExtendsInBaseError(TemplateError):
    def __init__(self, template: Path) -> None:
        super().__init__(
            f'base template "{template}" cannot extend another template '
            "(only one level of inheritance is supported)"
        )
        self.template = template


class UnresolvedParentError(TemplateError):
    def __init__(self, parent: str, template: Path) -> None:
        super().__init__(f'unknown template "{parent}" extended by "{template}"')
        self.parent = parent
        self.template = template


class UnknownBlockInChildError(TemplateError):
    def __init__(self, block: str, template: Path, parent: Path) -> None:
        super().__init__(
            f'block "{block}" in "{template}" is not defined in base template "{parent}"'
        )
        self.block = block
        self.template = template
        self.parent = parent


class MismatchedBlockNameError(TemplateError):
    def __init__(self, name: str, end_name: str, template: Path) -> None:
        super().__init__(
            f'mismatching block names ("{name}" / "{end_name}") in template "{template}"'
        )
        self.name = name
        self.end_name = end_name
        self.template = template


class DuplicateBlockError(TemplateError):
    def __init__(self, block: str, template: Path, marker: str = "block") -> None:
        super().__init__(f'duplicate "{marker}" for "{block}" in template "{template}"')
        self.block = block
        self.template = template
        self.marker = marker


class UnknownFilterError(TemplateError):
    def __init__(self, filter_name: str, template: Path) -> None:
        super().__init__(f'invalid filter "{filter_name}" in template "{template}"')
        self.filter_name = filter_name
        self.template = template


class ConflictingFiltersError(TemplateError):
    def __init__(self, block: str, template: Path) -> None:
        super().__init__(
            f'contradicting filters on block "{block}" in template "{template}": '
            "cannot output HTML and raw text simultaneously"
        )
        self.block = block
        self.template = template
