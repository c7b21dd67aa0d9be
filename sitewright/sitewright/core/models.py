"""Domain models for templates, articles and build results."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from ..templating.filters import Filter


class Role(str, Enum):
    """Whether a template provides block slots or fills them."""

    BASE = "base"
    PAGE = "page"


class Block(BaseModel):
    """A named, delimited region of a template."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Block name, unique within a template")
    filters: tuple[Filter, ...] = Field(default=(), description="Output filters")
    outer_text: str = Field(..., description="Opening marker through closing marker")
    inner_text: str = Field(..., description="Raw content between the markers")


class TemplateRecord(BaseModel):
    """A parsed template file."""

    model_config = ConfigDict(frozen=True)

    identity: Path = Field(..., description="Source file path")
    name: str = Field(..., description="Logical name used by extends statements")
    role: Role
    declared_parent: str | None = Field(default=None, description="Extended template")
    raw_content: str = Field(..., description="Full template text")
    blocks: dict[str, Block] = Field(default_factory=dict)
    output_target: Path | None = Field(default=None, description="Rendered page path")


class Article(BaseModel):
    """Metadata declared by a page through define comments."""

    title: str = ""
    description: str = ""
    category: str = ""
    subcategory: str = ""
    genre: str = ""
    keywords: str = ""
    tags: str = ""
    published: str = ""
    image: str = ""
    author: str = ""

    slug: str = ""
    artwork_credit: str = ""
    estimated_read_time: str = ""
    metadata: str = ""
    table_of_contents: str = ""

    url: str = ""
    template_path: Path | None = None


class BuildReport(BaseModel):
    """Everything a build wrote to disk."""

    pages: list[Path] = Field(default_factory=list)
    copied: list[Path] = Field(default_factory=list)
    stylesheets: list[Path] = Field(default_factory=list)
    routes: list[Path] = Field(default_factory=list)
    articles: list[Article] = Field(default_factory=list)


class CopyRule(BaseModel):
    """Copy a static file, or the matching files of a directory."""

    source: Path = Field(..., description="File or directory to copy")
    destination: Path = Field(..., description="Target file or directory")
    pattern: str = Field(default=".*", description="Regex selecting directory files")
    overwrite: bool = Field(default=True, description="Replace existing targets")


class StylesheetRule(BaseModel):
    """Compile an SCSS entry point to CSS."""

    source: Path = Field(..., description="SCSS entry point")
    destination: Path = Field(..., description="CSS output file")
    output_style: str = Field(default="expanded", description="libsass output style")


class Route(BaseModel):
    """A Jinja2 template rendered to a fixed output path."""

    template: Path = Field(..., description="Jinja2 template file")
    output: Path = Field(..., description="Output file path")


class Redirect(BaseModel):
    """A page that redirects visitors to another URL."""

    output: Path = Field(..., description="Output file path")
    target: str = Field(..., description="URL to redirect to")
