"""CLI argument parsers and validators."""

from __future__ import annotations

from pathlib import Path

import typer

from ..core.models import CopyRule, StylesheetRule


def parse_pair(value: str) -> tuple[Path, Path]:
    """Parse an argument in format SOURCE=DEST."""
    if "=" not in value:
        raise typer.BadParameter(f"Must be SOURCE=DEST, got: {value!r}")
    source, destination = value.split("=", 1)
    if not source or not destination:
        raise typer.BadParameter(f"Must be SOURCE=DEST, got: {value!r}")
    return Path(source), Path(destination)


def parse_copy(value: str) -> CopyRule:
    """Parse a copy argument in format SOURCE=DEST."""
    source, destination = parse_pair(value)
    return CopyRule(source=source, destination=destination)


def parse_stylesheet(value: str) -> StylesheetRule:
    """Parse a stylesheet argument in format SOURCE=DEST."""
    source, destination = parse_pair(value)
    return StylesheetRule(source=source, destination=destination)
