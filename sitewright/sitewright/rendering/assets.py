"""Static assets: file copies, SCSS compilation and output cleaning."""

from __future__ import annotations

import datetime as dt
import logging
import re
import shutil
from pathlib import Path

import sass

from ..core.errors import OutputError, StylesheetError
from ..core.models import CopyRule, StylesheetRule
from .io import atomic_write_text, ensure_parent

logger = logging.getLogger(__name__)


def _resolve(path: Path, dest_root: Path) -> Path:
    return path if path.is_absolute() else dest_root / path


def copy_file(source: Path, destination: Path, overwrite: bool = True) -> bool:
    """Copy one file, creating parent directories.

    Returns:
        True when the file was written, False when an existing target was kept
    """
    if destination.exists() and not overwrite:
        logger.debug(f"Kept existing {destination}")
        return False

    ensure_parent(destination)
    try:
        shutil.copyfile(source, destination)
    except OSError as e:
        raise OutputError(f"Failed to copy {source} to {destination}: {e}") from e
    logger.info(f"Copied {source} → {destination}")
    return True


def copy_assets(rule: CopyRule, dest_root: Path) -> list[Path]:
    """Copy a file, or every matching file of a directory tree.

    Args:
        rule: Copy rule to execute
        dest_root: Base directory for relative destinations

    Returns:
        Paths of the files written
    """
    destination = _resolve(rule.destination, dest_root)

    if rule.source.is_file():
        copied = copy_file(rule.source, destination, rule.overwrite)
        return [destination] if copied else []

    if not rule.source.is_dir():
        raise OutputError(f"Asset source not found: {rule.source}")

    check = re.compile(rule.pattern)
    written = []
    for path in sorted(p for p in rule.source.rglob("*") if p.is_file()):
        if not check.search(path.as_posix()):
            continue
        target = destination / path.relative_to(rule.source)
        if copy_file(path, target, rule.overwrite):
            written.append(target)
    return written


def compile_stylesheet(rule: StylesheetRule, dest_root: Path, file_mode: int = 0o644) -> Path:
    """Compile an SCSS file with libsass and write the CSS.

    Args:
        rule: Stylesheet rule to execute
        dest_root: Base directory for relative destinations
        file_mode: File permissions

    Returns:
        Output file path
    """
    if not rule.source.is_file():
        raise StylesheetError(f"Stylesheet not found: {rule.source}")

    try:
        css = sass.compile(filename=str(rule.source), output_style=rule.output_style)
    except sass.CompileError as e:
        raise StylesheetError(f"Failed to compile {rule.source}:\n\n{e}") from e

    destination = _resolve(rule.destination, dest_root)
    atomic_write_text(destination, css, mode=file_mode)
    logger.info(f"Compiled {rule.source} → {destination}")
    return destination


def _timestamp() -> str:
    return dt.datetime.now().strftime("%Y-%m-%d-at-%H-%M-%S")


def _trash_folder(trash_root: Path) -> Path:
    stamp = _timestamp()
    folder = trash_root / stamp
    # Several cleans within one second get numbered folders
    counter = 1
    while folder.exists():
        folder = trash_root / f"{stamp}-{counter}"
        counter += 1
    return folder


def clean_output(output_root: Path, safe: bool = True, trash_root: Path | None = None) -> Path | None:
    """Empty the output directory.

    Safe cleaning moves the directory into a timestamped folder under
    ``trash_root`` instead of deleting it. Earlier trash folders are never
    reused.

    Returns:
        The trash folder the previous output was moved to, if any
    """
    moved_to = None

    if output_root.exists():
        if safe:
            moved_to = _trash_folder(trash_root or Path(".sitewright/trash"))
            logger.info(f"Moving {output_root} → {moved_to}")
            try:
                moved_to.parent.mkdir(parents=True, exist_ok=True)
                shutil.move(str(output_root), str(moved_to))
            except OSError as e:
                raise OutputError(f"Failed to move {output_root}: {e}") from e
        else:
            logger.warning(f"Deleting the contents of {output_root}")
            try:
                shutil.rmtree(output_root)
            except OSError as e:
                raise OutputError(f"Failed to delete {output_root}: {e}") from e

    output_root.mkdir(parents=True, exist_ok=True)
    return moved_to
