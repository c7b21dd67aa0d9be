"""File I/O operations for site builds."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from ..core.errors import OutputError

logger = logging.getLogger(__name__)


def discover(root: Path, pattern: str) -> list[tuple[Path, str]]:
    """Read every file under ``root`` matching a glob pattern.

    Args:
        root: Directory to search
        pattern: Glob pattern relative to ``root`` (e.g. ``**/*.md``)

    Returns:
        Sorted ``(path, text)`` pairs
    """
    if not root.is_dir():
        raise OutputError(f"Input directory not found: {root}")

    sources = []
    for path in sorted(p for p in root.glob(pattern) if p.is_file()):
        try:
            sources.append((path, path.read_text(encoding="utf-8")))
        except OSError as e:
            raise OutputError(f"Failed to read {path}: {e}") from e

    logger.debug(f"Discovered {len(sources)} file(s) matching {root / pattern}")
    return sources


def ensure_parent(path: Path) -> None:
    """Ensure parent directories exist for the given path.

    Args:
        path: Path whose parent directories should be created
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(f"Failed to create directory {path.parent}: {e}") from e


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """Write text to a file atomically using a temporary file.

    Args:
        path: Destination file path
        text: Text content to write
        mode: File permissions (octal)
    """
    ensure_parent(path)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    except OSError as e:
        raise OutputError(f"Failed to write {path}: {e}") from e
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
