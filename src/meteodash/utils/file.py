"""File utility functions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

logger: Final = logging.getLogger(__name__)


def ensure_directory_exists(directory: Path) -> None:
    """Create directory if it doesn't exist.

    Args:
        directory: Path to create
    """
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
        logger.debug("Created directory: %s", directory)


def atomic_write_text(path: Path, content: str) -> None:
    """Write text to *path* via a sibling temp file and rename.

    Readers never observe a half-written file.

    Args:
        path: Destination file
        content: Text to write (UTF-8)
    """
    ensure_directory_exists(path.parent)
    tmp_path = path.with_name(f".{path.name}.tmp")
    tmp_path.write_text(content, encoding="utf-8")
    tmp_path.replace(path)
