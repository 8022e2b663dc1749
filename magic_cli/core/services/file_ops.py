"""
File operations — the only place the CLI touches the project tree.

Blocking, in-line calls.  Parent directories are created on demand.
"""

from __future__ import annotations

import logging
from pathlib import Path

from magic_cli.core.errors import NotFoundError

logger = logging.getLogger(__name__)


def read_file(path: Path) -> str:
    """Read a UTF-8 text file.

    Raises:
        NotFoundError: If the file does not exist.
    """
    if not path.is_file():
        raise NotFoundError(f"File not found: {path}")
    return path.read_text(encoding="utf-8")


def write_file(path: Path, content: str) -> Path:
    """Write ``content``, creating parent directories, replacing any old file."""
    ensure_directory(path.parent)
    path.write_text(content, encoding="utf-8")
    logger.debug("Wrote %s (%d bytes)", path, len(content))
    return path


def write_if_absent(path: Path, content: str) -> bool:
    """Write only when ``path`` does not exist yet.

    Returns:
        True if the file was written, False if it was left alone.
    """
    if path.exists():
        logger.debug("Keeping existing %s", path)
        return False
    write_file(path, content)
    return True


def ensure_directory(path: Path) -> bool:
    """Create ``path`` recursively.  Returns True if it had to be created."""
    if path.is_dir():
        return False
    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Created directory %s", path)
    return True


def relative_to_root(path: Path, root: Path) -> str:
    """``path`` relative to ``root`` as a posix string, or absolute if outside."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)
