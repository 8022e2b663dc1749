"""
HTML editor — string-level injection into ``web/index.html``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from magic_cli.core.errors import NotFoundError, StructureError
from magic_cli.core.services.file_ops import write_file

logger = logging.getLogger(__name__)

HEAD_CLOSE = "</head>"


def read(path: Path) -> str:
    """Raw HTML text.

    Raises:
        NotFoundError: If the file does not exist.
    """
    if not path.is_file():
        raise NotFoundError(f"HTML file not found: {path}")
    return path.read_text(encoding="utf-8")


def has_content(path: Path, pattern: str) -> bool:
    """Case-insensitive substring search; False for a missing file."""
    if not path.is_file():
        return False
    return pattern.lower() in path.read_text(encoding="utf-8").lower()


def inject_before_close(path: Path, closing_tag: str, content: str) -> bool:
    """Insert ``content`` on its own line before the first ``closing_tag``.

    A second call with the same content is a no-op.

    Raises:
        StructureError: If ``closing_tag`` is absent.
    """
    html = read(path)
    if content.strip() and content.strip() in html:
        return False
    if closing_tag not in html:
        raise StructureError(closing_tag, path)
    write_file(path, html.replace(closing_tag, f"{content}\n{closing_tag}", 1))
    logger.info("Injected content before %s in %s", closing_tag, path)
    return True


def add_meta_tag(path: Path, attributes: dict[str, str]) -> bool:
    """Add ``<meta k="v" ...>`` before ``</head>``.

    Skipped when every ``k="v"`` pair already appears in the file.
    """
    html = read(path)
    pairs = [f'{key}="{value}"' for key, value in attributes.items()]
    if all(pair in html for pair in pairs):
        return False
    return inject_before_close(path, HEAD_CLOSE, f"  <meta {' '.join(pairs)}>")
