"""
Dart source scanning helpers shared by route and config introspection.

These are regex scans, not a Dart parser: good enough for the
generated code layout, tolerant of anything else.
"""

from __future__ import annotations

import re
from pathlib import Path

_QUOTED = re.compile(r"'([^']+)'")


def find_closing_brace(content: str, start: int) -> int:
    """Index of the ``}`` closing the block whose body starts at ``start``.

    ``start`` is just past the opening ``{``.  Returns ``len(content)``
    for an unbalanced block.
    """
    depth = 1
    for i in range(start, len(content)):
        char = content[i]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return i
    return len(content)


def quoted_strings(text: str | None) -> list[str]:
    """Single-quoted literals in ``text``: ``"'auth', 'admin'"`` → ``['auth', 'admin']``."""
    if not text:
        return []
    return _QUOTED.findall(text)


def dart_files(directory: Path) -> list[Path]:
    """``*.dart`` files directly inside ``directory``, sorted by name."""
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == ".dart")
