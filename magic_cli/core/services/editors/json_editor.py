"""
JSON editor — read, write and deep-merge JSON documents.

Writes always re-serialize the whole structure (indent 2), so key
order follows the merged mapping rather than the original text.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from magic_cli.core.errors import MagicError, NotFoundError
from magic_cli.core.services.file_ops import write_file

logger = logging.getLogger(__name__)


def read_json(path: Path) -> dict[str, Any]:
    """Parse a JSON object from ``path``.

    Raises:
        NotFoundError: If the file does not exist.
        MagicError: If the file is not a JSON object.
    """
    if not path.is_file():
        raise NotFoundError(f"JSON file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MagicError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise MagicError(f"Expected a JSON object in {path}")
    return data


def write_json(path: Path, data: Any, indent: int = 2) -> Path:
    """Serialize ``data`` to ``path``, creating parent directories."""
    return write_file(path, json.dumps(data, indent=indent, ensure_ascii=False) + "\n")


def merge_key(path: Path, key: str, value: Any) -> bool:
    """Set a top-level ``key``.  Returns False when it already held ``value``."""
    data = read_json(path)
    if key in data and data[key] == value:
        return False
    data[key] = value
    write_json(path, data)
    return True


def deep_merge(target: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``source`` into a copy of ``target``.

    Nested dicts on both sides merge; otherwise the ``source`` value
    wins.  Neither argument is mutated.

    >>> deep_merge({"auth": {"login": "Login"}}, {"auth": {"logout": "Logout"}})
    {'auth': {'login': 'Login', 'logout': 'Logout'}}
    """
    result = dict(target)
    for key, value in source.items():
        existing = result.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            result[key] = deep_merge(existing, value)
        else:
            result[key] = value
    return result


def merge_json_data(target: Path, source_data: dict[str, Any], force: bool = False) -> bool:
    """Deep-merge an in-memory mapping into the JSON file at ``target``.

    A missing target (or ``force``) writes ``source_data`` as-is.

    Returns:
        True if the file was written, False if the merge changed nothing.
    """
    if force or not target.exists():
        write_json(target, source_data)
        return True

    current = read_json(target)
    merged = deep_merge(current, source_data)
    if merged == current:
        logger.debug("Nothing to merge into %s", target)
        return False
    write_json(target, merged)
    logger.info("Merged %d key(s) into %s", len(source_data), target)
    return True


def merge_json_file(target: Path, source: Path, force: bool = False) -> bool:
    """Deep-merge the JSON file at ``source`` into ``target``."""
    return merge_json_data(target, read_json(source), force=force)


def has_key(path: Path, key: str) -> bool:
    """True if ``key`` is a top-level key.  Never raises."""
    try:
        return key in read_json(path)
    except MagicError:
        return False
