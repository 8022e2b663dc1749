"""
Config editor — text patches for pubspec.yaml and Dart source files.

pubspec.yaml is edited as text so the user's comments and ordering
survive; the patched document is re-parsed with PyYAML before it is
written, and an edit that would produce invalid YAML is refused.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

import yaml

from magic_cli.core.errors import MagicError, StructureError
from magic_cli.core.services.file_ops import read_file, write_file

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  YAML block helpers
# ═══════════════════════════════════════════════════════════════════


def _top_level_key(key: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(key)}:[ \t]*(#.*)?$", re.MULTILINE)


_NEXT_TOP_LEVEL = re.compile(r"^[^\s#][^\n]*$", re.MULTILINE)


def _block_span(content: str, key: str) -> tuple[int, int] | None:
    """``(body_start, body_end)`` of a top-level mapping block, or None.

    ``body_start`` is just past the header line's newline; ``body_end``
    is the start of the next top-level line (or end of document).
    """
    header = _top_level_key(key).search(content)
    if header is None:
        return None
    body_start = header.end()
    if body_start < len(content) and content[body_start] == "\n":
        body_start += 1
    nxt = _NEXT_TOP_LEVEL.search(content, body_start)
    body_end = nxt.start() if nxt else len(content)
    return body_start, body_end


def _with_trailing_newline(content: str) -> str:
    return content if content.endswith("\n") or not content else content + "\n"


def _validated(content: str, path: Path) -> str:
    try:
        yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise MagicError(f"Refusing to write invalid YAML to {path}: {e}") from e
    return content


def _load_mapping(content: str) -> dict:
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError:
        return {}
    return data if isinstance(data, dict) else {}


# ═══════════════════════════════════════════════════════════════════
#  pubspec.yaml
# ═══════════════════════════════════════════════════════════════════


def add_dependency(pubspec: Path, name: str, version: str) -> bool:
    """Add or update ``name: version`` under ``dependencies:``.

    Creates the section when missing.

    Returns:
        True if the file changed, False if the dependency was already
        pinned to ``version``.
    """
    content = _with_trailing_newline(read_file(pubspec))
    deps = _load_mapping(content).get("dependencies")
    if not isinstance(deps, dict):
        deps = {}

    if name in deps and str(deps[name]) == version:
        logger.debug("Dependency %s already at %s", name, version)
        return False

    entry = f"  {name}: {version}\n"
    span = _block_span(content, "dependencies")

    if span is None:
        updated = content + f"\ndependencies:\n{entry}"
    else:
        start, end = span
        body = content[start:end]
        existing = re.compile(
            rf"^  {re.escape(name)}:[^\n]*\n?(?:^    [^\n]*\n?)*", re.MULTILINE
        )
        if existing.search(body):
            body = existing.sub(entry, body, count=1)
        else:
            body = entry + body
        updated = content[:start] + body + content[end:]

    write_file(pubspec, _validated(updated, pubspec))
    logger.info("Registered dependency %s: %s in %s", name, version, pubspec)
    return True


def add_asset(pubspec: Path, asset: str) -> bool:
    """Ensure ``asset`` is listed under ``flutter: assets:``.

    Returns:
        True if the file changed, False if the asset was already listed.
    """
    content = _with_trailing_newline(read_file(pubspec))
    flutter = _load_mapping(content).get("flutter")
    assets = (flutter.get("assets") if isinstance(flutter, dict) else None) or []

    listed = [a.get("path") if isinstance(a, dict) else a for a in assets]
    if asset in listed:
        logger.debug("Asset %s already registered", asset)
        return False

    item = f"    - {asset}\n"
    span = _block_span(content, "flutter")

    if span is None:
        updated = content + f"\nflutter:\n  assets:\n{item}"
    else:
        start, end = span
        body = content[start:end]
        header = re.compile(r"^  assets:[ \t]*(#.*)?\n?", re.MULTILINE).search(body)
        if header is None:
            body = f"  assets:\n{item}" + body
        else:
            cut = header.end()
            prefix = body[:cut] if body[:cut].endswith("\n") else body[:cut] + "\n"
            body = prefix + item + body[cut:]
        updated = content[:start] + body + content[end:]

    write_file(pubspec, _validated(updated, pubspec))
    logger.info("Registered asset %s in %s", asset, pubspec)
    return True


# ═══════════════════════════════════════════════════════════════════
#  Dart sources
# ═══════════════════════════════════════════════════════════════════


def add_import(path: Path, statement: str) -> bool:
    """Add an import after the existing import block (or at the top).

    A missing trailing semicolon is added.  Returns False when the
    statement is already present.
    """
    content = read_file(path)
    statement = statement.strip()
    if not statement.endswith(";"):
        statement += ";"

    if statement in content:
        return False

    lines = content.split("\n")
    insert_at = 0
    for i, line in enumerate(lines):
        stripped = line.strip()
        if stripped.startswith("import "):
            insert_at = i + 1
        elif stripped and not stripped.startswith("//") and insert_at > 0:
            break

    lines.insert(insert_at, statement)
    write_file(path, "\n".join(lines))
    logger.info("Added import to %s", path)
    return True


def insert_before(path: Path, anchor: str, code: str) -> bool:
    """Insert ``code`` immediately before the first ``anchor``.

    Raises:
        StructureError: If ``anchor`` does not occur in the file.
    """
    content = read_file(path)
    if code in content:
        return False
    index = content.find(anchor)
    if index < 0:
        raise StructureError(anchor, path)
    write_file(path, content[:index] + code + content[index:])
    return True


def insert_after(path: Path, anchor: str, code: str) -> bool:
    """Insert ``code`` immediately after the first ``anchor``.

    Raises:
        StructureError: If ``anchor`` does not occur in the file.
    """
    content = read_file(path)
    if code in content:
        return False
    index = content.find(anchor)
    if index < 0:
        raise StructureError(anchor, path)
    end = index + len(anchor)
    write_file(path, content[:end] + code + content[end:])
    return True


def create_config_file(path: Path, content: str) -> Path:
    """Write a config file, creating parent directories, replacing any old one."""
    return write_file(path, content)
