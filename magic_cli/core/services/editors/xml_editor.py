"""
XML editor — string-level patches for Android manifests and Apple plists.

No XML parser is involved: anchors are literal closing tags, presence
checks are substring searches.  Every insertion is skipped when the
element is already present.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from magic_cli.core.errors import NotFoundError, StructureError
from magic_cli.core.services.file_ops import write_file

logger = logging.getLogger(__name__)

MANIFEST_CLOSE = "</manifest>"
DICT_CLOSE = "</dict>"

_APPLICATION_OPEN = re.compile(r"<application[^>]*>", re.DOTALL)
_PLIST_STRING_PAIR = re.compile(r"<key>([^<]+)</key>\s*<string>([^<]*)</string>")


# ── Read / probe ────────────────────────────────────────────────


def read(path: Path) -> str:
    """Raw XML text.

    Raises:
        NotFoundError: If the file does not exist.
    """
    if not path.is_file():
        raise NotFoundError(f"XML file not found: {path}")
    return path.read_text(encoding="utf-8")


def has_element(path: Path, pattern: str) -> bool:
    """Substring search; False for a missing file."""
    if not path.is_file():
        return False
    return pattern in path.read_text(encoding="utf-8")


# ── Insertion ───────────────────────────────────────────────────


def add_element(path: Path, anchor: str, element: str) -> bool:
    """Insert ``element`` on its own line right before ``anchor``.

    Raises:
        StructureError: If ``anchor`` is absent.
    """
    content = read(path)
    if element in content:
        return False
    if anchor not in content:
        raise StructureError(anchor, path)
    write_file(path, content.replace(anchor, f"{element}\n{anchor}", 1))
    logger.info("Added element to %s", path)
    return True


def add_android_permission(manifest: Path, permission: str) -> bool:
    """Add ``<uses-permission android:name="..."/>`` before ``</manifest>``.

    Skipped when the permission name already appears in the file.
    """
    if permission in read(manifest):
        return False
    return add_element(manifest, MANIFEST_CLOSE, f'    <uses-permission android:name="{permission}"/>')


def add_android_meta_data(manifest: Path, name: str, value: str) -> bool:
    """Add a ``<meta-data>`` element right after the ``<application ...>`` tag.

    Raises:
        StructureError: If there is no ``<application`` opening tag.
    """
    content = read(manifest)
    if f'android:name="{name}"' in content:
        return False

    match = _APPLICATION_OPEN.search(content)
    if match is None:
        raise StructureError("<application>", manifest)

    tag = f'        <meta-data android:name="{name}" android:value="{value}"/>'
    updated = content[: match.end()] + f"\n{tag}" + content[match.end() :]
    write_file(manifest, updated)
    logger.info("Added meta-data %s to %s", name, manifest)
    return True


# ── Plist ───────────────────────────────────────────────────────


def read_plist(path: Path) -> dict[str, str]:
    """Top-level ``<key>`` → ``<string>`` pairs.  Other value types are ignored."""
    return {key.strip(): value for key, value in _PLIST_STRING_PAIR.findall(read(path))}


def add_plist_entry(path: Path, key: str, value_xml: str) -> bool:
    """Add ``<key>key</key>`` plus ``value_xml`` before the last ``</dict>``.

    ``value_xml`` is the literal value element, e.g. ``<true/>``.

    Raises:
        StructureError: If the plist has no ``</dict>``.
    """
    content = read(path)
    if f"<key>{key}</key>" in content:
        return False

    index = content.rfind(DICT_CLOSE)
    if index < 0:
        raise StructureError(DICT_CLOSE, path)

    entry = f"\t<key>{key}</key>\n\t{value_xml}\n"
    line_start = content.rfind("\n", 0, index) + 1
    write_file(path, content[:line_start] + entry + content[line_start:])
    logger.info("Added plist key %s to %s", key, path)
    return True
