"""
Project loader — locates the project root and reads pubspec.yaml.

The project root is the nearest ancestor directory that contains the
manifest file.  All generated paths are anchored there.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from magic_cli.core.errors import NotFoundError, ProjectNotFoundError
from magic_cli.core.models.pubspec import Pubspec

logger = logging.getLogger(__name__)

# Project manifest filename
PROJECT_MANIFEST = "pubspec.yaml"


def find_project_file(start_dir: Path | None = None) -> Path | None:
    """Search for pubspec.yaml starting from the given directory, walking up.

    This allows running commands from subdirectories and still finding
    the project root.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to pubspec.yaml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        candidate = current / PROJECT_MANIFEST
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None  # filesystem root
        current = parent


def find_project_root(start_dir: Path | None = None) -> Path:
    """Return the directory holding pubspec.yaml.

    Raises:
        ProjectNotFoundError: If no manifest exists up to the filesystem root.
    """
    manifest = find_project_file(start_dir)
    if manifest is None:
        raise ProjectNotFoundError(
            f"Could not find {PROJECT_MANIFEST}. Not in a Flutter/Dart project?"
        )
    logger.debug("Project root resolved to %s", manifest.parent)
    return manifest.parent


def load_pubspec(root: Path) -> Pubspec:
    """Load and validate pubspec.yaml from ``root``.

    Raises:
        NotFoundError: If the manifest is missing, unreadable,
            not a mapping, or has fields of the wrong shape.
    """
    path = root / PROJECT_MANIFEST
    if not path.is_file():
        raise NotFoundError(f"{PROJECT_MANIFEST} not found in {root}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise NotFoundError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise NotFoundError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise NotFoundError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Empty sections parse as None; the model wants mappings.
    for key in ("dependencies", "dev_dependencies", "flutter"):
        if data.get(key) is None:
            data.pop(key, None)
    if isinstance(data.get("flutter"), dict) and data["flutter"].get("assets") is None:
        data["flutter"].pop("assets", None)
    for key in ("name", "description", "version"):
        if key in data and data[key] is not None:
            data[key] = str(data[key])
        else:
            data.pop(key, None)

    try:
        return Pubspec.model_validate(data)
    except ValidationError as e:
        raise NotFoundError(f"Unsupported pubspec layout in {path}: {e.error_count()} invalid field(s)") from e


def app_name(root: Path) -> str:
    """Human readable application name from pubspec ``name``.

    ``magic_e2e_test`` → ``Magic E2e Test``; falls back to ``My App``.
    """
    from magic_cli.core.services.naming import to_title_words

    try:
        name = load_pubspec(root).name
    except NotFoundError:
        return "My App"
    return to_title_words(name) if name else "My App"
