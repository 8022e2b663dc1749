"""
Config introspection — read the app's ``lib/config/*.dart`` maps.

Config files declare one top-level map each:

    Map<String, dynamic> get appConfig => {
      'app': {
        'name': env('APP_NAME', 'My App'),
      },
    };

``env('KEY', default)`` calls are resolved against the project's
``.env`` file, falling back to the literal default.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from magic_cli.core.errors import NotFoundError, UsageError
from magic_cli.core.services.env_file import ENV_FILE, parse_env_file
from magic_cli.core.services.source_scan import dart_files, find_closing_brace

logger = logging.getLogger(__name__)

CONFIG_DIR = "lib/config"

_CONFIG_MAP = re.compile(
    r"Map<String,\s*dynamic>\s+(?:get\s+)?(\w+)\s*(?:=>|=)\s*\{",
)
_KEY = re.compile(r"'(\w+)'\s*:\s*")
_ENV_CALL = re.compile(r"^env\s*\(\s*'([^']+)'(?:\s*,\s*([^)]*?))?\s*\)")

_SCALARS = (
    re.compile(r"^'([^']*)'"),
    re.compile(r'^"([^"]*)"'),
    re.compile(r"^(-?\d+(?:\.\d+)?)\b"),
    re.compile(r"^(true|false|null)\b"),
)


# ═══════════════════════════════════════════════════════════════════
#  Models
# ═══════════════════════════════════════════════════════════════════


@dataclass
class ConfigSection:
    """A top-level key of one config map."""

    file: str
    config_name: str
    key: str
    nested_keys: int

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "config": self.config_name,
            "key": self.key,
            "nested_keys": self.nested_keys,
        }


@dataclass
class ConfigValue:
    """A resolved config value and where it came from."""

    key: str
    value: str
    source: str

    def to_dict(self) -> dict:
        return {"key": self.key, "value": self.value, "source": self.source}


# ═══════════════════════════════════════════════════════════════════
#  Map scanning
# ═══════════════════════════════════════════════════════════════════


def _depth_at(body: str, index: int) -> int:
    """Bracket nesting depth at ``index`` (0 = directly inside ``body``)."""
    prefix = body[:index]
    return (prefix.count("{") + prefix.count("[")) - (prefix.count("}") + prefix.count("]"))


def _entries(body: str) -> list[tuple[str, str]]:
    """Top-level ``'key': value`` pairs of a map body, value text left raw."""
    found = []
    for match in _KEY.finditer(body):
        if _depth_at(body, match.start()) != 0:
            continue
        found.append((match.group(1), body[match.end() :]))
    return found


def _config_maps(content: str) -> list[tuple[str, str]]:
    """``(name, body)`` for every config map declared in ``content``."""
    maps = []
    for match in _CONFIG_MAP.finditer(content):
        end = find_closing_brace(content, match.end())
        maps.append((match.group(1), content[match.end() : end]))
    return maps


def _block(value_text: str) -> str | None:
    """Body of a ``{ ... }`` value, or None if the value is not a map."""
    stripped = value_text.lstrip()
    if not stripped.startswith("{"):
        return None
    return stripped[1 : find_closing_brace(stripped, 1)]


def _scalar(value_text: str) -> str | None:
    text = value_text.strip()
    call = _ENV_CALL.match(text)
    if call:
        return call.group(0)
    for pattern in _SCALARS:
        match = pattern.match(text)
        if match:
            return match.group(1)
    block = _block(text)
    if block is not None:
        return "{" + " ".join(block.split()) + "}"
    return None


def _lookup(body: str, path: list[str]) -> str | None:
    head, rest = path[0], path[1:]
    for key, value_text in _entries(body):
        if key != head:
            continue
        if not rest:
            return _scalar(value_text)
        nested = _block(value_text)
        return _lookup(nested, rest) if nested is not None else None
    return None


# ═══════════════════════════════════════════════════════════════════
#  Public API
# ═══════════════════════════════════════════════════════════════════


def _config_files(root: Path) -> list[Path]:
    config_dir = root / CONFIG_DIR
    if not config_dir.is_dir():
        raise NotFoundError(f"Config directory not found: {CONFIG_DIR}/")
    return dart_files(config_dir)


def list_config(root: Path) -> dict:
    """Top-level sections of every config map, plus ``.env`` values.

    Returns:
        {"sections": [ConfigSection, ...], "files": int, "env": {key: value}}

    Raises:
        NotFoundError: If ``lib/config`` does not exist.
    """
    files = _config_files(root)
    sections: list[ConfigSection] = []

    for path in files:
        for config_name, body in _config_maps(path.read_text(encoding="utf-8")):
            for key, value_text in _entries(body):
                nested = _block(value_text)
                count = len(_KEY.findall(nested)) if nested is not None else 0
                sections.append(ConfigSection(path.stem, config_name, key, count))

    logger.debug("Found %d config section(s) in %d file(s)", len(sections), len(files))
    return {
        "sections": sections,
        "files": len(files),
        "env": parse_env_file(root / ENV_FILE),
    }


def get_config(root: Path, key: str) -> ConfigValue:
    """Resolve a dotted key such as ``app.name``.

    Raises:
        UsageError: If ``key`` is empty.
        NotFoundError: If no config map defines the key, or it reads an
            unset env variable without a default.
    """
    parts = [p for p in key.split(".") if p]
    if not parts:
        raise UsageError("Please provide a config key, e.g. config:get app.name")

    for path in _config_files(root):
        source = f"{CONFIG_DIR}/{path.name}"
        for _, body in _config_maps(path.read_text(encoding="utf-8")):
            raw = _lookup(body, parts)
            if raw is None:
                continue

            call = _ENV_CALL.match(raw)
            if call is None:
                return ConfigValue(key, raw, source)

            env_key, default = call.group(1), call.group(2)
            env = parse_env_file(root / ENV_FILE)
            if env_key in env:
                return ConfigValue(key, env[env_key], f"{ENV_FILE} ({env_key})")
            if default is not None and default.strip():
                return ConfigValue(key, _scalar(default) or default.strip(), f"{source} (default)")
            raise NotFoundError(f'Config key "{key}" reads {env_key}, which is not set.')

    raise NotFoundError(f'Config key "{key}" not found.')
