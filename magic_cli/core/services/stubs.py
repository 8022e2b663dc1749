"""
Stub loader — finds ``.stub`` templates and fills ``{{ placeholder }}`` tokens.

Stubs are plain text files that editors can syntax-highlight.  The
built-in set ships inside the package (``magic_cli/stubs``); a project
can override any of them by dropping a file with the same key into its
own ``stubs/`` directory (or the directory named by MAGIC_CLI_STUBS_DIR).
Override directories are always searched before the built-ins.

Keys may be grouped with slashes: ``install/main`` → ``install/main.stub``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path

from magic_cli.core.errors import StubNotFoundError

logger = logging.getLogger(__name__)


# ── Stub directory ──────────────────────────────────────────────

BUILTIN_STUBS_DIR = Path(__file__).resolve().parent.parent.parent / "stubs"

STUB_EXTENSION = ".stub"

# {{ identifier }} with insignificant inner whitespace
_TOKEN = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


def replace(stub: str, replacements: Mapping[str, str]) -> str:
    """Substitute every ``{{ key }}`` whose key is in ``replacements``.

    Single pass: each token occurrence is visited once and replacement
    values are never rescanned, so the order of ``replacements`` does
    not matter.  Tokens with no matching key are left verbatim.
    """

    def _sub(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in replacements:
            return str(replacements[key])
        return match.group(0)

    return _TOKEN.sub(_sub, stub)


def leftover_tokens(text: str) -> list[str]:
    """Identifiers of ``{{ ... }}`` tokens still present in ``text``."""
    return _TOKEN.findall(text)


class StubLoader:
    """Resolve stub keys against override directories, then the built-ins.

    Args:
        search_paths: Override directories, highest priority first.
            Missing directories are ignored.
        builtin_dir: Built-in stub directory (tests may point elsewhere).
    """

    def __init__(
        self,
        search_paths: Iterable[Path] | None = None,
        builtin_dir: Path = BUILTIN_STUBS_DIR,
    ):
        self.search_paths = [Path(p) for p in (search_paths or [])]
        self.builtin_dir = builtin_dir

    @classmethod
    def for_project(cls, project_root: Path | None, stubs_dir: Path | None = None) -> StubLoader:
        """Loader with the usual override order: ``stubs_dir``, then ``<root>/stubs``."""
        paths: list[Path] = []
        if stubs_dir is not None:
            paths.append(stubs_dir)
        if project_root is not None:
            paths.append(project_root / "stubs")
        return cls(paths)

    def find(self, key: str) -> Path | None:
        """Path of the stub that wins for ``key``, or None."""
        filename = f"{key}{STUB_EXTENSION}"
        for directory in [*self.search_paths, self.builtin_dir]:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
        return None

    def exists(self, key: str) -> bool:
        return self.find(key) is not None

    def load(self, key: str) -> str:
        """Raw stub content for ``key``.

        Raises:
            StubNotFoundError: If neither an override nor a built-in exists.
        """
        path = self.find(key)
        if path is None:
            raise StubNotFoundError(key)
        logger.debug("Loading stub %s from %s", key, path)
        return path.read_text(encoding="utf-8")

    def render(self, key: str, replacements: Mapping[str, str]) -> str:
        """Load ``key`` and substitute ``replacements`` in one step."""
        return replace(self.load(key), replacements)
