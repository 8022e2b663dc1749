"""
Route introspection — scan ``lib/routes/*.dart`` for page routes.

Recognized shapes:

    MagicRoute.page('/users', () => ...).middleware(['auth']);

    MagicRoute.group(prefix: '/admin', middleware: ['auth'], routes: () {
      MagicRoute.page('/users', () => ...);
    });
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from magic_cli.core.errors import NotFoundError
from magic_cli.core.services.source_scan import dart_files, find_closing_brace, quoted_strings

logger = logging.getLogger(__name__)

ROUTES_DIR = "lib/routes"

_GROUP = re.compile(r"MagicRoute\.group\s*\(([\s\S]*?)routes:\s*\(\)\s*\{")
_GROUP_PREFIX = re.compile(r"prefix:\s*'([^']*)'")
_GROUP_MIDDLEWARE = re.compile(r"middleware:\s*\[([^\]]*)\]")
_PAGE = re.compile(r"MagicRoute\.page\s*\(\s*'([^']+)'")
_INLINE_MIDDLEWARE = re.compile(r"\.middleware\s*\(\s*\[([^\]]*)\]")

# How far past a page() call an inline .middleware([...]) may appear
_INLINE_WINDOW = 200


@dataclass
class Route:
    """One page route found in a routes file."""

    path: str
    prefix: str = ""
    middleware: list[str] = field(default_factory=list)
    source_file: str = ""
    method: str = "GET"

    @property
    def full_path(self) -> str:
        if not self.prefix:
            return self.path
        if self.path == "/":
            return self.prefix
        return f"{self.prefix.rstrip('/')}/{self.path.lstrip('/')}"

    def to_dict(self) -> dict:
        return {
            "method": self.method,
            "path": self.full_path,
            "middleware": list(self.middleware),
            "file": self.source_file,
        }


@dataclass
class _Group:
    prefix: str
    middleware: list[str]
    start: int
    end: int


def parse_routes(content: str, source_file: str = "") -> list[Route]:
    """All page routes in one file's source, in source order."""
    groups: list[_Group] = []
    for match in _GROUP.finditer(content):
        args = match.group(1)
        prefix = _GROUP_PREFIX.search(args)
        middleware = _GROUP_MIDDLEWARE.search(args)
        groups.append(
            _Group(
                prefix=prefix.group(1) if prefix else "",
                middleware=quoted_strings(middleware.group(1) if middleware else None),
                start=match.end(),
                end=find_closing_brace(content, match.end()),
            )
        )

    routes: list[Route] = []
    for match in _PAGE.finditer(content):
        position = match.start()
        # Innermost enclosing group wins
        enclosing = [g for g in groups if g.start < position < g.end]
        group = max(enclosing, key=lambda g: g.start) if enclosing else None

        middleware = list(group.middleware) if group else []
        tail = content[match.end() : match.end() + _INLINE_WINDOW]
        next_page = _PAGE.search(tail)
        if next_page:
            tail = tail[: next_page.start()]
        inline = _INLINE_MIDDLEWARE.search(tail)
        if inline:
            middleware.extend(quoted_strings(inline.group(1)))

        routes.append(
            Route(
                path=match.group(1),
                prefix=group.prefix if group else "",
                middleware=middleware,
                source_file=source_file,
            )
        )
    return routes


def list_routes(root: Path) -> dict:
    """Every route under ``<root>/lib/routes``, sorted by full path.

    Returns:
        {"routes": [Route, ...], "files": int}

    Raises:
        NotFoundError: If the routes directory does not exist.
    """
    routes_dir = root / ROUTES_DIR
    if not routes_dir.is_dir():
        raise NotFoundError(f"Routes directory not found: {ROUTES_DIR}/")

    files = dart_files(routes_dir)
    routes: list[Route] = []
    for path in files:
        found = parse_routes(path.read_text(encoding="utf-8"), path.name)
        logger.debug("%s: %d route(s)", path.name, len(found))
        routes.extend(found)

    routes.sort(key=lambda r: r.full_path)
    return {"routes": routes, "files": len(files)}
