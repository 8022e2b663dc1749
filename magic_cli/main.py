"""
Magic CLI — entrypoint for the ``magic`` executable.

Usage:
    magic --help
    magic make:model Post -a
    magic --verbose install --without-auth

Global logging flags (``--verbose``, ``--debug``, ``--quiet``) are only
recognized before the command name; everything after it belongs to
the command.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from magic_cli import __version__
from magic_cli.console.kernel import Kernel
from magic_cli.core.config.settings import CliSettings
from magic_cli.core.observability.logging_config import setup_logging
from magic_cli.ui.cli import build_registry

_GLOBAL_FLAGS = {"--verbose", "--debug", "--quiet"}


def split_global_flags(argv: Sequence[str]) -> tuple[set[str], list[str]]:
    """Peel leading global flags off ``argv``."""
    flags: set[str] = set()
    args = list(argv)
    while args and args[0] in _GLOBAL_FLAGS:
        flags.add(args.pop(0))
    return flags, args


def resolve_level(flags: set[str], settings: CliSettings) -> str:
    if "--debug" in flags:
        return "DEBUG"
    if "--verbose" in flags:
        return "INFO"
    if "--quiet" in flags:
        return "ERROR"
    return settings.log_level


def run(argv: Sequence[str], settings: CliSettings | None = None) -> int:
    """Configure logging, build the kernel and dispatch ``argv``."""
    settings = settings or CliSettings.from_env()
    flags, args = split_global_flags(argv)

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(flags, settings),
        log_file=settings.log_file,
        log_file_level=settings.log_file_level,
    )

    kernel = Kernel(build_registry(), version=__version__, settings=settings)
    return kernel.handle(args)


def main(argv: Sequence[str] | None = None) -> None:
    sys.exit(run(sys.argv[1:] if argv is None else argv))


if __name__ == "__main__":
    main()
