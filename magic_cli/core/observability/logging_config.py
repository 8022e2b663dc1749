"""
Logging configuration for the ``magic`` executable.

stderr carries two kinds of lines: command feedback printed by
``CommandContext`` (``⚠ ...``, ``✗ ...``) and log records.  Records are
written through click with the same markers, so a logged warning reads
like any other warning and colours drop out when stderr is not a TTY.

Levels:
    WARNING (default)  marker + message, nothing else
    INFO  (--verbose)  adds ``[module]``
    DEBUG (--debug)    adds ``[module:line]`` and tracebacks

Precedence: global flag > MAGIC_LOG_LEVEL > WARNING.  MAGIC_LOG_FILE
appends a plain, fully detailed copy of every record to a file.
"""

from __future__ import annotations

import logging

import click

# Marker and colour per severity; shared with CommandContext output.
WARNING_MARK = ("⚠", "yellow")
ERROR_MARK = ("✗", "red")

_PACKAGE = "magic_cli."

_FMT_FILE = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d  %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def _short_name(name: str) -> str:
    """``magic_cli.console.kernel`` → ``console.kernel``."""
    return name[len(_PACKAGE):] if name.startswith(_PACKAGE) else name


class ConsoleFormatter(logging.Formatter):
    """Render a record the way the CLI prints its own feedback."""

    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()

        if self.level <= logging.INFO:
            where = _short_name(record.name)
            if self.level <= logging.DEBUG:
                where = f"{where}:{record.lineno}"
            message = f"[{where}] {message}"

        if record.exc_info and self.level <= logging.DEBUG:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        if record.levelno >= logging.ERROR:
            mark, colour = ERROR_MARK
        elif record.levelno >= logging.WARNING:
            mark, colour = WARNING_MARK
        else:
            return click.style(message, dim=True)
        return click.style(f"{mark} {message}", fg=colour)


class ClickStderrHandler(logging.Handler):
    """Emit records on stderr via ``click.echo``."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for one ``magic`` run.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional file that also receives records.
        log_file_level: Level for the file; defaults to ``level``.
    """
    console_level = parse_level(level)

    console = ClickStderrHandler(console_level)
    console.setFormatter(ConsoleFormatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(root_level)
    logging.raiseExceptions = False


def parse_level(level: str | None) -> int:
    """Level name → numeric level; anything unknown is WARNING."""
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.strip().upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
