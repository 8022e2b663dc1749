"""
Command base — the contract between the kernel and every CLI command.

The kernel only talks to commands through this interface: it asks a
command to declare its click parameters, parses argv against them,
and hands the parsed values to ``handle`` inside a CommandContext.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import click
from pydantic import BaseModel, ConfigDict, Field

from magic_cli.core.config.loader import find_project_root
from magic_cli.core.config.settings import CliSettings
from magic_cli.core.models.result import CommandResult
from magic_cli.core.observability.logging_config import ERROR_MARK, WARNING_MARK
from magic_cli.core.services.stubs import StubLoader


class CommandContext(BaseModel):
    """Everything a command needs to run: parsed input plus the environment.

    ``arguments`` are the positional values in order; ``options`` maps
    click parameter names to parsed values.  ``clock`` is injectable so
    timestamped output (migrations) is reproducible.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    command: str = ""
    arguments: list[str] = Field(default_factory=list)
    options: dict[str, Any] = Field(default_factory=dict)
    settings: CliSettings = Field(default_factory=CliSettings)
    cwd: Path = Field(default_factory=Path.cwd)
    clock: Callable[[], datetime] = datetime.now

    # ── Input ───────────────────────────────────────────────────

    def argument(self, index: int = 0) -> str | None:
        """Positional argument at ``index``, or None."""
        if index < len(self.arguments):
            return self.arguments[index]
        return None

    def option(self, name: str, default: Any = None) -> Any:
        value = self.options.get(name)
        return default if value is None else value

    def has_option(self, name: str) -> bool:
        """True if the option was given a truthy value."""
        return bool(self.options.get(name))

    # ── Environment ─────────────────────────────────────────────

    @property
    def project_root(self) -> Path:
        """Pinned root from settings, else the nearest pubspec.yaml ancestor.

        Raises:
            ProjectNotFoundError: If no project encloses ``cwd``.
        """
        if self.settings.project_root is not None:
            return self.settings.project_root.resolve()
        return find_project_root(self.cwd)

    def stubs(self) -> StubLoader:
        """Stub loader with this project's override directories."""
        return StubLoader.for_project(self.project_root, self.settings.stubs_dir)

    def child(self, command: str, arguments: list[str], **options: Any) -> CommandContext:
        """Context for a sub-command run on behalf of this one."""
        return self.model_copy(
            update={"command": command, "arguments": list(arguments), "options": options},
        )

    # ── Output ──────────────────────────────────────────────────

    def line(self, message: str = "") -> None:
        click.echo(message)

    def info(self, message: str) -> None:
        click.secho(message, fg="cyan")

    def success(self, message: str) -> None:
        click.secho(f"✓ {message}", fg="green")

    def comment(self, message: str) -> None:
        click.secho(message, dim=True)

    def warn(self, message: str) -> None:
        mark, colour = WARNING_MARK
        click.secho(f"{mark} {message}", fg=colour)

    def error(self, message: str) -> None:
        mark, colour = ERROR_MARK
        click.secho(f"{mark} {message}", fg=colour, err=True)


class Command(ABC):
    """Abstract base class for all commands.

    Subclasses set ``name`` (``make:model``, ``install``; a colon makes
    a namespace) and ``description``, declare parameters in
    ``configure`` and do their work in ``handle``.

    Positional arguments never need declaring: the kernel collects them
    into ``CommandContext.arguments``.
    """

    name: str = ""
    description: str = ""

    def configure(self, params: list[click.Parameter]) -> None:
        """Append click options to ``params``.  Default: none."""

    @abstractmethod
    def handle(self, ctx: CommandContext) -> CommandResult:
        """Run the command.

        ``MagicError`` subclasses may be raised; the kernel reports
        them and exits with the error's ``exit_code``.
        """

    @property
    def namespace(self) -> str:
        """``make`` for ``make:model``; ``""`` for root commands."""
        head, sep, _ = self.name.partition(":")
        return head if sep else ""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
