"""
Kernel — argv dispatch for the ``magic`` executable.

The kernel owns no commands of its own.  It is handed an explicit
CommandRegistry at construction, resolves the first argv token against
it, parses the rest with click using the parameters the command
declares, and translates the outcome into a process exit code.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from datetime import datetime
from pathlib import Path

import click

from magic_cli import __version__
from magic_cli.console.command import Command, CommandContext
from magic_cli.core.config.settings import CliSettings
from magic_cli.core.errors import MagicError, UnknownCommandError

logger = logging.getLogger(__name__)

HELP_FLAGS = ("--help", "-h")
VERSION_FLAGS = ("--version", "-V")

# Positional values are collected under this parameter name.
ARGUMENTS_PARAM = "arguments"


class CommandRegistry:
    """Name → command lookup, built once at startup.

    Registering a name twice replaces the earlier command; the
    replacement is logged as a warning.
    """

    def __init__(self, commands: Iterable[Command] = ()):
        self._commands: dict[str, Command] = {}
        self.register_many(commands)

    def register(self, command: Command) -> None:
        name = command.name
        if not name:
            raise ValueError(f"{command.__class__.__name__} has no name")
        if name in self._commands:
            logger.warning("Overwriting existing command: %s", name)
        self._commands[name] = command
        logger.debug("Registered command: %s", name)

    def register_many(self, commands: Iterable[Command]) -> None:
        for command in commands:
            self.register(command)

    def get(self, name: str) -> Command | None:
        return self._commands.get(name)

    def names(self) -> list[str]:
        return sorted(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)


class Kernel:
    """Resolve, parse, run, and map results to exit codes.

    Args:
        registry:  The commands this kernel can dispatch to.
        version:   Shown by ``--version`` and in the help banner.
        prog_name: Executable name used in usage lines.
        settings:  Process settings handed to every CommandContext.
        cwd:       Directory project discovery starts from (default: CWD).
        clock:     Time source for timestamped output.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        version: str = __version__,
        prog_name: str = "magic",
        settings: CliSettings | None = None,
        cwd: Path | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.registry = registry
        self.version = version
        self.prog_name = prog_name
        self.settings = settings or CliSettings()
        self.cwd = cwd
        self.clock = clock or datetime.now

    # ── Dispatch ────────────────────────────────────────────────

    def handle(self, args: Sequence[str]) -> int:
        """Run one command line and return its exit code."""
        args = list(args)

        if not args or args[0] in HELP_FLAGS:
            self.print_help()
            return 0

        if any(a in VERSION_FLAGS for a in args):
            click.echo(f"Magic CLI {self.version}")
            return 0

        name = args[0]
        command = self.registry.get(name)
        if command is None:
            click.secho(UnknownCommandError(name).message, fg="red", err=True)
            click.echo()
            self.print_help()
            return 1

        cli_command = self._click_command(command)
        try:
            click_ctx = cli_command.make_context(f"{self.prog_name} {name}", args[1:])
        except click.exceptions.Exit as e:
            # --help inside a command
            return e.exit_code
        except click.ClickException as e:
            e.show()
            return 1

        params = dict(click_ctx.params)
        positional = [str(v) for v in params.pop(ARGUMENTS_PARAM, ())]

        ctx = CommandContext(
            command=name,
            arguments=positional,
            options=params,
            settings=self.settings,
            cwd=self.cwd or Path.cwd(),
            clock=self.clock,
        )

        logger.debug("Dispatching %s args=%s options=%s", name, positional, params)
        try:
            result = command.handle(ctx)
        except MagicError as e:
            ctx.error(e.message)
            return e.exit_code
        except Exception as e:
            logger.debug("Command %s crashed", name, exc_info=True)
            ctx.error("An error occurred while executing the command:")
            click.echo(f"  {e}", err=True)
            return 1

        return result.exit_code

    def _click_command(self, command: Command) -> click.Command:
        params: list[click.Parameter] = []
        command.configure(params)
        params.append(click.Argument([ARGUMENTS_PARAM], nargs=-1))
        return click.Command(
            name=command.name,
            params=params,
            help=command.description,
            context_settings={"help_option_names": list(HELP_FLAGS)},
        )

    # ── Help ────────────────────────────────────────────────────

    def print_help(self) -> None:
        """Banner, global options, then commands: root first, namespaces sorted."""
        click.secho(f"Magic CLI {self.version}", fg="green", bold=True)
        click.echo()
        click.secho("Usage:", fg="yellow")
        click.echo(f"  {self.prog_name} <command> [options] [arguments]")
        click.echo()
        click.secho("Options:", fg="yellow")
        click.echo("  -h, --help      Display help for the given command")
        click.echo("  -V, --version   Display this application version")
        click.echo()
        click.secho("Available commands:", fg="yellow")

        root: list[Command] = []
        namespaces: dict[str, list[Command]] = {}
        for command in self.registry:
            if command.namespace:
                namespaces.setdefault(command.namespace, []).append(command)
            else:
                root.append(command)

        for command in sorted(root, key=lambda c: c.name):
            self._print_row(command)

        for ns in sorted(namespaces):
            click.secho(f" {ns}", fg="yellow")
            for command in sorted(namespaces[ns], key=lambda c: c.name):
                self._print_row(command)

    @staticmethod
    def _print_row(command: Command) -> None:
        click.echo(f"  {click.style(command.name.ljust(20), fg='green')} {command.description}")
