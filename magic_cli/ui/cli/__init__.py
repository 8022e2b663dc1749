"""
CLI commands — the concrete commands the ``magic`` executable ships.
"""

from __future__ import annotations

from magic_cli.console.kernel import CommandRegistry
from magic_cli.ui.cli.config import ConfigGetCommand, ConfigListCommand
from magic_cli.ui.cli.install import InstallCommand
from magic_cli.ui.cli.key import KeyGenerateCommand
from magic_cli.ui.cli.make import make_commands
from magic_cli.ui.cli.routes import RouteListCommand


def build_registry() -> CommandRegistry:
    """The default command set, registered once at startup."""
    return CommandRegistry(
        [
            InstallCommand(),
            KeyGenerateCommand(),
            RouteListCommand(),
            ConfigListCommand(),
            ConfigGetCommand(),
            *make_commands(),
        ]
    )
