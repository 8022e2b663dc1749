"""
Console layer — the command contract, the generator pipeline and the
kernel that dispatches argv to registered commands.
"""

from magic_cli.console.command import Command, CommandContext
from magic_cli.console.generator import GeneratorCommand
from magic_cli.console.kernel import CommandRegistry, Kernel

__all__ = ["Command", "CommandContext", "CommandRegistry", "GeneratorCommand", "Kernel"]
