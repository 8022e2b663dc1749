"""
CLI command for ``magic key:generate``.
"""

from __future__ import annotations

import click

from magic_cli.console.command import Command, CommandContext
from magic_cli.core.models.result import CommandResult
from magic_cli.core.services.key_ops import KEY_NAME, generate_key, write_app_key


class KeyGenerateCommand(Command):
    name = "key:generate"
    description = "Generate a new application key"

    def configure(self, params: list[click.Parameter]) -> None:
        params.append(
            click.Option(["--show"], is_flag=True, help="Display the key instead of writing it.")
        )

    def handle(self, ctx: CommandContext) -> CommandResult:
        key = generate_key()

        if ctx.has_option("show"):
            ctx.line(key)
            return CommandResult.success(self.name, "Key displayed", metadata={"key": key})

        outcome = write_app_key(ctx.project_root, key)
        if outcome["created"]:
            ctx.comment("Created .env file")

        ctx.success("Application key generated successfully!")
        ctx.line(f"  {KEY_NAME}: {key}")

        if not outcome["asset_registered"]:
            ctx.line()
            ctx.warn("Add .env to your pubspec.yaml assets:")
            ctx.comment("  flutter:")
            ctx.comment("    assets:")
            ctx.comment("      - .env")

        return CommandResult.success(self.name, "Application key set", metadata=outcome)
