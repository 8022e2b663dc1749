"""
CLI command for ``magic install``.

Thin wrapper over ``magic_cli.core.services.install_ops``.
"""

from __future__ import annotations

import click

from magic_cli.console.command import Command, CommandContext
from magic_cli.core.models.result import CommandResult
from magic_cli.core.services.install_ops import InstallOptions, install

_FEATURES = ("auth", "database", "network", "cache", "events", "localization", "logging")


class InstallCommand(Command):
    name = "install"
    description = "Initialize Magic in a Flutter project"

    def configure(self, params: list[click.Parameter]) -> None:
        for feature in _FEATURES:
            params.append(
                click.Option([f"--without-{feature}"], is_flag=True, help=f"Skip {feature} setup.")
            )

    def handle(self, ctx: CommandContext) -> CommandResult:
        root = ctx.project_root
        opts = InstallOptions.from_options(ctx.options)
        outcome = install(root, ctx.stubs(), opts)

        for path in outcome["created"]:
            ctx.success(f"Created: {path}")
        for path in outcome["patched"]:
            ctx.info(f"  Updated: {path}")
        for path in outcome["skipped"]:
            ctx.comment(f"  Exists:  {path}")

        ctx.line()
        ctx.success("Magic installed successfully!")
        return CommandResult.success(
            self.name,
            "Magic installed successfully!",
            created=outcome["created"],
            skipped=outcome["skipped"],
            metadata={"patched": outcome["patched"], "directories": outcome["directories"]},
        )
