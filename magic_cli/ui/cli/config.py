"""
CLI commands for ``magic config:list`` and ``magic config:get``.

Thin wrappers over ``magic_cli.core.services.config_ops``.
"""

from __future__ import annotations

import click

from magic_cli.console.command import Command, CommandContext
from magic_cli.core.errors import UsageError
from magic_cli.core.models.result import CommandResult
from magic_cli.core.services.config_ops import get_config, list_config
from magic_cli.ui.cli.tables import render_table


class ConfigListCommand(Command):
    name = "config:list"
    description = "List configuration sections and .env values"

    def configure(self, params: list[click.Parameter]) -> None:
        params.append(click.Option(["--source"], is_flag=True, help="Show the defining file."))

    def handle(self, ctx: CommandContext) -> CommandResult:
        outcome = list_config(ctx.project_root)
        sections = outcome["sections"]
        env = outcome["env"]
        with_source = ctx.has_option("source")

        if sections:
            headers = (["File"] if with_source else []) + ["Key", "Keys"]
            rows = [
                ([s.file] if with_source else []) + [s.key, str(s.nested_keys)]
                for s in sections
            ]
            ctx.line(render_table(headers, rows))
            ctx.info(f"Found {len(sections)} config section(s) in {outcome['files']} file(s)")
        else:
            ctx.comment("No configuration entries found.")

        if env:
            ctx.line()
            ctx.line(render_table(["Env", "Value"], [[k, v] for k, v in env.items()]))

        return CommandResult.success(
            self.name,
            f"{len(sections)} section(s)",
            metadata={"sections": [s.to_dict() for s in sections], "env": env},
        )


class ConfigGetCommand(Command):
    name = "config:get"
    description = "Get a configuration value"

    def configure(self, params: list[click.Parameter]) -> None:
        params.append(
            click.Option(["--show-source", "-s"], is_flag=True, help="Show where the value came from.")
        )

    def handle(self, ctx: CommandContext) -> CommandResult:
        key = ctx.argument(0)
        if not key:
            raise UsageError('Not enough arguments (missing: "key").')

        value = get_config(ctx.project_root, key)
        if ctx.has_option("show_source"):
            ctx.line(f"{value.value} {click.style(f'(from {value.source})', dim=True)}")
        else:
            ctx.line(value.value)
        return CommandResult.success(self.name, value.value, metadata=value.to_dict())
