"""
CLI command for ``magic route:list``.
"""

from __future__ import annotations

import click

from magic_cli.console.command import Command, CommandContext
from magic_cli.core.models.result import CommandResult
from magic_cli.core.services.route_ops import list_routes
from magic_cli.ui.cli.tables import render_table


class RouteListCommand(Command):
    name = "route:list"
    description = "List all application routes"

    def configure(self, params: list[click.Parameter]) -> None:
        params.append(click.Option(["--verbose", "-v"], is_flag=True, help="Show the source file."))

    def handle(self, ctx: CommandContext) -> CommandResult:
        outcome = list_routes(ctx.project_root)
        routes = outcome["routes"]

        if not routes:
            ctx.comment("No routes found in lib/routes/")
            return CommandResult.success(self.name, "No routes", metadata={"routes": []})

        verbose = ctx.has_option("verbose")
        headers = ["Method", "URI", "Middleware"] + (["File"] if verbose else [])
        rows = []
        for route in routes:
            row = [route.method, route.full_path, ", ".join(route.middleware) or "-"]
            if verbose:
                row.append(route.source_file)
            rows.append(row)

        ctx.line(render_table(headers, rows))
        ctx.info(f"Showing {len(routes)} route(s) from {outcome['files']} file(s)")
        return CommandResult.success(
            self.name,
            f"{len(routes)} route(s)",
            metadata={"routes": [r.to_dict() for r in routes]},
        )
