"""
Generator command — the shared make:* pipeline.

    name → parse → resolve path → exists/force check → render → write → report

Concrete generators only declare where their files go and which stub
they use; a few also add replacements or pick a stub variant from
their options.
"""

from __future__ import annotations

import logging

import click

from magic_cli.console.command import Command, CommandContext
from magic_cli.core.errors import AlreadyExistsError, StubNotFoundError, UsageError
from magic_cli.core.models.generation import GenerationRequest
from magic_cli.core.models.result import CommandResult
from magic_cli.core.services.file_ops import write_file
from magic_cli.core.services.naming import apply_suffix, parse_name, to_plural, to_snake_case

logger = logging.getLogger(__name__)


class GeneratorCommand(Command):
    """Base class for commands that render one stub into one file.

    Class attributes:
        base_directory: Output directory relative to the project root.
        stub:           Stub key (``controller`` → ``controller.stub``).
        suffix:         Class-name suffix enforced without doubling.
        extension:      Output file extension.
    """

    base_directory: str = ""
    stub: str = ""
    suffix: str = ""
    extension: str = ".dart"

    def configure(self, params: list[click.Parameter]) -> None:
        params.append(
            click.Option(["--force"], is_flag=True, help="Overwrite the file if it exists.")
        )

    # ── Hooks ───────────────────────────────────────────────────

    def get_stub(self, ctx: CommandContext) -> str:
        """Stub key for this run.  Override to pick variants from options."""
        return self.stub

    def build_request(self, ctx: CommandContext, raw_name: str) -> GenerationRequest:
        parsed = parse_name(raw_name)
        base_name, class_name = apply_suffix(parsed.class_name, self.suffix)
        return GenerationRequest(
            raw_name=raw_name,
            parsed=parsed,
            class_name=class_name,
            base_name=base_name,
            base_directory=self.base_directory,
            project_root=ctx.project_root,
            extension=self.extension,
            force=ctx.has_option("force"),
        )

    def replacements(self, request: GenerationRequest, ctx: CommandContext) -> dict[str, str]:
        """Placeholder values.  Subclasses extend the defaults with ``super()``."""
        snake = to_snake_case(request.base_name)
        return {
            "className": request.class_name,
            "baseName": request.base_name,
            "namespace": request.namespace,
            "snakeName": snake,
            "fileName": request.file_name,
            "pluralName": to_plural(snake),
        }

    def render(self, request: GenerationRequest, ctx: CommandContext) -> str:
        return ctx.stubs().render(self.get_stub(ctx), self.replacements(request, ctx))

    # ── Pipeline ────────────────────────────────────────────────

    def handle(self, ctx: CommandContext) -> CommandResult:
        raw_name = ctx.argument(0)
        if not raw_name or not raw_name.strip():
            raise UsageError('Not enough arguments (missing: "name").')
        if len(ctx.arguments) > 1:
            raise UsageError(f"Too many arguments, expected only a name, got: {' '.join(ctx.arguments)}.")
        return self.generate(ctx, self.build_request(ctx, raw_name))

    def generate(self, ctx: CommandContext, request: GenerationRequest) -> CommandResult:
        """Write ``request``'s file, honouring ``--force``.

        An existing file without ``--force`` is a skip, not a failure.
        A missing stub fails before anything touches the disk.
        """
        target = request.output_path
        shown = request.relative_path

        if target.exists() and not request.force:
            err = AlreadyExistsError(shown)
            ctx.error(err.message)
            return CommandResult.skip(self.name, err.message, skipped=[shown])

        try:
            content = self.render(request, ctx)
        except StubNotFoundError as e:
            ctx.error(e.message)
            return CommandResult.failure(self.name, e.message)

        try:
            write_file(target, content)
        except OSError as e:
            message = f"Cannot write {shown}: {e}"
            ctx.error(message)
            return CommandResult.failure(self.name, message)

        logger.info("Generated %s via %s", shown, self.get_stub(ctx))
        ctx.success(f"Created: {shown}")
        return CommandResult.success(self.name, f"Created: {shown}", created=[shown])
