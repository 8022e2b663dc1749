"""
make:* commands — one GeneratorCommand per artifact kind.

Most generators are pure declarations (directory, stub, suffix).  The
ones with behavior of their own:

- make:controller  stub variants; ``--resource`` also writes CRUD views
- make:model       companion artifacts (``-m -c -f -s -p``, ``-a`` for all)
- make:migration   timestamped file names, create/alter stub selection
- make:lang        ``assets/lang/<locale>.json``, no nesting
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from pathlib import Path

import click

from magic_cli.console.command import CommandContext
from magic_cli.console.generator import GeneratorCommand
from magic_cli.core.errors import MagicError, UsageError
from magic_cli.core.models.generation import GenerationRequest
from magic_cli.core.models.names import ParsedName
from magic_cli.core.models.result import CommandResult
from magic_cli.core.services.naming import (
    parse_name,
    to_human_words,
    to_pascal_case,
    to_plural,
    to_snake_case,
)

logger = logging.getLogger(__name__)


def _flag(*decls: str, help: str) -> click.Option:
    return click.Option(list(decls), is_flag=True, help=help)


# ═══════════════════════════════════════════════════════════════════
#  App classes
# ═══════════════════════════════════════════════════════════════════


class MakeControllerCommand(GeneratorCommand):
    name = "make:controller"
    description = "Create a new controller class"
    base_directory = "lib/app/controllers"
    stub = "controller"
    suffix = "Controller"

    RESOURCE_VIEWS = ("index", "show", "create", "edit")
    VIEWS_DIRECTORY = "lib/resources/views"

    def configure(self, params: list[click.Parameter]) -> None:
        super().configure(params)
        params.append(_flag("--stateful", "-s", help="Controller with MagicStateMixin state."))
        params.append(_flag("--resource", "-r", help="CRUD controller plus its views."))

    def get_stub(self, ctx: CommandContext) -> str:
        if ctx.has_option("resource"):
            return "controller.resource"
        if ctx.has_option("stateful"):
            return "controller.stateful"
        return self.stub

    def handle(self, ctx: CommandContext) -> CommandResult:
        result = super().handle(ctx)
        if not ctx.has_option("resource") or result.failed:
            return result

        # ctx.argument(0) was validated by super().handle()
        request = self.build_request(ctx, ctx.argument(0))
        for view in self.RESOURCE_VIEWS:
            result.absorb(self._resource_view(ctx, request, view))
        return result

    def _resource_view(
        self, ctx: CommandContext, controller: GenerationRequest, view: str
    ) -> CommandResult:
        snake = to_snake_case(controller.base_name)
        view_class = f"{controller.base_name}{view.capitalize()}View"
        request = GenerationRequest(
            raw_name=view_class,
            parsed=ParsedName(directory=snake, class_name=view_class, file_name=f"{view}_view"),
            class_name=view_class,
            base_name=f"{controller.base_name}{view.capitalize()}",
            base_directory=self.VIEWS_DIRECTORY,
            project_root=controller.project_root,
            force=controller.force,
            file_stem=f"{view}_view",
        )
        view_ctx = ctx.child("make:view", [], stateful=True, force=controller.force)
        return MakeViewCommand().generate(view_ctx, request)


class MakeEnumCommand(GeneratorCommand):
    name = "make:enum"
    description = "Create a new enum"
    base_directory = "lib/app/enums"
    stub = "enum"


class MakeEventCommand(GeneratorCommand):
    name = "make:event"
    description = "Create a new event class"
    base_directory = "lib/app/events"
    stub = "event"

    def replacements(self, request: GenerationRequest, ctx: CommandContext) -> dict[str, str]:
        values = super().replacements(request, ctx)
        values["description"] = f"a {to_human_words(request.base_name)} event occurs"
        return values


class MakeListenerCommand(GeneratorCommand):
    name = "make:listener"
    description = "Create a new event listener class"
    base_directory = "lib/app/listeners"
    stub = "listener"

    DEFAULT_EVENT = "MagicEvent"

    def configure(self, params: list[click.Parameter]) -> None:
        super().configure(params)
        params.append(click.Option(["--event", "-e"], help="The event class the listener handles."))

    def replacements(self, request: GenerationRequest, ctx: CommandContext) -> dict[str, str]:
        values = super().replacements(request, ctx)
        event = ctx.option("event", self.DEFAULT_EVENT)
        event_class = parse_name(event).class_name

        # The base event ships with the framework; only app events need an import.
        if event_class == self.DEFAULT_EVENT:
            values["eventImport"] = ""
        else:
            values["eventImport"] = f"\nimport '../events/{to_snake_case(event_class)}.dart';\n"
        values["eventClass"] = event_class
        return values


class MakeMiddlewareCommand(GeneratorCommand):
    name = "make:middleware"
    description = "Create a new middleware class"
    base_directory = "lib/app/middleware"
    stub = "middleware"


class MakePolicyCommand(GeneratorCommand):
    name = "make:policy"
    description = "Create a new policy class"
    base_directory = "lib/app/policies"
    stub = "policy"
    suffix = "Policy"

    def configure(self, params: list[click.Parameter]) -> None:
        super().configure(params)
        params.append(click.Option(["--model", "-m"], help="The model the policy applies to."))

    def replacements(self, request: GenerationRequest, ctx: CommandContext) -> dict[str, str]:
        values = super().replacements(request, ctx)
        model = parse_name(ctx.option("model", request.base_name)).class_name
        values["modelName"] = model
        values["modelSnakeName"] = to_snake_case(model)
        return values


class MakeProviderCommand(GeneratorCommand):
    name = "make:provider"
    description = "Create a new service provider class"
    base_directory = "lib/app/providers"
    stub = "provider"
    suffix = "ServiceProvider"

    def replacements(self, request: GenerationRequest, ctx: CommandContext) -> dict[str, str]:
        values = super().replacements(request, ctx)
        values["description"] = to_human_words(request.base_name)
        return values


class MakeRequestCommand(GeneratorCommand):
    name = "make:request"
    description = "Create a new form request class"
    base_directory = "lib/app/validation/requests"
    stub = "request"
    suffix = "Request"

    def replacements(self, request: GenerationRequest, ctx: CommandContext) -> dict[str, str]:
        values = super().replacements(request, ctx)
        values["actionDescription"] = to_human_words(request.base_name)
        return values


# ═══════════════════════════════════════════════════════════════════
#  Models & database
# ═══════════════════════════════════════════════════════════════════


class MakeModelCommand(GeneratorCommand):
    name = "make:model"
    description = "Create a new model class"
    base_directory = "lib/app/models"
    stub = "model"

    def configure(self, params: list[click.Parameter]) -> None:
        super().configure(params)
        params.append(_flag("--migration", "-m", help="Also create a migration."))
        params.append(_flag("--controller", "-c", help="Also create a controller."))
        params.append(_flag("--factory", "-f", help="Also create a factory."))
        params.append(_flag("--seeder", "-s", help="Also create a seeder."))
        params.append(_flag("--policy", "-p", help="Also create a policy."))
        params.append(
            _flag("--all", "-a", help="Migration, factory, seeder, policy and resource controller.")
        )

    def replacements(self, request: GenerationRequest, ctx: CommandContext) -> dict[str, str]:
        values = super().replacements(request, ctx)
        table = to_plural(to_snake_case(request.class_name))
        values["tableName"] = table
        values["resourceName"] = table
        return values

    def handle(self, ctx: CommandContext) -> CommandResult:
        result = super().handle(ctx)

        # Companions run even when the model itself was skipped.
        request = self.build_request(ctx, ctx.argument(0))
        model = request.class_name
        table = to_plural(to_snake_case(model))
        force = ctx.has_option("force")
        everything = ctx.has_option("all")

        children: list[tuple[GeneratorCommand, list[str], dict]] = []
        if everything or ctx.has_option("migration"):
            children.append((MakeMigrationCommand(), [f"create_{table}_table"], {"create": table}))
        if everything or ctx.has_option("factory"):
            children.append((MakeFactoryCommand(), [model], {}))
        if everything or ctx.has_option("seeder"):
            children.append((MakeSeederCommand(), [model], {}))
        if everything or ctx.has_option("policy"):
            children.append((MakePolicyCommand(), [model], {"model": model}))
        if everything or ctx.has_option("controller"):
            children.append((MakeControllerCommand(), [model], {"resource": everything}))

        for command, arguments, options in children:
            child_ctx = ctx.child(command.name, arguments, force=force, **options)
            logger.debug("make:model companion %s %s", command.name, arguments)
            try:
                result.absorb(command.handle(child_ctx))
            except MagicError as e:
                ctx.error(e.message)
                result.absorb(CommandResult.failure(command.name, e.message))

        return result


class MakeMigrationCommand(GeneratorCommand):
    name = "make:migration"
    description = "Create a new migration file"
    base_directory = "lib/database/migrations"
    stub = "migration"

    TIMESTAMP_FORMAT = "%Y_%m_%d_%H%M%S"
    FILE_PREFIX = "m_"
    _CREATE_NAME = re.compile(r"^create_(\w+)_table$")

    def configure(self, params: list[click.Parameter]) -> None:
        super().configure(params)
        params.append(click.Option(["--create"], help="The table to be created."))
        params.append(click.Option(["--table"], help="The table to migrate."))

    def get_stub(self, ctx: CommandContext) -> str:
        if ctx.option("create"):
            return "migration.create"
        if not ctx.option("table") and self._CREATE_NAME.match(self._snake(ctx.argument(0) or "")):
            return "migration.create"
        return self.stub

    @staticmethod
    def _snake(raw: str) -> str:
        return to_snake_case(raw.strip().split("/")[-1])

    def timestamp(self, ctx: CommandContext, directory: Path) -> str:
        """Clock time as ``YYYY_MM_DD_HHMMSS``, advanced past any taken prefix."""
        moment: datetime = ctx.clock()
        stamp = moment.strftime(self.TIMESTAMP_FORMAT)
        while self._taken(directory, stamp):
            logger.debug("Migration timestamp %s in use, advancing", stamp)
            moment += timedelta(seconds=1)
            stamp = moment.strftime(self.TIMESTAMP_FORMAT)
        return stamp

    def _taken(self, directory: Path, stamp: str) -> bool:
        if not directory.is_dir():
            return False
        return any(directory.glob(f"{self.FILE_PREFIX}{stamp}_*"))

    def build_request(self, ctx: CommandContext, raw_name: str) -> GenerationRequest:
        if "/" in raw_name.strip("/"):
            raise UsageError("Migration names cannot be nested.")

        snake = self._snake(raw_name)
        class_name = to_pascal_case(snake)
        parse_name(class_name)  # validates the identifier

        root = ctx.project_root
        stamp = self.timestamp(ctx, root / self.base_directory)
        return GenerationRequest(
            raw_name=raw_name,
            parsed=ParsedName(class_name=class_name, file_name=snake),
            class_name=class_name,
            base_name=class_name,
            base_directory=self.base_directory,
            project_root=root,
            extension=self.extension,
            force=ctx.has_option("force"),
            file_stem=f"{self.FILE_PREFIX}{stamp}_{snake}",
        )

    def replacements(self, request: GenerationRequest, ctx: CommandContext) -> dict[str, str]:
        values = super().replacements(request, ctx)
        snake = request.parsed.file_name
        # m_<timestamp>_<snake> → <timestamp>_<snake>
        values["fullName"] = request.file_name[len(self.FILE_PREFIX) :]

        table = ctx.option("create") or ctx.option("table")
        if not table:
            created = self._CREATE_NAME.match(snake)
            table = created.group(1) if created else snake
        values["tableName"] = table
        return values


class MakeFactoryCommand(GeneratorCommand):
    name = "make:factory"
    description = "Create a new model factory"
    base_directory = "lib/database/factories"
    stub = "factory"
    suffix = "Factory"

    def replacements(self, request: GenerationRequest, ctx: CommandContext) -> dict[str, str]:
        values = super().replacements(request, ctx)
        values["modelName"] = request.base_name
        values["modelSnakeName"] = to_snake_case(request.base_name)
        return values


class MakeSeederCommand(GeneratorCommand):
    name = "make:seeder"
    description = "Create a new database seeder"
    base_directory = "lib/database/seeders"
    stub = "seeder"
    suffix = "Seeder"

    def replacements(self, request: GenerationRequest, ctx: CommandContext) -> dict[str, str]:
        values = super().replacements(request, ctx)
        values["modelName"] = request.base_name
        return values


# ═══════════════════════════════════════════════════════════════════
#  Resources
# ═══════════════════════════════════════════════════════════════════


class MakeViewCommand(GeneratorCommand):
    name = "make:view"
    description = "Create a new view class"
    base_directory = "lib/resources/views"
    stub = "view"
    suffix = "View"

    def configure(self, params: list[click.Parameter]) -> None:
        super().configure(params)
        params.append(_flag("--stateful", help="Stateful view with lifecycle hooks."))
        params.append(_flag("--responsive", "-r", help="Mobile, tablet and desktop layouts."))

    def get_stub(self, ctx: CommandContext) -> str:
        if ctx.has_option("responsive"):
            return "view.responsive"
        if ctx.has_option("stateful"):
            return "view.stateful"
        return self.stub


class MakeLangCommand(GeneratorCommand):
    name = "make:lang"
    description = "Create a new language file"
    base_directory = "assets/lang"
    stub = "lang"
    extension = ".json"

    _LOCALE = re.compile(r"^[A-Za-z]{2,3}([_-][A-Za-z0-9]{2,4})?$")

    def build_request(self, ctx: CommandContext, raw_name: str) -> GenerationRequest:
        locale = raw_name.strip()
        if "/" in locale:
            raise UsageError("Language files cannot be nested.")
        if not self._LOCALE.match(locale):
            raise UsageError(f'Invalid locale "{locale}" (expected e.g. "en" or "pt_BR").')

        return GenerationRequest(
            raw_name=raw_name,
            parsed=ParsedName(class_name=locale, file_name=locale),
            class_name=locale,
            base_name=locale,
            base_directory=self.base_directory,
            project_root=ctx.project_root,
            extension=self.extension,
            force=ctx.has_option("force"),
            file_stem=locale,
        )


def make_commands() -> list[GeneratorCommand]:
    """Every make:* command, one instance each."""
    return [
        MakeControllerCommand(),
        MakeEnumCommand(),
        MakeEventCommand(),
        MakeFactoryCommand(),
        MakeLangCommand(),
        MakeListenerCommand(),
        MakeMiddlewareCommand(),
        MakeMigrationCommand(),
        MakeModelCommand(),
        MakePolicyCommand(),
        MakeProviderCommand(),
        MakeRequestCommand(),
        MakeSeederCommand(),
        MakeViewCommand(),
    ]
