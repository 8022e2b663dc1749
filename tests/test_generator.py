"""
Tests for the generator pipeline — path resolution, force handling,
rendering and reporting.
"""

from pathlib import Path

from magic_cli.console.command import CommandContext
from magic_cli.console.generator import GeneratorCommand
from magic_cli.console.kernel import CommandRegistry, Kernel
from magic_cli.core.config.settings import CliSettings
from magic_cli.core.models.generation import GenerationRequest
from magic_cli.core.services.naming import parse_name
from magic_cli.core.services.stubs import leftover_tokens
from magic_cli.ui.cli.make import MakeControllerCommand


class MakeWidgetCommand(GeneratorCommand):
    name = "make:widget"
    description = "Create a widget"
    base_directory = "lib/widgets"
    stub = "widget"
    suffix = "Widget"


class MakeBrokenCommand(GeneratorCommand):
    name = "make:broken"
    description = "Uses a stub nobody ships"
    base_directory = "lib/broken"
    stub = "does_not_exist"


# ═══════════════════════════════════════════════════════════════════
#  GenerationRequest
# ═══════════════════════════════════════════════════════════════════


class TestGenerationRequest:
    def _request(self, raw: str, **kwargs) -> GenerationRequest:
        parsed = parse_name(raw)
        return GenerationRequest(
            raw_name=raw,
            parsed=parsed,
            class_name=parsed.class_name,
            base_name=parsed.class_name,
            base_directory="lib/app/controllers",
            project_root=Path("/project"),
            **kwargs,
        )

    def test_flat_paths(self):
        request = self._request("UserController")
        assert request.namespace == "lib/app/controllers"
        assert request.file_name == "user_controller"
        assert request.relative_path == "lib/app/controllers/user_controller.dart"
        assert request.output_path == Path("/project/lib/app/controllers/user_controller.dart")

    def test_nested_paths(self):
        request = self._request("Admin/UserController")
        assert request.namespace == "lib/app/controllers/admin"
        assert request.relative_path == "lib/app/controllers/admin/user_controller.dart"

    def test_explicit_file_stem(self):
        request = self._request("Thing", file_stem="m_2024_thing", extension=".txt")
        assert request.relative_path == "lib/app/controllers/m_2024_thing.txt"


# ═══════════════════════════════════════════════════════════════════
#  Pipeline
# ═══════════════════════════════════════════════════════════════════


class TestGeneratorPipeline:
    def test_creates_file(self, magic, flutter_project: Path, capsys):
        assert magic(["make:controller", "User"]) == 0

        target = flutter_project / "lib/app/controllers/user_controller.dart"
        assert target.is_file()
        content = target.read_text()
        assert "class UserController extends MagicController" in content
        assert leftover_tokens(content) == []

        out = capsys.readouterr().out
        assert "Created: lib/app/controllers/user_controller.dart" in out

    def test_suffix_not_doubled(self, magic, flutter_project: Path):
        assert magic(["make:controller", "UserController"]) == 0
        assert (flutter_project / "lib/app/controllers/user_controller.dart").is_file()
        assert not (flutter_project / "lib/app/controllers/user_controller_controller.dart").exists()

    def test_nested_name(self, magic, flutter_project: Path):
        assert magic(["make:controller", "Admin/Dashboard"]) == 0
        target = flutter_project / "lib/app/controllers/admin/dashboard_controller.dart"
        assert "class DashboardController" in target.read_text()

    def test_existing_file_is_kept(self, magic, flutter_project: Path, capsys):
        target = flutter_project / "lib/app/controllers/user_controller.dart"
        target.parent.mkdir(parents=True)
        target.write_text("// user code\n")

        assert magic(["make:controller", "User"]) == 0
        assert target.read_text() == "// user code\n"
        assert "already exists" in capsys.readouterr().err

    def test_force_overwrites(self, magic, flutter_project: Path):
        target = flutter_project / "lib/app/controllers/user_controller.dart"
        target.parent.mkdir(parents=True)
        target.write_text("// user code\n")

        assert magic(["make:controller", "User", "--force"]) == 0
        assert "class UserController" in target.read_text()

    def test_missing_name(self, magic, flutter_project: Path, capsys):
        assert magic(["make:controller"]) == 1
        assert 'Not enough arguments (missing: "name").' in capsys.readouterr().err
        assert not (flutter_project / "lib").exists()

    def test_extra_arguments_rejected(self, magic, flutter_project: Path, capsys):
        assert magic(["make:controller", "User", "Post"]) == 1
        assert "Too many arguments" in capsys.readouterr().err
        assert not (flutter_project / "lib").exists()

    def test_invalid_name(self, magic, flutter_project: Path):
        assert magic(["make:controller", "9lives"]) == 1
        assert not (flutter_project / "lib").exists()

    def test_project_stub_override(self, magic, flutter_project: Path):
        stubs = flutter_project / "stubs"
        stubs.mkdir()
        (stubs / "controller.stub").write_text("// {{ className }} in {{ namespace }}\n")

        assert magic(["make:controller", "Admin/User"]) == 0
        target = flutter_project / "lib/app/controllers/admin/user_controller.dart"
        assert target.read_text() == "// UserController in lib/app/controllers/admin\n"

    def test_custom_generator_with_override_stub(self, flutter_project: Path):
        stubs = flutter_project / "stubs"
        stubs.mkdir()
        (stubs / "widget.stub").write_text("{{ className }}|{{ baseName }}|{{ snakeName }}|{{ pluralName }}")
        kernel = Kernel(
            CommandRegistry([MakeWidgetCommand()]),
            settings=CliSettings(project_root=flutter_project),
        )

        assert kernel.handle(["make:widget", "Category"]) == 0
        content = (flutter_project / "lib/widgets/category_widget.dart").read_text()
        assert content == "CategoryWidget|Category|category|categories"

    def test_missing_stub_fails_without_writing(self, flutter_project: Path, capsys):
        kernel = Kernel(
            CommandRegistry([MakeBrokenCommand()]),
            settings=CliSettings(project_root=flutter_project),
        )

        assert kernel.handle(["make:broken", "Thing"]) == 1
        assert "Stub not found: does_not_exist.stub" in capsys.readouterr().err
        assert not (flutter_project / "lib/broken").exists()

    def test_no_project(self, tmp_path: Path, capsys):
        kernel = Kernel(CommandRegistry([MakeControllerCommand()]), cwd=tmp_path)
        assert kernel.handle(["make:controller", "User"]) == 1
        assert "pubspec.yaml" in capsys.readouterr().err


class TestGenerateResult:
    def test_result_lists_created_path(self, make_ctx):
        command = MakeControllerCommand()
        result = command.handle(make_ctx("make:controller", ["User"]))
        assert result.ok
        assert result.created == ["lib/app/controllers/user_controller.dart"]

    def test_result_lists_skipped_path(self, make_ctx):
        command = MakeControllerCommand()
        command.handle(make_ctx("make:controller", ["User"]))
        result = command.handle(make_ctx("make:controller", ["User"]))
        assert result.status == "skipped"
        assert result.exit_code == 0
        assert result.skipped == ["lib/app/controllers/user_controller.dart"]

    def test_default_replacements(self, make_ctx):
        command = MakeControllerCommand()
        ctx = make_ctx("make:controller", ["Admin/OrderItem"])
        request = command.build_request(ctx, "Admin/OrderItem")
        values = command.replacements(request, ctx)
        assert values == {
            "className": "OrderItemController",
            "baseName": "OrderItem",
            "namespace": "lib/app/controllers/admin",
            "snakeName": "order_item",
            "fileName": "order_item_controller",
            "pluralName": "order_items",
        }


# ═══════════════════════════════════════════════════════════════════
#  CommandContext
# ═══════════════════════════════════════════════════════════════════


class TestCommandContext:
    def test_arguments_and_options(self):
        ctx = CommandContext(arguments=["User"], options={"force": True, "event": None})
        assert ctx.argument(0) == "User"
        assert ctx.argument(1) is None
        assert ctx.has_option("force")
        assert not ctx.has_option("event")
        assert ctx.option("event", "MagicEvent") == "MagicEvent"

    def test_project_root_from_settings(self, flutter_project: Path, tmp_path_factory):
        elsewhere = tmp_path_factory.mktemp("elsewhere")
        ctx = CommandContext(settings=CliSettings(project_root=flutter_project), cwd=elsewhere)
        assert ctx.project_root == flutter_project.resolve()

    def test_project_root_discovered_from_subdirectory(self, flutter_project: Path):
        nested = flutter_project / "lib" / "app"
        nested.mkdir(parents=True)
        ctx = CommandContext(cwd=nested)
        assert ctx.project_root == flutter_project.resolve()

    def test_child_keeps_environment(self, make_ctx, frozen_clock):
        parent = make_ctx("make:model", ["Post"], force=True, all=True)
        child = parent.child("make:factory", ["Post"], force=True)
        assert child.command == "make:factory"
        assert child.arguments == ["Post"]
        assert child.options == {"force": True}
        assert child.settings == parent.settings
        assert child.clock() == frozen_clock()
        assert parent.options == {"force": True, "all": True}

    def test_output_helpers(self, capsys):
        ctx = CommandContext()
        ctx.success("done")
        ctx.warn("careful")
        ctx.error("broken")
        captured = capsys.readouterr()
        assert "✓ done" in captured.out
        assert "⚠ careful" in captured.out
        assert "✗ broken" in captured.err
