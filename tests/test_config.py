"""
Tests for configuration loading — project discovery, pubspec parsing
and CLI settings.
"""

import textwrap
from pathlib import Path

import pytest

from magic_cli.core.config.loader import (
    app_name,
    find_project_file,
    find_project_root,
    load_pubspec,
)
from magic_cli.core.config.settings import CliSettings
from magic_cli.core.errors import NotFoundError, ProjectNotFoundError
from magic_cli.core.models.result import CommandResult


class TestProjectDiscovery:
    def test_finds_in_start_dir(self, flutter_project: Path):
        assert find_project_file(flutter_project) == (flutter_project / "pubspec.yaml").resolve()

    def test_walks_up(self, flutter_project: Path):
        nested = flutter_project / "lib" / "app" / "models"
        nested.mkdir(parents=True)
        assert find_project_root(nested) == flutter_project.resolve()

    def test_not_found(self, tmp_path: Path):
        isolated = tmp_path / "isolated"
        isolated.mkdir()
        assert find_project_file(isolated) is None
        with pytest.raises(ProjectNotFoundError, match="pubspec.yaml"):
            find_project_root(isolated)


class TestLoadPubspec:
    def test_valid(self, flutter_project: Path):
        pubspec = load_pubspec(flutter_project)
        assert pubspec.name == "magic_e2e_test"
        assert pubspec.version == "1.0.0+1"
        assert pubspec.has_dependency("flutter")
        assert not pubspec.has_dependency("magic")
        assert pubspec.flutter.assets == []

    def test_assets(self, tmp_path: Path):
        (tmp_path / "pubspec.yaml").write_text(textwrap.dedent("""\
            name: shop
            dependencies:
            flutter:
              assets:
                - .env
        """))
        pubspec = load_pubspec(tmp_path)
        assert pubspec.dependencies == {}
        assert pubspec.has_asset(".env")

    def test_missing(self, tmp_path: Path):
        with pytest.raises(NotFoundError):
            load_pubspec(tmp_path)

    def test_flavored_assets(self, tmp_path: Path):
        (tmp_path / "pubspec.yaml").write_text(textwrap.dedent("""\
            name: shop
            flutter:
              assets:
                - images/
                - path: .env
                  flavors: [staging]
        """))
        pubspec = load_pubspec(tmp_path)
        assert pubspec.flutter.asset_paths() == ["images/", ".env"]
        assert pubspec.has_asset(".env")
        assert not pubspec.has_asset("staging")

    def test_wrong_shape(self, tmp_path: Path):
        (tmp_path / "pubspec.yaml").write_text("name: shop\ndependencies: [flutter]\n")
        with pytest.raises(NotFoundError, match="Unsupported pubspec layout"):
            load_pubspec(tmp_path)

    def test_invalid_yaml(self, tmp_path: Path):
        (tmp_path / "pubspec.yaml").write_text("name: [unclosed\n")
        with pytest.raises(NotFoundError, match="Invalid YAML"):
            load_pubspec(tmp_path)

    def test_not_a_mapping(self, tmp_path: Path):
        (tmp_path / "pubspec.yaml").write_text("- a\n- b\n")
        with pytest.raises(NotFoundError, match="Expected a YAML mapping"):
            load_pubspec(tmp_path)

    def test_app_name(self, flutter_project: Path, tmp_path_factory):
        assert app_name(flutter_project) == "Magic E2e Test"
        assert app_name(tmp_path_factory.mktemp("empty")) == "My App"


class TestCliSettings:
    def test_defaults(self):
        settings = CliSettings.from_env({})
        assert settings.stubs_dir is None
        assert settings.project_root is None
        assert settings.log_level == "WARNING"
        assert settings.log_file is None

    def test_from_env(self, tmp_path: Path):
        settings = CliSettings.from_env(
            {
                "MAGIC_CLI_STUBS_DIR": str(tmp_path / "stubs"),
                "MAGIC_PROJECT_ROOT": str(tmp_path),
                "MAGIC_LOG_LEVEL": "DEBUG",
                "MAGIC_LOG_FILE": str(tmp_path / "magic.log"),
                "MAGIC_LOG_FILE_LEVEL": "INFO",
            }
        )
        assert settings.stubs_dir == tmp_path / "stubs"
        assert settings.project_root == tmp_path
        assert settings.log_level == "DEBUG"
        assert settings.log_file_level == "INFO"

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MAGIC_LOG_LEVEL", "ERROR")
        assert CliSettings.from_env().log_level == "ERROR"

    def test_stubs_dir_used_by_commands(self, flutter_project: Path, tmp_path_factory):
        from magic_cli.console.kernel import Kernel
        from magic_cli.ui.cli import build_registry

        extra = tmp_path_factory.mktemp("stubs")
        (extra / "enum.stub").write_text("enum {{ className }} { custom }\n")
        kernel = Kernel(
            build_registry(),
            settings=CliSettings(project_root=flutter_project, stubs_dir=extra),
        )

        assert kernel.handle(["make:enum", "Color"]) == 0
        content = (flutter_project / "lib/app/enums/color.dart").read_text()
        assert content == "enum Color { custom }\n"


class TestCommandResult:
    def test_exit_codes(self):
        assert CommandResult.success("x").exit_code == 0
        assert CommandResult.skip("x").exit_code == 0
        assert CommandResult.failure("x", "bad").exit_code == 1

    def test_absorb(self):
        parent = CommandResult.success("make:model", created=["a"])
        parent.absorb(CommandResult.skip("make:factory", skipped=["b"]))
        assert parent.ok
        parent.absorb(CommandResult.failure("make:seeder", "disk full"))
        assert parent.failed
        assert parent.to_dict()["created"] == ["a"]
        assert parent.skipped == ["b"]
        assert parent.errors == ["disk full"]
