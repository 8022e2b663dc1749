"""
Shared test fixtures and configuration.
"""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest

from magic_cli.console.command import CommandContext
from magic_cli.console.kernel import Kernel
from magic_cli.core.config.settings import CliSettings
from magic_cli.ui.cli import build_registry

FROZEN_NOW = datetime(2024, 1, 15, 10, 30, 0)

PUBSPEC = """\
name: magic_e2e_test
description: A Magic test application.
version: 1.0.0+1

environment:
  sdk: ^3.4.0

dependencies:
  flutter:
    sdk: flutter

flutter:
  uses-material-design: true
"""


@pytest.fixture
def flutter_project(tmp_path: Path) -> Path:
    """A bare Flutter project: just a pubspec.yaml."""
    (tmp_path / "pubspec.yaml").write_text(PUBSPEC)
    return tmp_path


@pytest.fixture
def frozen_clock() -> Callable[[], datetime]:
    """Clock pinned to 2024-01-15 10:30:00."""
    return lambda: FROZEN_NOW


@pytest.fixture
def kernel(flutter_project: Path, frozen_clock) -> Kernel:
    """Kernel with every built-in command, pinned to ``flutter_project``."""
    return Kernel(
        build_registry(),
        settings=CliSettings(project_root=flutter_project),
        cwd=flutter_project,
        clock=frozen_clock,
    )


@pytest.fixture
def magic(kernel: Kernel) -> Callable[[list[str]], int]:
    """Run one ``magic ...`` command line, return its exit code."""
    return kernel.handle


@pytest.fixture
def make_ctx(flutter_project: Path, frozen_clock) -> Callable[..., CommandContext]:
    """Factory for CommandContexts rooted at ``flutter_project``."""

    def _make(command: str = "", arguments: list[str] | None = None, **options) -> CommandContext:
        return CommandContext(
            command=command,
            arguments=arguments or [],
            options=options,
            settings=CliSettings(project_root=flutter_project),
            cwd=flutter_project,
            clock=frozen_clock,
        )

    return _make
