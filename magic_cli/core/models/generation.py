"""
Generation models — what a generator intends to write, and where.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from magic_cli.core.models.names import ParsedName


class GenerationRequest(BaseModel):
    """One resolved make:* invocation.

    Built once per command execution and discarded afterwards.

    Attributes:
        raw_name:       The name exactly as typed on the command line.
        parsed:         Directory / class / file split of ``raw_name``.
        class_name:     Final class name after suffix rules
                        (``User`` → ``UserController``).
        base_name:      ``class_name`` without the suffix (``User``).
        base_directory: Fixed per-kind output directory (``lib/app/models``).
        project_root:   Absolute project root.
        extension:      Output file extension, including the dot.
        force:          Overwrite an existing file.
        file_stem:      Explicit file name (no extension) when it is not
                        simply the snake case of ``class_name``.
    """

    model_config = ConfigDict(frozen=True)

    raw_name: str
    parsed: ParsedName
    class_name: str
    base_name: str
    base_directory: str
    project_root: Path
    extension: str = ".dart"
    force: bool = False
    file_stem: str | None = None

    @property
    def namespace(self) -> str:
        """Base directory plus nesting, e.g. ``lib/app/controllers/admin``."""
        if self.parsed.directory:
            return f"{self.base_directory}/{self.parsed.directory}"
        return self.base_directory

    @property
    def file_name(self) -> str:
        if self.file_stem:
            return self.file_stem
        from magic_cli.core.services.naming import to_snake_case

        return to_snake_case(self.class_name)

    @property
    def output_path(self) -> Path:
        """``project_root / base_directory / directory / file_name.ext``."""
        return self.project_root / self.namespace / f"{self.file_name}{self.extension}"

    @property
    def relative_path(self) -> str:
        return f"{self.namespace}/{self.file_name}{self.extension}"


class GeneratedFile(BaseModel):
    """A file produced by a service-level generator (install, key, ...).

    Attributes:
        path:      Relative path from project root.
        content:   Full file content.
        overwrite: Whether to overwrite if already exists.
        reason:    Why this file was generated.
    """

    path: str
    content: str
    overwrite: bool = False
    reason: str = ""
