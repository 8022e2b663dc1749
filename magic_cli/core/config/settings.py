"""
CLI settings — process-level knobs read from the environment.

All settings use a Pydantic model so they are validated once at
startup and passed down explicitly; nothing reads ``os.environ``
after ``CliSettings.from_env()`` has run.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field


ENV_STUBS_DIR = "MAGIC_CLI_STUBS_DIR"
ENV_PROJECT_ROOT = "MAGIC_PROJECT_ROOT"
ENV_LOG_LEVEL = "MAGIC_LOG_LEVEL"
ENV_LOG_FILE = "MAGIC_LOG_FILE"
ENV_LOG_FILE_LEVEL = "MAGIC_LOG_FILE_LEVEL"


class CliSettings(BaseModel):
    """Global Magic CLI configuration.

    Attributes:
        stubs_dir:      Extra stub override directory, searched before the
                        project's own ``stubs/`` directory.
        project_root:   Pin the project root instead of walking up from CWD.
        log_level:      Console log level name.
        log_file:       Optional log file path.
        log_file_level: Optional separate level for the log file.
    """

    stubs_dir: Path | None = None
    project_root: Path | None = None
    log_level: str = Field(default="WARNING")
    log_file: str | None = None
    log_file_level: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CliSettings:
        """Build settings from environment variables (default: ``os.environ``)."""
        env = os.environ if environ is None else environ
        stubs_dir = env.get(ENV_STUBS_DIR)
        project_root = env.get(ENV_PROJECT_ROOT)
        return cls(
            stubs_dir=Path(stubs_dir) if stubs_dir else None,
            project_root=Path(project_root) if project_root else None,
            log_level=env.get(ENV_LOG_LEVEL, "WARNING"),
            log_file=env.get(ENV_LOG_FILE) or None,
            log_file_level=env.get(ENV_LOG_FILE_LEVEL) or None,
        )
