"""
Error taxonomy — every failure a command can report to the user.

Commands raise these; the command boundary (GeneratorCommand, Kernel)
catches them and turns them into a CommandResult plus a message.
Nothing here should ever escape the process as a traceback.
"""

from __future__ import annotations

from pathlib import Path


class MagicError(Exception):
    """Base class for all user-facing CLI failures."""

    exit_code: int = 1

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UsageError(MagicError):
    """Missing or invalid command-line arguments."""


class AlreadyExistsError(MagicError):
    """Target artifact exists and ``--force`` was not given.

    Not fatal: the process still exits 0 so sibling generations proceed.
    """

    exit_code = 0

    def __init__(self, path: Path | str):
        super().__init__(f"File already exists at {path}")
        self.path = Path(path)


class NotFoundError(MagicError):
    """A referenced stub, source file, config key or project root is missing."""


class StubNotFoundError(NotFoundError):
    """No built-in or override stub exists for the requested key."""

    def __init__(self, key: str):
        super().__init__(f"Stub not found: {key}.stub")
        self.key = key


class ProjectNotFoundError(NotFoundError):
    """No project manifest was found walking up from the start directory."""


class StructureError(MagicError):
    """An editor's anchor is absent from the target document."""

    def __init__(self, anchor: str, path: Path | str):
        super().__init__(f'Cannot find anchor "{anchor}" in {path}')
        self.anchor = anchor
        self.path = Path(path)


class UnknownCommandError(MagicError):
    """The first CLI token does not name a registered command."""

    def __init__(self, name: str):
        super().__init__(f'Command "{name}" is not defined.')
        self.name = name
