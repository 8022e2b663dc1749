"""
Command result model — the outcome contract between commands and the kernel.

Commands return CommandResults. The kernel turns them into exit codes.
A result never carries an exception; failures are captured as text.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class CommandResult(BaseModel):
    """Outcome of a single command execution.

    ``skipped`` is a recoverable outcome (e.g. "already exists"):
    it exits 0 so that batch and composite runs carry on.
    """

    command: str = ""
    status: Literal["ok", "skipped", "failed"] = "ok"
    message: str = ""

    created: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    @classmethod
    def success(cls, command: str, message: str = "", **kwargs: Any) -> CommandResult:
        """Create a success result."""
        return cls(command=command, status="ok", message=message, **kwargs)

    @classmethod
    def failure(cls, command: str, error: str, **kwargs: Any) -> CommandResult:
        """Create a failure result."""
        return cls(
            command=command,
            status="failed",
            message=error,
            errors=[error],
            **kwargs,
        )

    @classmethod
    def skip(cls, command: str, reason: str = "", **kwargs: Any) -> CommandResult:
        """Create a skip result."""
        return cls(command=command, status="skipped", message=reason, **kwargs)

    def absorb(self, child: CommandResult) -> None:
        """Fold a child result (composite generation) into this one.

        Paths and errors are accumulated. Any failed child marks the
        parent failed; skipped children never downgrade an ok parent.
        """
        self.created.extend(child.created)
        self.skipped.extend(child.skipped)
        self.errors.extend(child.errors)
        if child.failed:
            self.status = "failed"

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")
