"""
Parsed name model — the result of resolving a symbolic artifact name.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ParsedName(BaseModel):
    """A symbolic name like ``Admin/UserController`` split into parts.

    Attributes:
        directory:  Lowercase, slash-separated nesting (``""`` if flat).
        class_name: Final segment in PascalCase.
        file_name:  ``class_name`` in snake_case, without extension.
    """

    model_config = ConfigDict(frozen=True)

    directory: str = ""
    class_name: str
    file_name: str

    @property
    def nested(self) -> bool:
        return bool(self.directory)
