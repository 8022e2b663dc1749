"""
Domain models — Pydantic types for the scaffolding pipeline.

All models are re-exported here for convenient access:

    from magic_cli.core.models import ParsedName, GenerationRequest, CommandResult
"""

from magic_cli.core.models.generation import GeneratedFile, GenerationRequest
from magic_cli.core.models.names import ParsedName
from magic_cli.core.models.pubspec import Pubspec
from magic_cli.core.models.result import CommandResult

__all__ = [
    # result.py
    "CommandResult",
    # generation.py
    "GeneratedFile",
    "GenerationRequest",
    # names.py
    "ParsedName",
    # pubspec.py
    "Pubspec",
]
