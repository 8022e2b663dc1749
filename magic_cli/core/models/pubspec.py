"""
Pubspec model — the fields of ``pubspec.yaml`` the CLI cares about.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FlutterSection(BaseModel):
    """The ``flutter:`` block of a pubspec."""

    model_config = ConfigDict(extra="allow")

    # Plain paths, or mappings such as ``{path: assets/x, flavors: [dev]}``.
    assets: list[str | dict[str, Any]] = Field(default_factory=list)

    def asset_paths(self) -> list[str]:
        paths = []
        for entry in self.assets:
            path = entry.get("path") if isinstance(entry, dict) else entry
            if isinstance(path, str):
                paths.append(path)
        return paths


class Pubspec(BaseModel):
    """Project manifest — loaded from pubspec.yaml.

    Unknown keys are kept so the model never rejects a real manifest.
    """

    model_config = ConfigDict(extra="allow")

    name: str = ""
    description: str = ""
    version: str = ""
    dependencies: dict[str, Any] = Field(default_factory=dict)
    dev_dependencies: dict[str, Any] = Field(default_factory=dict)
    flutter: FlutterSection = Field(default_factory=FlutterSection)

    def has_dependency(self, name: str) -> bool:
        return name in self.dependencies

    def has_asset(self, asset: str) -> bool:
        return asset in self.flutter.asset_paths()
