"""
Platform detection — which Flutter platform folders a project carries,
and where their configuration files live.
"""

from __future__ import annotations

from pathlib import Path

# Canonical order; detect_platforms() returns a subset in this order.
PLATFORMS = ("android", "ios", "web", "macos", "linux", "windows")


def has_platform(root: Path, platform: str) -> bool:
    return (root / platform).is_dir()


def detect_platforms(root: Path) -> list[str]:
    """Platform directories present under ``root``."""
    return [p for p in PLATFORMS if has_platform(root, p)]


def android_manifest_path(root: Path) -> Path:
    return root / "android" / "app" / "src" / "main" / "AndroidManifest.xml"


def macos_entitlements_paths(root: Path) -> list[Path]:
    """Debug and release entitlements, in that order."""
    runner = root / "macos" / "Runner"
    return [runner / "DebugProfile.entitlements", runner / "Release.entitlements"]


def web_index_path(root: Path) -> Path:
    return root / "web" / "index.html"
