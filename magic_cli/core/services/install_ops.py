"""
Install — bootstrap the Magic framework layout inside a Flutter project.

Every step is idempotent: files are written only when absent (``main.dart``
is rewritten only while it lacks ``Magic.init``), and external files are
patched through the editors, which skip content already present.

Feature flags mirror ``magic install --without-*``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from magic_cli.core.config.loader import PROJECT_MANIFEST, app_name
from magic_cli.core.models.generation import GeneratedFile
from magic_cli.core.services import platforms
from magic_cli.core.services.editors import config_editor, html_editor, json_editor, xml_editor
from magic_cli.core.services.env_file import ENV_FILE
from magic_cli.core.services.file_ops import (
    ensure_directory,
    relative_to_root,
    write_file,
    write_if_absent,
)
from magic_cli.core.services.stubs import StubLoader

logger = logging.getLogger(__name__)

MAGIC_PACKAGE = "magic"
MAGIC_VERSION = "^1.0.0"
LANG_ASSET = "assets/lang/"
INTERNET_PERMISSION = "android.permission.INTERNET"
NETWORK_CLIENT_ENTITLEMENT = "com.apple.security.network.client"
MAIN_MARKER = "Magic.init"


@dataclass
class InstallOptions:
    """Which optional features to leave out."""

    without_auth: bool = False
    without_database: bool = False
    without_network: bool = False
    without_cache: bool = False
    without_events: bool = False
    without_localization: bool = False
    without_logging: bool = False

    @classmethod
    def from_options(cls, options: dict[str, Any]) -> InstallOptions:
        return cls(**{f.name: bool(options.get(f.name)) for f in fields(cls)})


# ═══════════════════════════════════════════════════════════════════
#  Planning
# ═══════════════════════════════════════════════════════════════════


def plan_directories(opts: InstallOptions) -> list[str]:
    """Directories the framework expects, relative to the project root."""
    dirs = [
        "lib/app/controllers",
        "lib/app/models",
        "lib/app/enums",
        "lib/app/middleware",
        "lib/app/policies",
        "lib/app/providers",
        "lib/resources/views",
        "lib/routes",
        "lib/config",
    ]
    if not opts.without_events:
        dirs += ["lib/app/events", "lib/app/listeners"]
    if not opts.without_database:
        dirs += ["lib/database/migrations", "lib/database/seeders", "lib/database/factories"]
    if not opts.without_localization:
        dirs.append("assets/lang")
    return dirs


def _providers(opts: InstallOptions) -> list[str]:
    # Boot order matters: infrastructure first, AppServiceProvider before auth.
    entries = ["(app) => RouteServiceProvider(app),"]
    if not opts.without_cache:
        entries.append("(app) => CacheServiceProvider(app),")
    if not opts.without_database:
        entries.append("(app) => DatabaseServiceProvider(app),")
    entries.append("(app) => LaunchServiceProvider(app),")
    if not opts.without_localization:
        entries.append("(app) => LocalizationServiceProvider(app),")
    if not opts.without_network:
        entries.append("(app) => NetworkServiceProvider(app),")
    if not opts.without_auth:
        entries.append("(app) => VaultServiceProvider(app),")
    entries.append("(app) => AppServiceProvider(app),")
    if not opts.without_auth:
        entries.append("(app) => AuthServiceProvider(app),")
    return entries


def _feature_configs(opts: InstallOptions) -> list[str]:
    """Config file stems in ``lib/config``, in Magic.init order."""
    names = ["app", "view"]
    for name, skipped in (
        ("auth", opts.without_auth),
        ("database", opts.without_database),
        ("network", opts.without_network),
        ("cache", opts.without_cache),
        ("logging", opts.without_logging),
    ):
        if not skipped:
            names.append(name)
    return names


def plan_files(stubs: StubLoader, opts: InstallOptions, name: str) -> list[GeneratedFile]:
    """Every file install writes, except ``lib/main.dart``."""
    app_imports = "\n".join(
        [
            "import 'package:magic/magic.dart';",
            "",
            "import '../app/providers/app_service_provider.dart';",
            "import '../app/providers/route_service_provider.dart';",
        ]
    )
    app_providers = "\n".join(f"      {entry}" for entry in _providers(opts))

    files = [
        GeneratedFile(
            path="lib/config/app.dart",
            content=stubs.render(
                "install/app_config",
                {"allImports": app_imports, "allProviders": app_providers, "appName": name},
            ),
            reason="application config",
        )
    ]
    for stem in _feature_configs(opts)[1:]:
        files.append(
            GeneratedFile(
                path=f"lib/config/{stem}.dart",
                content=stubs.load(f"install/{stem}_config"),
                reason=f"{stem} config",
            )
        )

    files += [
        GeneratedFile(
            path="lib/app/providers/route_service_provider.dart",
            content=stubs.load("install/route_service_provider"),
            reason="route service provider",
        ),
        GeneratedFile(
            path="lib/app/providers/app_service_provider.dart",
            content=stubs.load("install/app_service_provider"),
            reason="app service provider",
        ),
        GeneratedFile(
            path="lib/app/kernel.dart",
            content=stubs.load("install/kernel"),
            reason="middleware kernel",
        ),
        GeneratedFile(
            path="lib/routes/app.dart",
            content=stubs.load("install/routes_app"),
            reason="application routes",
        ),
        GeneratedFile(
            path="lib/resources/views/welcome_view.dart",
            content=stubs.render("install/welcome_view", {"appName": name}),
            reason="welcome page",
        ),
        GeneratedFile(
            path=ENV_FILE,
            content=stubs.render("install/env", {"appName": name}),
            reason="environment",
        ),
        GeneratedFile(
            path=f"{ENV_FILE}.example",
            content=stubs.load("install/env_example"),
            reason="environment template",
        ),
    ]
    return files


def plan_main(stubs: StubLoader, opts: InstallOptions, name: str) -> GeneratedFile:
    configs = _feature_configs(opts)
    imports = "\n".join(f"import 'config/{stem}.dart';" for stem in configs)
    factories = "\n".join(f"      () => {stem}Config," for stem in configs)
    return GeneratedFile(
        path="lib/main.dart",
        content=stubs.render(
            "install/main",
            {"configImports": imports, "configFactories": factories, "appName": name},
        ),
        overwrite=True,
        reason="bootstrap",
    )


# ═══════════════════════════════════════════════════════════════════
#  Apply
# ═══════════════════════════════════════════════════════════════════


def _write_planned(root: Path, generated: GeneratedFile) -> bool:
    """Write one planned file; False when an existing file is kept.

    Files without ``overwrite`` are only created.  Overwritable ones
    replace what is there unless it already calls ``Magic.init``.
    """
    target = root / generated.path
    if not generated.overwrite:
        return write_if_absent(target, generated.content)
    if target.is_file() and MAIN_MARKER in target.read_text(encoding="utf-8"):
        logger.info("%s already bootstraps Magic, leaving it", generated.path)
        return False
    write_file(target, generated.content)
    return True


def _patch_platforms(root: Path, opts: InstallOptions, name: str) -> list[str]:
    patched: list[str] = []
    present = platforms.detect_platforms(root)
    logger.debug("Platforms present: %s", present)

    if not opts.without_network and "android" in present:
        manifest = platforms.android_manifest_path(root)
        if manifest.is_file():
            if xml_editor.add_android_permission(manifest, INTERNET_PERMISSION):
                patched.append(relative_to_root(manifest, root))
        else:
            logger.info("No Android manifest at %s", manifest)

    if not opts.without_network and "macos" in present:
        for entitlements in platforms.macos_entitlements_paths(root):
            if not entitlements.is_file():
                continue
            if xml_editor.add_plist_entry(entitlements, NETWORK_CLIENT_ENTITLEMENT, "<true/>"):
                patched.append(relative_to_root(entitlements, root))

    if "web" in present:
        index = platforms.web_index_path(root)
        if index.is_file():
            if html_editor.add_meta_tag(index, {"name": "application-name", "content": name}):
                patched.append(relative_to_root(index, root))

    return patched


def install(root: Path, stubs: StubLoader, opts: InstallOptions) -> dict:
    """Run the whole installation against ``root``.

    Returns:
        {"created": [...], "skipped": [...], "patched": [...], "directories": [...]}

    Raises:
        StubNotFoundError: If an install stub is missing (nothing is
            written in that case, since all stubs render before any write).
        StructureError: If a platform file lacks its anchor.
    """
    name = app_name(root)
    files = plan_files(stubs, opts, name)
    main = plan_main(stubs, opts, name)
    lang = json.loads(stubs.load("install/lang_en")) if not opts.without_localization else None

    result: dict[str, list[str]] = {"created": [], "skipped": [], "patched": [], "directories": []}

    for rel in plan_directories(opts):
        if ensure_directory(root / rel):
            result["directories"].append(rel)

    for generated in [*files, main]:
        if _write_planned(root, generated):
            result["created"].append(generated.path)
        else:
            result["skipped"].append(generated.path)

    pubspec = root / PROJECT_MANIFEST
    changed = config_editor.add_dependency(pubspec, MAGIC_PACKAGE, MAGIC_VERSION)
    changed = config_editor.add_asset(pubspec, ENV_FILE) or changed

    if lang is not None:
        if json_editor.merge_json_data(root / "assets/lang/en.json", lang):
            result["patched"].append("assets/lang/en.json")
        changed = config_editor.add_asset(pubspec, LANG_ASSET) or changed

    if changed:
        result["patched"].append(PROJECT_MANIFEST)

    result["patched"] += _patch_platforms(root, opts, name)

    logger.info(
        "Install: %d created, %d skipped, %d patched",
        len(result["created"]),
        len(result["skipped"]),
        len(result["patched"]),
    )
    return result
