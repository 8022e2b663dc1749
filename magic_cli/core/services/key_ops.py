"""
Application key — generation and storage in ``.env``.
"""

from __future__ import annotations

import logging
import secrets
import string
from pathlib import Path

from magic_cli.core.config.loader import load_pubspec
from magic_cli.core.errors import NotFoundError
from magic_cli.core.services.env_file import ENV_FILE, set_env_value

logger = logging.getLogger(__name__)

KEY_NAME = "APP_KEY"
KEY_LENGTH = 32
KEY_ALPHABET = string.ascii_letters + string.digits


def generate_key(length: int = KEY_LENGTH) -> str:
    """Random alphanumeric key from a CSPRNG."""
    return "".join(secrets.choice(KEY_ALPHABET) for _ in range(length))


def write_app_key(root: Path, key: str) -> dict:
    """Store ``key`` as APP_KEY in ``<root>/.env``.

    Returns:
        {"key", "env_file", "replaced", "created", "asset_registered"}
    """
    env_path = root / ENV_FILE
    existed = env_path.is_file()
    replaced = set_env_value(env_path, KEY_NAME, key)
    logger.info("APP_KEY %s in %s", "replaced" if replaced else "written", env_path)

    try:
        registered = load_pubspec(root).has_asset(ENV_FILE)
    except NotFoundError:
        registered = False

    return {
        "key": key,
        "env_file": str(env_path),
        "replaced": replaced,
        "created": not existed,
        "asset_registered": registered,
    }
