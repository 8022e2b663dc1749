"""
.env files — parsing and single-key updates.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from magic_cli.core.services.file_ops import write_file

logger = logging.getLogger(__name__)

ENV_FILE = ".env"


# One assignment per line.  Unquoted values end at a `` #`` comment;
# quoted values keep everything between their quotes.
_ASSIGNMENT = re.compile(
    r"""
    ^\s*(?:export\s+)?
    (?P<key>[A-Za-z_][A-Za-z0-9_.]*)\s*=\s*
    (?:
        "(?P<double>(?:[^"\\]|\\.)*)"
      | '(?P<single>[^']*)'
      | (?P<bare>.*?)
    )
    (?:\s+\#.*|\s*)$
    """,
    re.VERBOSE,
)
_ESCAPE = re.compile(r"\\(.)")
_ESCAPES = {"n": "\n", "t": "\t"}


def _unescape(value: str) -> str:
    return _ESCAPE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), value)


def parse_env_file(path: Path) -> dict[str, str]:
    """Read ``KEY=value`` pairs the way flutter_dotenv will at runtime.

    - ``export`` prefixes are ignored
    - ``KEY=value # note`` drops the trailing comment
    - ``"..."`` values keep ``#`` and expand ``\\n``, ``\\t``, ``\\"``
    - ``'...'`` values are taken literally
    - later assignments win; malformed lines are skipped

    A missing file parses as empty.
    """
    if not path.is_file():
        return {}

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Cannot read %s: %s", path, e)
        return {}

    result: dict[str, str] = {}
    for number, line in enumerate(content.splitlines(), start=1):
        if not line.strip() or line.lstrip().startswith("#"):
            continue

        match = _ASSIGNMENT.match(line)
        if match is None:
            logger.debug("%s:%d: not an assignment, skipped", path.name, number)
            continue

        if match.group("double") is not None:
            value = _unescape(match.group("double"))
        elif match.group("single") is not None:
            value = match.group("single")
        else:
            value = match.group("bare")
        result[match.group("key")] = value

    return result


def set_env_value(path: Path, key: str, value: str) -> bool:
    """Replace the ``KEY=`` line in place, or append one.

    The file is created when missing.

    Returns:
        True if an existing line was replaced, False if one was added.
    """
    line = f"{key}={value}"

    if not path.is_file():
        write_file(path, line + "\n")
        logger.info("Created %s with %s", path, key)
        return False

    content = path.read_text(encoding="utf-8")
    pattern = re.compile(rf"^[ \t]*(export[ \t]+)?{re.escape(key)}[ \t]*=.*$", re.MULTILINE)
    if pattern.search(content):
        write_file(path, pattern.sub(lambda _: line, content, count=1))
        return True

    if content and not content.endswith("\n"):
        content += "\n"
    write_file(path, content + line + "\n")
    return False
