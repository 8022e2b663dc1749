"""
Name resolution — case conversion, pluralization and nested-name parsing.

Pure string functions: no I/O, no state.  Every generator funnels the
user's symbolic name through ``parse_name`` and derives its class,
file and directory names from the result.

The three case converters are built on one another so they always
agree:  ``to_pascal_case(to_snake_case(x)) == to_pascal_case(x)``.
"""

from __future__ import annotations

import re

from magic_cli.core.errors import UsageError
from magic_cli.core.models.names import ParsedName


# ── Case conversion ─────────────────────────────────────────────

_SEPARATORS = re.compile(r"[-\s]+")
_INNER_UPPER = re.compile(r"(?<=[^_])([A-Z])")
_CLASS_NAME = re.compile(r"^[A-Z][A-Za-z0-9]*$")
# Directory segments only break after a lowercase letter or digit, so
# acronyms stay whole: ``API`` → ``api``, ``AdminTools`` → ``admin_tools``.
_SEGMENT_BREAK = re.compile(r"(?<=[a-z0-9])([A-Z])")


def to_snake_case(value: str) -> str:
    """``UserController`` → ``user_controller``.

    Hyphens and whitespace become underscores, then an underscore is
    inserted before every uppercase letter that is not the first
    character, and the result is lowercased.
    """
    if not value:
        return ""
    snake = _SEPARATORS.sub("_", value.strip())
    snake = _INNER_UPPER.sub(r"_\1", snake)
    return snake.lower()


def to_pascal_case(value: str) -> str:
    """``user_controller`` / ``userController`` → ``UserController``."""
    words = to_snake_case(value).split("_")
    return "".join(w[:1].upper() + w[1:] for w in words if w)


def to_camel_case(value: str) -> str:
    """``user_controller`` → ``userController``."""
    pascal = to_pascal_case(value)
    return pascal[:1].lower() + pascal[1:]


def to_kebab_case(value: str) -> str:
    """``UserProfile`` → ``user-profile``."""
    return to_snake_case(value).replace("_", "-")


def to_title_words(value: str) -> str:
    """``magic_e2e_test`` → ``Magic E2e Test``."""
    return " ".join(w[:1].upper() + w[1:] for w in to_snake_case(value).split("_") if w)


def to_human_words(value: str) -> str:
    """``StoreMonitor`` → ``store monitor``."""
    return to_snake_case(value).replace("_", " ")


# ── Pluralization ───────────────────────────────────────────────

# Checked first, exact and case-insensitive.
_IRREGULAR_PLURALS: dict[str, str] = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
}

_CONSONANT_Y = re.compile(r"[^aeiou]y$")
_SIBILANT_ENDINGS = ("s", "x", "z", "ch", "sh")


def to_plural(word: str) -> str:
    """English plural by heuristic rules, first match wins.

    1. Irregular table (``person`` → ``people``).
    2. Consonant + ``y`` → ``ies`` (``category`` → ``categories``).
    3. ``s``/``x``/``z``/``ch``/``sh`` → append ``es``.
    4. Otherwise append ``s``.
    """
    if not word:
        return ""

    lower = word.lower()

    irregular = _IRREGULAR_PLURALS.get(lower)
    if irregular is not None:
        return irregular.capitalize() if word[0].isupper() else irregular

    if _CONSONANT_Y.search(lower):
        return f"{word[:-1]}ies"

    if lower.endswith(_SIBILANT_ENDINGS):
        return f"{word}es"

    return f"{word}s"


# ── Nested names ────────────────────────────────────────────────


def _segment_to_directory(segment: str) -> str:
    snake = _SEPARATORS.sub("_", segment.strip())
    return _SEGMENT_BREAK.sub(r"_\1", snake).lower()


def parse_name(raw: str) -> ParsedName:
    """Split ``Admin/UserController`` into directory, class and file parts.

    >>> parse_name("Api/V1/Admin/UserController")
    ParsedName(directory='api/v1/admin', class_name='UserController', file_name='user_controller')

    Raises:
        UsageError: If the name is empty or the final segment is not a
            valid class identifier.
    """
    segments = [s for s in (raw or "").strip().split("/") if s.strip()]
    if not segments:
        raise UsageError('Not enough arguments (missing: "name").')

    class_name = to_pascal_case(segments[-1])
    if not _CLASS_NAME.match(class_name):
        raise UsageError(
            f'Invalid name "{segments[-1]}": must start with a letter and '
            "contain only letters, digits, underscores or hyphens."
        )

    directory = "/".join(_segment_to_directory(s) for s in segments[:-1])

    return ParsedName(
        directory=directory,
        class_name=class_name,
        file_name=to_snake_case(class_name),
    )


def apply_suffix(class_name: str, suffix: str) -> tuple[str, str]:
    """Guarantee ``suffix`` on ``class_name`` without doubling it.

    Returns ``(base_name, class_name)``:
    ``("User", "Policy")`` → ``("User", "UserPolicy")``,
    ``("UserPolicy", "Policy")`` → ``("User", "UserPolicy")``.

    Raises:
        UsageError: If the name is nothing but the suffix.
    """
    if not suffix:
        return class_name, class_name

    if class_name.lower().endswith(suffix.lower()):
        base = class_name[: -len(suffix)]
    else:
        base = class_name

    if not base:
        raise UsageError(f'Name "{class_name}" has nothing before the "{suffix}" suffix.')

    return base, f"{base}{suffix}"
