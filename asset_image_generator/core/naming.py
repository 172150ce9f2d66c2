"""
Identifier Naming Utilities

Turns arbitrary filesystem names into identifiers that are valid in generated
Dart source: camelCase constant names for image files, PascalCase type names
for folders and snake_case file names for the generated units.

Rules:
- Pure string transforms, no filesystem access.
- Keep output deterministic given the same inputs.
- Collisions between different raw names are not resolved here; callers use
  ensure_unique_identifier() where they need uniqueness.
"""

from __future__ import annotations

import os
import re
from typing import Iterable


IDENTIFIER_FALLBACK = "image"
TYPE_NAME_FALLBACK = "Images"
DIGIT_PREFIX = "img_"
RESERVED_SUFFIX = "Image"

_DISALLOWED_RE = re.compile(r"[^a-zA-Z0-9_]")
_UNDERSCORES_RE = re.compile(r"_+")
_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")
_UPPER_RE = re.compile(r"([A-Z])")
_IDENTIFIER_VALID_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

# Dart reserved words and built-in identifiers that cannot name a member.
DART_RESERVED_WORDS = frozenset(
    {
        "abstract", "as", "assert", "async", "await", "base", "break", "case",
        "catch", "class", "const", "continue", "covariant", "default",
        "deferred", "do", "dynamic", "else", "enum", "export", "extends",
        "extension", "external", "factory", "false", "final", "finally", "for",
        "function", "get", "hide", "if", "implements", "import", "in",
        "interface", "is", "late", "library", "mixin", "new", "null", "of",
        "on", "operator", "part", "required", "rethrow", "return", "sealed",
        "set", "show", "static", "super", "switch", "sync", "this", "throw",
        "true", "try", "type", "typedef", "var", "void", "when", "while",
        "with", "yield",
    }
)


def strip_extension(name: str) -> str:
    """Return the base name of name without its final extension.

    Names made only of a leading dot (".png") have no extension.
    """
    base = os.path.basename(name or "")
    stem, _ext = os.path.splitext(base)
    return stem


def sanitize_base_name(raw: str, *, fallback: str = IDENTIFIER_FALLBACK, strip_ext: bool = True) -> str:
    """Reduce raw to an underscore-separated token of [a-zA-Z0-9_].

    Steps: strip the extension, replace disallowed characters with "_",
    collapse and trim underscores, fall back when nothing is left and prefix
    names that start with a digit.
    """
    text = strip_extension(raw) if strip_ext else (raw or "")
    text = _DISALLOWED_RE.sub("_", text)
    text = _UNDERSCORES_RE.sub("_", text)
    text = text.strip("_")
    if not text:
        return fallback
    if text[0].isdigit():
        text = f"{DIGIT_PREFIX}{text}"
    return text


def _capitalize(part: str) -> str:
    return part[0].upper() + part[1:].lower()


def to_identifier_case(raw: str) -> str:
    """camelCase: lowercase first segment, capitalize the rest, drop underscores."""
    parts = (raw or "").split("_")
    result = parts[0].lower()
    for part in parts[1:]:
        if part:
            result += _capitalize(part)
    return result or IDENTIFIER_FALLBACK


def to_type_name_case(raw: str) -> str:
    """PascalCase over any non-alphanumeric separator."""
    result = "".join(_capitalize(part) for part in _NON_ALNUM_RE.split(raw or "") if part)
    if not result:
        return TYPE_NAME_FALLBACK
    if result[0].isdigit():
        result = _capitalize(DIGIT_PREFIX.rstrip("_")) + result
    return result


def to_snake_case(type_name: str) -> str:
    snake = _UPPER_RE.sub(lambda m: f"_{m.group(1).lower()}", type_name or "")
    if snake.startswith("_"):
        snake = snake[1:]
    return snake.lower()


def lower_first(type_name: str) -> str:
    """Lower camel form of a PascalCase type name ("Icons" -> "icons")."""
    if not type_name:
        return IDENTIFIER_FALLBACK
    return type_name[0].lower() + type_name[1:]


def guard_reserved(identifier: str) -> str:
    if identifier in DART_RESERVED_WORDS:
        return f"{identifier}{RESERVED_SUFFIX}"
    return identifier


def identifier_for_file(file_name: str) -> str:
    """Constant name for an image file ("1st-icon.png" -> "img1stIcon")."""
    return guard_reserved(to_identifier_case(sanitize_base_name(file_name)))


def type_name_for_folder(folder_name: str) -> str:
    """Type name for a folder ("app-icons" -> "AppIcons")."""
    token = sanitize_base_name(folder_name, fallback=TYPE_NAME_FALLBACK, strip_ext=False)
    return to_type_name_case(token)


def is_valid_identifier(name: str) -> bool:
    if not name:
        return False
    return _IDENTIFIER_VALID_RE.match(name) is not None and name not in DART_RESERVED_WORDS


def ensure_unique_identifier(name: str, existing: Iterable[str]) -> str:
    """Return name, or name with the first free numeric suffix (2, 3, ...)."""
    used = set(existing or [])
    if name not in used:
        return name

    suffix = 2
    while True:
        candidate = f"{name}{suffix}"
        if candidate not in used:
            return candidate
        suffix += 1
