"""
pubspec.yaml access.

Reads the Flutter project manifest and exposes the two things the generator
needs from it: the declared asset entries under ``flutter: assets:`` and the
optional ``asset_image_generator:`` options section.

A document that cannot be located or parsed is a ConfigurationError. Missing
nested keys are not: they resolve to their defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigurationError


PUBSPEC_FILE_NAME = "pubspec.yaml"
PUBSPEC_ENV_VAR = "ASSET_IMAGE_GENERATOR_PUBSPEC"
OPTIONS_KEY = "asset_image_generator"

DEFAULT_OUTPUT_DIR = os.path.join("lib", "generated", "images")

NAME_STYLE_BASE_NAME = "base_name"
NAME_STYLE_FILE_NAME = "file_name"
NAME_STYLES = (NAME_STYLE_BASE_NAME, NAME_STYLE_FILE_NAME)

ON_COLLISION_SUFFIX = "suffix"
ON_COLLISION_ERROR = "error"
COLLISION_POLICIES = (ON_COLLISION_SUFFIX, ON_COLLISION_ERROR)

_MISSING = object()


@dataclass(frozen=True, slots=True)
class GeneratorOptions:
    output: str = DEFAULT_OUTPUT_DIR
    name_style: str = NAME_STYLE_BASE_NAME
    on_collision: str = ON_COLLISION_SUFFIX
    lookup_method: bool = True
    extensions: tuple[str, ...] = ()


def resolve_pubspec_path(pubspec_path: str | Path | None = None, *, project_root: str | Path | None = None) -> Path:
    """Return the manifest path: explicit argument, then env override, then <root>/pubspec.yaml."""
    if pubspec_path:
        return Path(pubspec_path)
    override = (os.getenv(PUBSPEC_ENV_VAR) or "").strip()
    if override:
        return Path(override).expanduser()
    root = Path(project_root) if project_root else Path.cwd()
    return root / PUBSPEC_FILE_NAME


def load_pubspec(path: str | Path) -> dict[str, Any]:
    pubspec = Path(path)
    if not pubspec.is_file():
        raise ConfigurationError(f"{pubspec.name} not found: {pubspec}")
    try:
        content = pubspec.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot read {pubspec}: {exc}") from exc
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Cannot parse {pubspec}: {exc}") from exc

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigurationError(f"{pubspec} must contain a mapping at the top level")
    return document


def get_path(document: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Walk nested mappings by key; any missing or non-mapping step yields default."""
    node: Any = document
    for key in keys:
        if not isinstance(node, Mapping):
            return default
        node = node.get(key, _MISSING)
        if node is _MISSING or node is None:
            return default
    return node


def extract_asset_paths(document: Mapping[str, Any]) -> list[str]:
    """Return the ordered ``flutter: assets:`` entries.

    Plain strings are taken as-is; mapping entries contribute their ``path``.
    Anything else is skipped.
    """
    assets = get_path(document, "flutter", "assets", default=[])
    if not isinstance(assets, list):
        return []

    paths: list[str] = []
    for entry in assets:
        if isinstance(entry, str):
            paths.append(entry)
        elif isinstance(entry, Mapping) and isinstance(entry.get("path"), str):
            paths.append(entry["path"])
    return paths


def _normalize_extension(value: Any) -> str:
    if not isinstance(value, str) or not value.strip(".").strip():
        raise ConfigurationError(f"Invalid extension in {OPTIONS_KEY}.extensions: {value!r}")
    return "." + value.strip().lstrip(".").lower()


def read_options(document: Mapping[str, Any]) -> GeneratorOptions:
    section = get_path(document, OPTIONS_KEY, default={})
    if not isinstance(section, Mapping):
        raise ConfigurationError(f"'{OPTIONS_KEY}' must be a mapping")

    output = section.get("output", DEFAULT_OUTPUT_DIR)
    if not isinstance(output, str) or not output.strip():
        raise ConfigurationError(f"{OPTIONS_KEY}.output must be a non-empty string")

    name_style = section.get("name_style", NAME_STYLE_BASE_NAME)
    if name_style not in NAME_STYLES:
        raise ConfigurationError(
            f"{OPTIONS_KEY}.name_style must be one of {', '.join(NAME_STYLES)} (got {name_style!r})"
        )

    on_collision = section.get("on_collision", ON_COLLISION_SUFFIX)
    if on_collision not in COLLISION_POLICIES:
        raise ConfigurationError(
            f"{OPTIONS_KEY}.on_collision must be one of {', '.join(COLLISION_POLICIES)} (got {on_collision!r})"
        )

    lookup_method = section.get("lookup_method", True)
    if not isinstance(lookup_method, bool):
        raise ConfigurationError(f"{OPTIONS_KEY}.lookup_method must be true or false")

    raw_exts = section.get("extensions") or []
    if not isinstance(raw_exts, list):
        raise ConfigurationError(f"{OPTIONS_KEY}.extensions must be a list")
    extensions = tuple(_normalize_extension(v) for v in raw_exts)

    return GeneratorOptions(
        output=output.strip(),
        name_style=name_style,
        on_collision=on_collision,
        lookup_method=lookup_method,
        extensions=extensions,
    )
