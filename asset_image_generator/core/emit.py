"""
Dart source rendering for discovered image assets.

Each asset group becomes one unit holding a non-instantiable class of string
constants; an index unit re-exports every group and aggregates them under a
single ``Images`` class. Rendering is pure: units are returned as text and
written elsewhere.

Ordering rules (both keep the output diff-friendly across runs):
- assets inside a group are emitted sorted by identifier, then path;
- group keys in the index are emitted sorted ascending.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional

from .errors import IdentifierCollisionError
from .models import ROOT_GROUP, AssetGroup, ImageAsset, RenderedUnit
from .naming import ensure_unique_identifier, guard_reserved, lower_first, to_snake_case
from .pubspec import NAME_STYLE_FILE_NAME, ON_COLLISION_ERROR, GeneratorOptions


SOURCE_EXTENSION = ".dart"
ROOT_FILE_NAME = f"app_images{SOURCE_EXTENSION}"
INDEX_FILE_NAME = f"images{SOURCE_EXTENSION}"
ROOT_CLASS_NAME = "AppImages"
INDEX_CLASS_NAME = "Images"

GENERATOR_NAME = "asset_image_generator"
HEADER_TIMESTAMP_PREFIX = "// Generated on: "

# Instance members every Dart class inherits from Object; a static member
# may not share their names.
OBJECT_MEMBERS = frozenset({"toString", "hashCode", "runtimeType", "noSuchMethod"})

# Members every group class declares besides the asset constants.
GROUP_MEMBERS = OBJECT_MEMBERS | frozenset(
    {"instance", "allPaths", "allNames", "allFileNames", "getPathByName", "paths", "names", "pathFor"}
)
INDEX_MEMBERS = OBJECT_MEMBERS | frozenset({"getAllPaths"})

_INDENT = "  "


def group_file_name(key: str) -> str:
    if key == ROOT_GROUP:
        return ROOT_FILE_NAME
    return f"{to_snake_case(key)}_images{SOURCE_EXTENSION}"


def group_class_name(key: str) -> str:
    if key == ROOT_GROUP:
        return ROOT_CLASS_NAME
    return f"{key}Images"


def dart_string(value: str) -> str:
    """Single-quoted Dart literal for value."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("$", "\\$")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def _comment_text(value: str) -> str:
    return " ".join(value.splitlines())


def strip_timestamp(text: str) -> str:
    """Drop the generation timestamp line so two renders can be compared."""
    return "\n".join(line for line in text.split("\n") if not line.startswith(HEADER_TIMESTAMP_PREFIX))


def _header(generated_at: datetime, scope: str) -> list[str]:
    return [
        "// GENERATED CODE - DO NOT MODIFY BY HAND",
        f"// Generated by {GENERATOR_NAME}",
        f"{HEADER_TIMESTAMP_PREFIX}{generated_at.isoformat()}",
        f"// {scope}",
        "",
    ]


def resolve_collisions(key: str, assets: Iterable[ImageAsset], policy: str) -> list[ImageAsset]:
    """Return assets in emission order with identifiers unique inside the group.

    With the "error" policy a clash raises IdentifierCollisionError; otherwise
    clashing assets get numeric suffixes. Bare identifiers are claimed before
    any suffix is handed out, so a file literally named "home2" keeps
    ``home2``. Which asset keeps a shared bare name depends only on the sort
    order, never on discovery order.
    """
    ordered = AssetGroup(key, list(assets)).sorted_assets()
    owners: dict[str, str] = {name: "<generated member>" for name in GROUP_MEMBERS}
    bare_owner: dict[str, int] = {}
    for index, asset in enumerate(ordered):
        name = asset.identifier
        if name in owners or name in bare_owner:
            if policy == ON_COLLISION_ERROR:
                first = owners.get(name) or ordered[bare_owner[name]].relative_path
                raise IdentifierCollisionError(key, name, (first, asset.relative_path))
            continue
        bare_owner[name] = index
    for name, index in bare_owner.items():
        owners[name] = ordered[index].relative_path
    resolved: list[ImageAsset] = []

    def claim(name: str, path: str) -> str:
        if name in owners:
            if policy == ON_COLLISION_ERROR:
                raise IdentifierCollisionError(key, name, (owners[name], path))
            name = ensure_unique_identifier(name, owners)
        owners[name] = path
        return name

    for index, asset in enumerate(ordered):
        name_suffix = asset.name_identifier[len(asset.identifier):]
        if bare_owner.get(asset.identifier) == index:
            identifier = asset.identifier
        else:
            identifier = claim(asset.identifier, asset.relative_path)
        name_identifier = claim(f"{identifier}{name_suffix}", asset.relative_path)
        if identifier != asset.identifier or name_identifier != asset.name_identifier:
            asset = replace(asset, identifier=identifier, name_identifier=name_identifier)
        resolved.append(asset)
    return resolved


def render_group_unit(
    key: str,
    assets: Iterable[ImageAsset],
    *,
    options: Optional[GeneratorOptions] = None,
    generated_at: Optional[datetime] = None,
) -> RenderedUnit:
    options = options or GeneratorOptions()
    generated_at = generated_at or datetime.now()
    ordered = resolve_collisions(key, assets, options.on_collision)

    is_root = key == ROOT_GROUP
    class_name = group_class_name(key)
    where = "root directory" if is_root else "folder"
    names_list = "allFileNames" if options.name_style == NAME_STYLE_FILE_NAME else "allNames"
    name_label = "File name" if options.name_style == NAME_STYLE_FILE_NAME else "Image name only"

    lines = _header(generated_at, f"Folder: {key}")
    lines.append("/// Root level image assets" if is_root else f"/// {key} folder image assets")
    lines.append(f"class {class_name} {{")
    lines.append(f"{_INDENT}const {class_name}._();")
    lines.append("")
    lines.append(f"{_INDENT}/// Shared instance exposed by the {INDEX_CLASS_NAME} index")
    lines.append(f"{_INDENT}static const {class_name} instance = {class_name}._();")
    lines.append("")

    for asset in ordered:
        lines.append(f"{_INDENT}/// Full path: {_comment_text(asset.relative_path)}")
        lines.append(f"{_INDENT}static const String {asset.identifier} = {dart_string(asset.relative_path)};")
        lines.append("")
        lines.append(f"{_INDENT}/// {name_label}: {_comment_text(asset.name_value)}")
        lines.append(f"{_INDENT}static const String {asset.name_identifier} = {dart_string(asset.name_value)};")
        lines.append("")

    lines.append(f"{_INDENT}/// List of all image asset paths in this {where}")
    lines.append(f"{_INDENT}static const List<String> allPaths = [")
    lines.extend(f"{_INDENT * 2}{asset.identifier}," for asset in ordered)
    lines.append(f"{_INDENT}];")
    lines.append("")

    lines.append(f"{_INDENT}/// List of all image names in this {where}")
    lines.append(f"{_INDENT}static const List<String> {names_list} = [")
    lines.extend(f"{_INDENT * 2}{asset.name_identifier}," for asset in ordered)
    lines.append(f"{_INDENT}];")
    lines.append("")

    if options.lookup_method:
        lines.append(f"{_INDENT}/// Get image path by name")
        lines.append(f"{_INDENT}static String? getPathByName(String name) {{")
        lines.append(f"{_INDENT * 2}switch (name) {{")
        seen: set[str] = set()
        for asset in ordered:
            # first asset in sort order owns a shared name
            if asset.name_value in seen:
                continue
            seen.add(asset.name_value)
            lines.append(f"{_INDENT * 3}case {dart_string(asset.name_value)}:")
            lines.append(f"{_INDENT * 4}return {asset.identifier};")
        lines.append(f"{_INDENT * 3}default:")
        lines.append(f"{_INDENT * 4}return null;")
        lines.append(f"{_INDENT * 2}}}")
        lines.append(f"{_INDENT}}}")
        lines.append("")

    lines.append(f"{_INDENT}List<String> get paths => allPaths;")
    lines.append("")
    lines.append(f"{_INDENT}List<String> get names => {names_list};")
    if options.lookup_method:
        lines.append("")
        lines.append(f"{_INDENT}String? pathFor(String name) => getPathByName(name);")
    lines.append("}")

    return RenderedUnit(file_name=group_file_name(key), text="\n".join(lines) + "\n")


def index_field_names(keys: Iterable[str]) -> dict[str, str]:
    """Map each group key to its read-only field name on the index class."""
    fields: dict[str, str] = {}
    used: set[str] = set(INDEX_MEMBERS)
    for key in sorted(set(keys)):
        base = ROOT_GROUP if key == ROOT_GROUP else guard_reserved(lower_first(key))
        name = ensure_unique_identifier(base, used)
        used.add(name)
        fields[key] = name
    return fields


def render_index_unit(keys: Iterable[str], *, generated_at: Optional[datetime] = None) -> RenderedUnit:
    generated_at = generated_at or datetime.now()
    ordered = sorted(set(keys))
    fields = index_field_names(ordered)

    lines = _header(generated_at, "Main export file for all image assets")

    for key in ordered:
        lines.append(f"import {dart_string(group_file_name(key))};")
    lines.append("")

    lines.append("// Export all image asset classes")
    for key in ordered:
        lines.append(f"export {dart_string(group_file_name(key))};")
    lines.append("")

    lines.append(f"/// Main {INDEX_CLASS_NAME} class providing access to all image asset categories")
    lines.append(f"class {INDEX_CLASS_NAME} {{")
    lines.append(f"{_INDENT}{INDEX_CLASS_NAME}._();")
    lines.append("")

    for key in ordered:
        class_name = group_class_name(key)
        label = "root level" if key == ROOT_GROUP else key.lower()
        lines.append(f"{_INDENT}/// Access {label} images")
        lines.append(f"{_INDENT}static const {class_name} {fields[key]} = {class_name}.instance;")
        lines.append("")

    lines.append(f"{_INDENT}/// Get all image paths from all folders")
    lines.append(f"{_INDENT}static List<String> getAllPaths() {{")
    lines.append(f"{_INDENT * 2}return [")
    for key in ordered:
        lines.append(f"{_INDENT * 3}...{group_class_name(key)}.allPaths,")
    lines.append(f"{_INDENT * 2}];")
    lines.append(f"{_INDENT}}}")
    lines.append("}")

    return RenderedUnit(file_name=INDEX_FILE_NAME, text="\n".join(lines) + "\n")
