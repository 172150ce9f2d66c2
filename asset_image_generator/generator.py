"""
Asset Image Generation Pipeline

Reads the declared asset entries from pubspec.yaml, scans them for images and
writes one Dart file per folder plus the ``images.dart`` index.

The run is a single batch: every unit is rendered in memory before anything
is written, and every run regenerates all files from scratch. Missing asset
directories and empty results are reported, not raised; configuration and
write failures propagate to the caller.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from .core.emit import INDEX_FILE_NAME, render_group_unit, render_index_unit
from .core.models import GenerationSummary, RenderedUnit
from .core.output import write_units
from .core.pubspec import (
    PUBSPEC_FILE_NAME,
    extract_asset_paths,
    load_pubspec,
    read_options,
    resolve_pubspec_path,
)
from .core.scan import AssetScanner


LOG_TAG = "[AssetImages]"

NO_ASSET_PATHS_NOTICE = f"No asset paths found in {PUBSPEC_FILE_NAME}"
NO_ASSETS_NOTICE = "No image assets found"


def _print_info(message: str) -> None:
    print(LOG_TAG, message)


def _print_warning(message: str) -> None:
    print(LOG_TAG, "Warning:", message, file=sys.stderr)


def generate(
    output_dir: str | Path | None = None,
    *,
    pubspec_path: str | Path | None = None,
    project_root: str | Path | None = None,
    generated_at: Optional[datetime] = None,
    log: Callable[[str], None] = _print_info,
    warn: Callable[[str], None] = _print_warning,
) -> GenerationSummary:
    """Generate Dart image constants for the project at project_root.

    output_dir overrides the ``asset_image_generator.output`` option; relative
    paths are resolved against project_root (the current directory by default).
    Raises ConfigurationError when pubspec.yaml is missing or invalid and
    WriteFailure when the output cannot be written.
    """
    root = Path(project_root) if project_root else Path.cwd()
    log("Starting asset image generation...")

    manifest = resolve_pubspec_path(pubspec_path, project_root=root)
    if not manifest.is_absolute():
        manifest = root / manifest
    document = load_pubspec(manifest)
    options = read_options(document)

    target = Path(output_dir) if output_dir else Path(options.output)
    if not target.is_absolute():
        target = root / target
    summary = GenerationSummary(output_dir=target)

    entries = extract_asset_paths(document)
    if not entries:
        summary.notice = NO_ASSET_PATHS_NOTICE
        warn(NO_ASSET_PATHS_NOTICE)
        return summary

    scanner = AssetScanner(project_root=root, extensions=options.extensions, name_style=options.name_style)
    result = scanner.scan(entries)
    summary.warnings = list(result.warnings)
    for warning in result.warnings:
        warn(warning.message)

    if result.total == 0:
        summary.notice = NO_ASSETS_NOTICE
        warn(NO_ASSETS_NOTICE)
        return summary

    stamp = generated_at or datetime.now()
    keys = sorted(result.groups)
    units: list[RenderedUnit] = []
    for key in keys:
        group = result.groups[key]
        units.append(render_group_unit(key, group.assets, options=options, generated_at=stamp))
        summary.counts[key] = len(group.assets)
    units.append(render_index_unit(keys, generated_at=stamp))

    write_units(units, target)

    for key, unit in zip(keys, units):
        log(f"Generated {unit.file_name} with {summary.counts[key]} assets")
        summary.generated_files.append(unit.file_name)
    summary.generated_files.append(INDEX_FILE_NAME)
    summary.total_assets = result.total

    log("Generation complete!")
    log(f"Output directory: {target}")
    log(f"Total: {summary.total_assets} assets across {len(keys)} files")
    log(f"Generated files: {', '.join(summary.generated_files)}")
    return summary
