"""
Asset directory scanning.

Walks the declared asset entries recursively, following symlinked folders,
keeps supported image files and groups them by their immediate parent
folder. Directories that do not exist or cannot be read are recorded as
ScanWarning entries and skipped; they never abort a scan.
"""

from __future__ import annotations

import glob
import os
from pathlib import Path
from typing import Iterable

from .models import ROOT_GROUP, ImageAsset, ScanResult, ScanWarning
from .naming import identifier_for_file, strip_extension, type_name_for_folder
from .pubspec import NAME_STYLE_BASE_NAME, NAME_STYLE_FILE_NAME


SUPPORTED_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".svg"})


def is_supported_image(file_name: str, extensions: Iterable[str] = SUPPORTED_EXTENSIONS) -> bool:
    ext = os.path.splitext(os.path.basename(file_name))[1].lower()
    return bool(ext) and ext in extensions


def _names_a_file(entry: str) -> bool:
    if glob.has_magic(entry):
        return True
    return bool(os.path.splitext(os.path.basename(entry))[1])


def resolve_scan_directory(entry: str, project_root: Path) -> Path:
    """Directory to scan for one declared entry.

    Entries ending in "/" or naming an existing directory are scanned as-is.
    Entries naming a file (or a glob) scan the directory that contains it.
    """
    text = (entry or "").strip()
    candidate = project_root / text
    if text.endswith("/") or candidate.is_dir() or not _names_a_file(text):
        return candidate
    parent = os.path.dirname(text)
    return project_root / parent if parent else project_root


def grouping_root(scan_dir: Path, project_root: Path) -> Path:
    """Top-level asset directory of a scan ("assets" for "assets/icons/").

    Images directly inside it form the root group, so declaring a subfolder
    keeps that folder's own group. Entries outside the project group
    relative to the scanned directory itself.
    """
    try:
        parts = scan_dir.relative_to(project_root).parts
    except ValueError:
        return scan_dir
    if not parts or parts[0] == "..":
        return scan_dir
    return project_root / parts[0]


def group_key_for(file_dir: Path, group_root: Path) -> str:
    if file_dir == group_root:
        return ROOT_GROUP
    return type_name_for_folder(file_dir.name)


def build_asset(file_path: Path, project_root: Path, *, name_style: str = NAME_STYLE_BASE_NAME) -> ImageAsset:
    file_name = file_path.name
    base_name = strip_extension(file_name)
    identifier = identifier_for_file(file_name)
    if name_style == NAME_STYLE_FILE_NAME:
        name_identifier = f"{identifier}FileName"
        name_value = file_name
    else:
        name_identifier = f"{identifier}Name"
        name_value = base_name
    relative = os.path.relpath(file_path, project_root).replace(os.sep, "/")
    return ImageAsset(
        relative_path=relative,
        identifier=identifier,
        name_identifier=name_identifier,
        name_value=name_value,
        file_name=file_name,
        base_name=base_name,
    )


class AssetScanner:
    """Scan declared asset entries into groups keyed by folder type name."""

    def __init__(
        self,
        *,
        project_root: str | Path | None = None,
        extensions: Iterable[str] | None = None,
        name_style: str = NAME_STYLE_BASE_NAME,
    ):
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.extensions = frozenset(e.lower() for e in extensions) if extensions else SUPPORTED_EXTENSIONS
        self.name_style = name_style

    def scan_entry(self, entry: str) -> ScanResult:
        result = ScanResult()
        scan_dir = resolve_scan_directory(entry, self.project_root)
        if not scan_dir.is_dir():
            rel = os.path.relpath(scan_dir, self.project_root).replace(os.sep, "/")
            result.warnings.append(ScanWarning(entry=entry, directory=rel, message=f"Directory not found: {rel}"))
            return result

        def report(exc: OSError) -> None:
            where = exc.filename or scan_dir
            rel = os.path.relpath(where, self.project_root).replace(os.sep, "/")
            reason = exc.strerror or str(exc)
            result.warnings.append(ScanWarning(entry=entry, directory=rel, message=f"Cannot read {rel}: {reason}"))

        group_root = grouping_root(scan_dir, self.project_root)
        visited: set[str] = set()
        for dirpath, dirnames, filenames in os.walk(scan_dir, onerror=report, followlinks=True):
            # symlinked folders are followed, but each real directory only once
            real = os.path.realpath(dirpath)
            if real in visited:
                dirnames[:] = []
                continue
            visited.add(real)
            dirnames.sort()
            current = Path(dirpath)
            key = group_key_for(current, group_root)
            for name in sorted(filenames):
                full = current / name
                if not full.is_file() or not is_supported_image(name, self.extensions):
                    continue
                result.add(key, build_asset(full, self.project_root, name_style=self.name_style))
        return result

    def scan(self, entries: Iterable[str]) -> ScanResult:
        """Scan every entry in order, merging groups by key."""
        merged = ScanResult()
        for entry in entries:
            merged.merge(self.scan_entry(entry))
        return merged
