"""
Writing rendered units to the output directory.

Every unit is first written into a hidden staging directory created inside
the destination, then moved over its final name with os.replace. A failure
while writing leaves the existing output untouched; the final moves are
per-file atomic. Existing files are always overwritten, and files not produced
by this run are left in place.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable

from .errors import GenerationError, WriteFailure
from .models import RenderedUnit


STAGING_PREFIX = ".asset_images-"


def _check_unique(units: list[RenderedUnit]) -> None:
    seen: set[str] = set()
    for unit in units:
        if unit.file_name in seen:
            raise GenerationError(f"Two generated units share the file name '{unit.file_name}'")
        seen.add(unit.file_name)


def write_text(path: Path, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(content)


def write_units(units: Iterable[RenderedUnit], output_dir: str | Path) -> list[Path]:
    """Write all units into output_dir, returning the final paths in input order."""
    batch = list(units)
    _check_unique(batch)
    target = Path(output_dir)

    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WriteFailure(f"Cannot create output directory {target}: {exc}") from exc

    try:
        staging = Path(tempfile.mkdtemp(prefix=STAGING_PREFIX, dir=target))
    except OSError as exc:
        raise WriteFailure(f"Cannot write to output directory {target}: {exc}") from exc

    written: list[Path] = []
    try:
        staged: list[tuple[Path, Path]] = []
        for unit in batch:
            tmp_path = staging / unit.file_name
            write_text(tmp_path, unit.text)
            staged.append((tmp_path, target / unit.file_name))
        for tmp_path, final_path in staged:
            os.replace(tmp_path, final_path)
            written.append(final_path)
    except OSError as exc:
        raise WriteFailure(f"Cannot write generated files to {target}: {exc}") from exc
    finally:
        shutil.rmtree(staging, ignore_errors=True)
    return written
