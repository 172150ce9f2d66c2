"""Plain records passed between the scanner, the emitter and the generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


ROOT_GROUP = "root"


@dataclass(frozen=True, slots=True)
class ImageAsset:
    relative_path: str
    identifier: str
    name_identifier: str
    name_value: str
    file_name: str
    base_name: str


@dataclass(slots=True)
class AssetGroup:
    key: str
    assets: list[ImageAsset] = field(default_factory=list)

    def sorted_assets(self) -> list[ImageAsset]:
        """Assets ordered by identifier, ties broken by path."""
        return sorted(self.assets, key=lambda a: (a.identifier, a.relative_path))


@dataclass(frozen=True, slots=True)
class ScanWarning:
    entry: str
    directory: str
    message: str


@dataclass(slots=True)
class ScanResult:
    groups: dict[str, AssetGroup] = field(default_factory=dict)
    warnings: list[ScanWarning] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(len(g.assets) for g in self.groups.values())

    def add(self, key: str, asset: ImageAsset) -> None:
        group = self.groups.get(key)
        if group is None:
            group = self.groups[key] = AssetGroup(key)
        group.assets.append(asset)

    def merge(self, other: "ScanResult") -> None:
        for key, group in other.groups.items():
            for asset in group.assets:
                self.add(key, asset)
        self.warnings.extend(other.warnings)


@dataclass(frozen=True, slots=True)
class RenderedUnit:
    file_name: str
    text: str


@dataclass(slots=True)
class GenerationSummary:
    output_dir: Path
    generated_files: list[str] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)
    total_assets: int = 0
    warnings: list[ScanWarning] = field(default_factory=list)
    notice: Optional[str] = None

    @property
    def written(self) -> bool:
        return bool(self.generated_files)
