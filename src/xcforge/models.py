"""Core typed dataclasses for one packaging run."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from xcforge.catalog import BuildTarget, LogicalPlatform


@dataclass(frozen=True, slots=True)
class ArtifactRef:
    """Static library compiled for a single build target."""

    target: BuildTarget
    path: Path


@dataclass(frozen=True, slots=True)
class MergedArtifactRef:
    """Library used as a platform's bundle slice.

    ``merged`` is false for single-architecture platforms, whose slice is the
    compile artifact itself.
    """

    platform: LogicalPlatform
    path: Path
    targets: tuple[BuildTarget, ...]
    merged: bool = False


@dataclass(frozen=True, slots=True)
class HeaderLayout:
    headers_dir: Path
    header_file: Path
    modulemap_file: Path
    module_name: str


@dataclass(frozen=True, slots=True)
class BundleEntry:
    platform: LogicalPlatform
    library: Path
    headers: Path


@dataclass(frozen=True, slots=True)
class BundleSpec:
    entries: tuple[BundleEntry, ...]
    output: Path

    @property
    def platforms(self) -> tuple[LogicalPlatform, ...]:
        return tuple(entry.platform for entry in self.entries)


@dataclass(slots=True)
class BuildOutputs:
    headers: HeaderLayout
    artifacts: dict[BuildTarget, ArtifactRef] = field(default_factory=dict)
    toolchain: str = ""
    unavailable_targets: list[BuildTarget] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PackagingResult:
    bundle_path: Path
    platforms: tuple[LogicalPlatform, ...]
    targets: tuple[BuildTarget, ...]
    bundle: BundleSpec
    merged: Mapping[LogicalPlatform, MergedArtifactRef] = field(default_factory=dict)
    removed: tuple[Path, ...] = ()
