"""Assemble the final XCFramework from one slice per requested platform."""

from __future__ import annotations

import shutil
from collections.abc import Iterable, Mapping
from pathlib import Path

from xcforge.catalog import LogicalPlatform, targets_for
from xcforge.errors import AssemblyFailure
from xcforge.models import BundleEntry, BundleSpec, HeaderLayout, MergedArtifactRef
from xcforge.observability import StructuredLogger
from xcforge.toolchains.base import Toolchain


def build_bundle_spec(
    platforms: Iterable[LogicalPlatform],
    merged: Mapping[LogicalPlatform, MergedArtifactRef],
    *,
    headers: HeaderLayout,
    output: Path,
) -> BundleSpec:
    """Pair every requested platform's slice with the shared header directory."""
    requested = tuple(platforms)
    extra = sorted(set(merged) - set(requested))
    if extra:
        raise AssemblyFailure(
            "Slices were produced for platforms that were not requested.",
            context={"stage": "assemble", "platforms": ", ".join(extra)},
        )

    entries: list[BundleEntry] = []
    for platform in requested:
        ref = merged.get(platform)
        if ref is None:
            raise AssemblyFailure(
                f"No library slice available for requested platform {platform}.",
                context={"stage": "assemble", "platform": platform},
            )
        expected = targets_for(platform)
        if set(ref.targets) != set(expected) or (len(expected) > 1 and not ref.merged):
            raise AssemblyFailure(
                f"The {platform} slice does not cover every catalog architecture.",
                hint="Merge all architecture variants before assembling the bundle.",
                context={
                    "stage": "assemble",
                    "platform": platform,
                    "expected": ", ".join(expected),
                    "actual": ", ".join(ref.targets),
                },
            )
        entries.append(
            BundleEntry(platform=platform, library=ref.path, headers=headers.headers_dir)
        )
    return BundleSpec(entries=tuple(entries), output=output)


def assemble_bundle(
    spec: BundleSpec,
    *,
    toolchain: Toolchain,
    logger: StructuredLogger | None = None,
) -> Path:
    """Replace any bundle at ``spec.output`` with a fresh one."""
    if logger is not None:
        logger.log(
            operation="assemble",
            stage="assemble",
            message="Creating XCFramework...",
            extra={"platforms": list(spec.platforms)},
        )
    _remove_existing(spec.output)
    path = toolchain.assemble(spec.entries, spec.output)
    if not path.exists():
        raise AssemblyFailure(
            "Bundler reported success but no bundle exists.",
            context={"stage": "assemble", "path": str(path)},
        )
    if logger is not None:
        logger.log(
            operation="assemble",
            stage="assemble",
            message=f"XCFramework created at {path}",
        )
    return path


def _remove_existing(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()
