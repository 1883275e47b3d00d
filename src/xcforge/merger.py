"""Combine per-architecture libraries into one universal library per platform."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from xcforge.catalog import BuildTarget, LogicalPlatform, universal_dir_for
from xcforge.errors import MergeFailure
from xcforge.models import ArtifactRef, MergedArtifactRef
from xcforge.observability import StructuredLogger
from xcforge.resolver import Resolution
from xcforge.toolchains.base import Toolchain


def merge_platform_artifacts(
    resolution: Resolution,
    artifacts: Mapping[BuildTarget, ArtifactRef],
    *,
    toolchain: Toolchain,
    output_dir: Path,
    logger: StructuredLogger | None = None,
) -> dict[LogicalPlatform, MergedArtifactRef]:
    """Return the bundle slice library for every selected platform.

    Single-architecture platforms reuse their compile artifact. Multi-arch
    platforms are merged in one toolchain call that covers every catalog
    target; a missing architecture is rejected before the call.
    """
    merged: dict[LogicalPlatform, MergedArtifactRef] = {}
    for platform in resolution.platforms:
        targets = resolution.platform_targets[platform]
        missing = [target for target in targets if target not in artifacts]
        if missing:
            raise MergeFailure(
                f"Cannot build the {platform} slice from a partial architecture set.",
                hint="Every catalog target of the platform must be compiled first.",
                context={
                    "stage": "merge",
                    "platform": platform,
                    "missing": ", ".join(missing),
                },
            )

        if len(targets) == 1:
            merged[platform] = MergedArtifactRef(
                platform=platform,
                path=artifacts[targets[0]].path,
                targets=targets,
            )
            continue

        inputs = [artifacts[target] for target in targets]
        output = output_dir / universal_dir_for(platform) / inputs[0].path.name
        if logger is not None:
            logger.log(
                operation="merge",
                stage="merge",
                platform=platform,
                message=f"Creating {platform} universal binary...",
                extra={"targets": list(targets)},
            )
        path = toolchain.merge(platform, inputs, output)
        merged[platform] = MergedArtifactRef(
            platform=platform,
            path=path,
            targets=targets,
            merged=True,
        )
    return merged
