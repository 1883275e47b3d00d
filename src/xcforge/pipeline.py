"""End-to-end packaging run: select, resolve, build, merge, assemble, clean."""

from __future__ import annotations

from collections.abc import Iterable

from xcforge.assembler import assemble_bundle, build_bundle_spec
from xcforge.config import PackagingConfig
from xcforge.driver import BuildDriver
from xcforge.janitor import clean_workspace
from xcforge.merger import merge_platform_artifacts
from xcforge.models import PackagingResult
from xcforge.observability import StructuredLogger
from xcforge.resolver import resolve_targets
from xcforge.selector import select_platforms
from xcforge.toolchains.apple import RustAppleToolchain
from xcforge.toolchains.base import Toolchain


def package(
    tokens: Iterable[str] = (),
    *,
    config: PackagingConfig | None = None,
    toolchain: Toolchain | None = None,
    logger: StructuredLogger | None = None,
) -> PackagingResult:
    """Build the XCFramework for the requested platforms.

    Platform tokens are validated before anything touches the filesystem.
    Any stage failure propagates and leaves intermediate files in place for
    inspection; cleanup only runs after the bundle has been created.
    """
    platforms = select_platforms(tokens)
    config = config or PackagingConfig()
    toolchain = toolchain or RustAppleToolchain(config)
    logger = logger or StructuredLogger()

    logger.log(
        operation="package",
        stage="select",
        message=f"Building for platforms: {' '.join(platforms)}",
        extra={"platforms": list(platforms)},
    )
    resolution = resolve_targets(platforms)

    outputs = BuildDriver(toolchain=toolchain, config=config, logger=logger).run(resolution)
    merged = merge_platform_artifacts(
        resolution,
        outputs.artifacts,
        toolchain=toolchain,
        output_dir=config.output_dir,
        logger=logger,
    )
    spec = build_bundle_spec(
        resolution.platforms,
        merged,
        headers=outputs.headers,
        output=config.bundle_path,
    )
    bundle_path = assemble_bundle(spec, toolchain=toolchain, logger=logger)

    logger.log(operation="clean", stage="clean", message="Cleaning up intermediate files...")
    removed = clean_workspace(config.output_dir, keep=bundle_path)
    logger.log(
        operation="package",
        stage="clean",
        message="Done!",
        extra={"removed": [str(path) for path in removed]},
    )

    return PackagingResult(
        bundle_path=bundle_path,
        platforms=resolution.platforms,
        targets=resolution.targets,
        bundle=spec,
        merged=merged,
        removed=removed,
    )
