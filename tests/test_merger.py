from pathlib import Path

import pytest

from xcforge.errors import MergeFailure
from xcforge.merger import merge_platform_artifacts
from xcforge.models import ArtifactRef
from xcforge.resolver import resolve_targets
from xcforge.toolchains.inprocess import InProcessToolchain, bundle_slices


def test_multi_arch_platform_merges_every_catalog_target(
    tmp_path: Path,
    inprocess_toolchain: InProcessToolchain,
) -> None:
    resolution = resolve_targets(["ios-sim"])
    artifacts = _compile_all(inprocess_toolchain, resolution.targets, tmp_path)

    merged = merge_platform_artifacts(
        resolution, artifacts, toolchain=inprocess_toolchain, output_dir=tmp_path
    )

    ref = merged["ios-sim"]
    assert ref.merged is True
    assert ref.path == tmp_path / "ios-simulator-universal" / "libclashrs.a"
    assert ref.targets == ("x86_64-apple-ios", "aarch64-apple-ios-sim")
    assert bundle_slices(ref.path) == ["x86_64-apple-ios", "aarch64-apple-ios-sim"]
    merges = [call for call in inprocess_toolchain.calls if call[0] == "merge"]
    assert merges == [("merge", "ios-sim", "x86_64-apple-ios", "aarch64-apple-ios-sim")]


def test_single_arch_platform_passes_artifact_through(
    tmp_path: Path,
    inprocess_toolchain: InProcessToolchain,
) -> None:
    resolution = resolve_targets(["ios"])
    artifacts = _compile_all(inprocess_toolchain, resolution.targets, tmp_path)

    merged = merge_platform_artifacts(
        resolution, artifacts, toolchain=inprocess_toolchain, output_dir=tmp_path
    )

    assert merged["ios"].merged is False
    assert merged["ios"].path == artifacts["aarch64-apple-ios"].path
    assert not any(call[0] == "merge" for call in inprocess_toolchain.calls)


def test_partial_architecture_set_is_rejected_before_merging(
    tmp_path: Path,
    inprocess_toolchain: InProcessToolchain,
) -> None:
    resolution = resolve_targets(["macos"])
    artifacts = _compile_all(inprocess_toolchain, ("aarch64-apple-darwin",), tmp_path)

    with pytest.raises(MergeFailure) as excinfo:
        merge_platform_artifacts(
            resolution, artifacts, toolchain=inprocess_toolchain, output_dir=tmp_path
        )

    assert excinfo.value.context["missing"] == "x86_64-apple-darwin"
    assert excinfo.value.context["platform"] == "macos"
    assert not any(call[0] == "merge" for call in inprocess_toolchain.calls)


def test_merge_failure_is_fatal(tmp_path: Path) -> None:
    toolchain = InProcessToolchain(failing_merges=frozenset({"macos"}))
    resolution = resolve_targets(["macos"])
    artifacts = _compile_all(toolchain, resolution.targets, tmp_path)

    with pytest.raises(MergeFailure) as excinfo:
        merge_platform_artifacts(resolution, artifacts, toolchain=toolchain, output_dir=tmp_path)

    assert "macos" in str(excinfo.value)


def _compile_all(
    toolchain: InProcessToolchain,
    targets: tuple[str, ...],
    output_dir: Path,
) -> dict[str, ArtifactRef]:
    return {target: toolchain.compile(target, output_dir) for target in targets}
