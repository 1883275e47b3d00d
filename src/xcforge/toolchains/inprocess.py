"""In-process toolchain for testing and development.

Produces deterministic placeholder files without invoking rustup, cargo,
cbindgen, lipo or xcodebuild. Every call is recorded in ``calls`` and each
stage can be made to fail, which makes it suitable for:
- Unit tests that verify the packaging pipeline
- Development hosts without Xcode or a Rust toolchain
"""

from __future__ import annotations

import json
import shutil
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from xcforge.catalog import BuildTarget, LogicalPlatform
from xcforge.errors import (
    AssemblyFailure,
    CompileFailure,
    HeaderGenerationFailure,
    MergeFailure,
    ToolchainUnavailable,
)
from xcforge.models import ArtifactRef, BundleEntry, HeaderLayout

SLICE_PREFIX = "slice="


@dataclass(slots=True)
class InProcessToolchain:
    """Toolchain that writes placeholder libraries, headers and bundles."""

    name: str = "inprocess"
    channel: str = "inprocess-stable"
    lib_name: str = "clashrs"
    unavailable_targets: frozenset[str] = frozenset()
    failing_targets: frozenset[str] = frozenset()
    failing_merges: frozenset[str] = frozenset()
    fail_header: bool = False
    fail_assembly: bool = False
    calls: list[tuple[str, ...]] = field(default_factory=list)

    def ensure_toolchain(self) -> str:
        self.calls.append(("ensure_toolchain", self.channel))
        return self.channel

    def add_target(self, target: BuildTarget) -> None:
        self.calls.append(("add_target", target))
        if target in self.unavailable_targets:
            raise ToolchainUnavailable(
                f"Could not install Rust target {target}.",
                hint=f"Target {target} is Tier 3 and may need local stdlib build.",
                context={"stage": "toolchain", "target": target},
            )

    def generate_header(self, layout: HeaderLayout) -> Path:
        self.calls.append(("generate_header", str(layout.header_file)))
        if self.fail_header:
            raise HeaderGenerationFailure(
                "Header generation failed.",
                context={"stage": "header", "path": str(layout.header_file)},
            )
        layout.header_file.parent.mkdir(parents=True, exist_ok=True)
        layout.header_file.write_text(
            f"/* generated by {self.name} */\n#pragma once\n",
            encoding="utf-8",
        )
        return layout.header_file

    def compile(self, target: BuildTarget, output_dir: Path) -> ArtifactRef:
        self.calls.append(("compile", target))
        if target in self.failing_targets:
            raise CompileFailure(
                f"cargo build failed for {target}.",
                context={"stage": "compile", "target": target},
            )
        destination = output_dir / target / f"lib{self.lib_name}.a"
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(f"{SLICE_PREFIX}{target}\n", encoding="utf-8")
        return ArtifactRef(target=target, path=destination)

    def merge(
        self,
        platform: LogicalPlatform,
        artifacts: Sequence[ArtifactRef],
        output: Path,
    ) -> Path:
        self.calls.append(("merge", platform, *(artifact.target for artifact in artifacts)))
        if platform in self.failing_merges:
            raise MergeFailure(
                f"lipo failed to create the {platform} universal library.",
                context={"stage": "merge", "platform": platform},
            )
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(
            "".join(artifact.path.read_text(encoding="utf-8") for artifact in artifacts),
            encoding="utf-8",
        )
        return output

    def assemble(self, entries: Sequence[BundleEntry], output: Path) -> Path:
        self.calls.append(("assemble", *(entry.platform for entry in entries)))
        if self.fail_assembly:
            raise AssemblyFailure(
                "xcodebuild failed to create the XCFramework.",
                context={"stage": "assemble"},
            )
        output.mkdir(parents=True)
        manifest = []
        for entry in entries:
            slice_dir = output / entry.platform
            slice_dir.mkdir()
            shutil.copy2(entry.library, slice_dir / entry.library.name)
            shutil.copytree(entry.headers, slice_dir / "Headers")
            manifest.append(
                {
                    "platform": entry.platform,
                    "library": entry.library.name,
                    "slices": bundle_slices(entry.library),
                }
            )
        (output / "manifest.json").write_text(
            json.dumps({"entries": manifest}, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
        return output


def bundle_slices(library: Path) -> list[str]:
    """Return the target slices recorded in a placeholder library."""
    return [
        line[len(SLICE_PREFIX):]
        for line in library.read_text(encoding="utf-8").splitlines()
        if line.startswith(SLICE_PREFIX)
    ]
