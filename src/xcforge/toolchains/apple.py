"""Rust + Xcode toolchain driven through subprocesses.

Each operation shells out to the matching tool on the host:

- ``rustup`` installs the channel pinned in ``rust-toolchain.toml`` and the
  per-target standard libraries.
- ``cbindgen`` generates the public header (installed with ``cargo install``
  when missing).
- ``cargo +<channel> build --release`` compiles one target at a time.
- ``lipo`` merges architecture slices and ``xcodebuild`` creates the
  XCFramework.

Commands run in the project directory and never use a shell.
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from xcforge.catalog import BuildTarget, LogicalPlatform
from xcforge.config import PackagingConfig, read_toolchain_channel
from xcforge.errors import (
    AssemblyFailure,
    CompileFailure,
    HeaderGenerationFailure,
    MergeFailure,
    ToolchainSetupFailure,
    ToolchainUnavailable,
    XcforgeError,
)
from xcforge.models import ArtifactRef, BundleEntry, HeaderLayout


@dataclass(slots=True)
class RustAppleToolchain:
    config: PackagingConfig
    name: str = "rust_apple"
    channel: str | None = None

    def ensure_toolchain(self) -> str:
        self._require_tool("rustup", error=ToolchainSetupFailure, stage="toolchain")
        channel = self._channel()

        active = subprocess.run(
            ["rustup", "show", "active-toolchain"],
            cwd=str(self.config.project_dir),
            capture_output=True,
            text=True,
            check=False,
        )
        if active.returncode != 0:
            self._run(
                ["rustup", "install", channel],
                error=ToolchainSetupFailure,
                message=f"Failed to install toolchain {channel}.",
                hint="Check rustup output and network access.",
                context={"stage": "toolchain", "channel": channel},
            )

        if shutil.which("cbindgen") is None:
            self._run(
                ["cargo", f"+{channel}", "install", "cbindgen"],
                error=ToolchainSetupFailure,
                message="Failed to install cbindgen.",
                hint="Install cbindgen manually and ensure it is on PATH.",
                context={"stage": "toolchain", "channel": channel},
            )
        return channel

    def add_target(self, target: BuildTarget) -> None:
        channel = self._channel()
        self._run(
            ["rustup", "target", "add", target, "--toolchain", channel],
            error=ToolchainUnavailable,
            message=f"Could not install Rust target {target}.",
            hint=f"Target {target} is Tier 3 and may need local stdlib build.",
            context={"stage": "toolchain", "target": target, "channel": channel},
        )

    def generate_header(self, layout: HeaderLayout) -> Path:
        self._require_tool("cbindgen", error=HeaderGenerationFailure, stage="header")
        layout.header_file.parent.mkdir(parents=True, exist_ok=True)
        self._run(
            [
                "cbindgen",
                "--config",
                str(self.config.cbindgen_config),
                "--crate",
                self.config.crate_name,
                "--output",
                str(layout.header_file),
            ],
            error=HeaderGenerationFailure,
            message="cbindgen failed to generate the C header.",
            hint=f"Check {self.config.cbindgen_config} and the crate sources.",
            context={"stage": "header", "crate": self.config.crate_name},
        )
        if not layout.header_file.exists():
            raise HeaderGenerationFailure(
                "cbindgen did not produce the expected header.",
                context={"stage": "header", "path": str(layout.header_file)},
            )
        return layout.header_file

    def compile(self, target: BuildTarget, output_dir: Path) -> ArtifactRef:
        self._require_tool("cargo", error=CompileFailure, stage="compile")
        channel = self._channel()
        self._run(
            ["cargo", f"+{channel}", "build", "--target", target, "--release"],
            error=CompileFailure,
            message=f"cargo build failed for {target}.",
            hint="Check cargo output for details.",
            context={"stage": "compile", "target": target},
        )

        built = (
            self.config.project_dir / "target" / target / "release" / self.config.library_filename
        )
        if not built.exists():
            raise CompileFailure(
                f"cargo build did not produce {self.config.library_filename} for {target}.",
                hint="Ensure the crate builds a `staticlib` crate-type.",
                context={"stage": "compile", "target": target, "path": str(built)},
            )
        destination = output_dir / target / self.config.library_filename
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(built, destination)
        return ArtifactRef(target=target, path=destination)

    def merge(
        self,
        platform: LogicalPlatform,
        artifacts: Sequence[ArtifactRef],
        output: Path,
    ) -> Path:
        self._require_tool("lipo", error=MergeFailure, stage="merge")
        output.parent.mkdir(parents=True, exist_ok=True)
        self._run(
            [
                "lipo",
                "-create",
                *(str(artifact.path) for artifact in artifacts),
                "-output",
                str(output),
            ],
            error=MergeFailure,
            message=f"lipo failed to create the {platform} universal library.",
            hint="Check that every architecture slice was built.",
            context={
                "stage": "merge",
                "platform": platform,
                "targets": ", ".join(artifact.target for artifact in artifacts),
            },
        )
        return output

    def assemble(self, entries: Sequence[BundleEntry], output: Path) -> Path:
        self._require_tool("xcodebuild", error=AssemblyFailure, stage="assemble")
        argv = ["xcodebuild", "-create-xcframework"]
        for entry in entries:
            argv.extend(["-library", str(entry.library), "-headers", str(entry.headers)])
        argv.extend(["-output", str(output)])
        self._run(
            argv,
            error=AssemblyFailure,
            message="xcodebuild failed to create the XCFramework.",
            hint="Check xcodebuild output for details.",
            context={
                "stage": "assemble",
                "platforms": ", ".join(entry.platform for entry in entries),
            },
        )
        return output

    def _channel(self) -> str:
        if self.channel is None:
            self.channel = read_toolchain_channel(self.config)
        return self.channel

    def _run(
        self,
        argv: list[str],
        *,
        error: type[XcforgeError],
        message: str,
        hint: str,
        context: dict[str, str],
    ) -> str:
        result = subprocess.run(
            argv,
            cwd=str(self.config.project_dir),
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            raise error(
                message,
                hint=hint,
                context={
                    **context,
                    "returncode": str(result.returncode),
                    "stderr": result.stderr[-2000:] if result.stderr else "",
                    "command": " ".join(argv),
                },
            )
        return result.stdout

    def _require_tool(self, tool: str, *, error: type[XcforgeError], stage: str) -> None:
        if shutil.which(tool) is None:
            raise error(
                f"`{tool}` is required in PATH.",
                hint=f"Install {tool} and ensure it is available before packaging.",
                context={"stage": stage, "toolchain": self.name},
            )
