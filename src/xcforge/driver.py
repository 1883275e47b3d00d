"""Build driver: toolchain setup, one-time header generation, per-target compiles."""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field

from xcforge.config import PackagingConfig
from xcforge.errors import ToolchainUnavailable
from xcforge.models import BuildOutputs
from xcforge.observability import StructuredLogger
from xcforge.resolver import Resolution
from xcforge.toolchains.base import Toolchain, write_modulemap


class TargetSupportWarning(UserWarning):
    """Warning raised when a target's standard library could not be installed."""


@dataclass(slots=True)
class BuildDriver:
    toolchain: Toolchain
    config: PackagingConfig
    logger: StructuredLogger = field(default_factory=StructuredLogger)

    def run(self, resolution: Resolution) -> BuildOutputs:
        """Build every resolved target in order; the first failure propagates."""
        self._log(
            "ensure_toolchain",
            "toolchain",
            "Ensuring the pinned Rust toolchain is installed...",
        )
        toolchain_id = self.toolchain.ensure_toolchain()
        self._log("ensure_toolchain", "toolchain", f"Using toolchain: {toolchain_id}")
        self.config.output_dir.mkdir(parents=True, exist_ok=True)
        self.config.headers_dir.mkdir(parents=True, exist_ok=True)

        unavailable = self._install_targets(resolution)

        layout = self.config.header_layout()
        self._log("generate_header", "header", "Generating C header file...")
        self.toolchain.generate_header(layout)
        self._log("generate_header", "header", "Creating modulemap...")
        write_modulemap(layout)

        outputs = BuildOutputs(
            headers=layout,
            toolchain=toolchain_id,
            unavailable_targets=unavailable,
        )
        self._log(
            "compile",
            "compile",
            f"Building library for selected targets: {' '.join(resolution.targets)}",
        )
        for target in resolution.targets:
            self._log(
                "compile",
                "compile",
                f"Building {target}...",
                target=target,
                platform=", ".join(resolution.platforms_for_target(target)),
            )
            outputs.artifacts[target] = self.toolchain.compile(target, self.config.output_dir)
        return outputs

    def _install_targets(self, resolution: Resolution) -> list[str]:
        self._log("add_target", "toolchain", "Installing necessary Rust targets...")
        unavailable: list[str] = []
        for target in resolution.targets:
            try:
                self.toolchain.add_target(target)
            except ToolchainUnavailable as exc:
                unavailable.append(target)
                message = exc.hint or str(exc)
                self.logger.log(
                    operation="add_target",
                    stage="toolchain",
                    target=target,
                    message=message,
                    level="warning",
                    extra={"code": exc.code},
                )
                warnings.warn(message, TargetSupportWarning, stacklevel=2)
        return unavailable

    def _log(
        self,
        operation: str,
        stage: str,
        message: str,
        *,
        target: str | None = None,
        platform: str | None = None,
    ) -> None:
        self.logger.log(
            operation=operation,
            stage=stage,
            platform=platform,
            target=target,
            message=message,
        )
