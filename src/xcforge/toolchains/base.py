"""Protocol for the external toolchain collaborators of a packaging run."""

from __future__ import annotations

import textwrap
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from xcforge.catalog import BuildTarget, LogicalPlatform
from xcforge.models import ArtifactRef, BundleEntry, HeaderLayout


class Toolchain(Protocol):
    name: str

    def ensure_toolchain(self) -> str:
        """Install or activate the pinned toolchain and return its identifier."""

    def add_target(self, target: BuildTarget) -> None:
        """Install standard library support for *target*.

        Raises ``ToolchainUnavailable`` when support cannot be installed.
        """

    def generate_header(self, layout: HeaderLayout) -> Path:
        """Write the public C header and return its path."""

    def compile(self, target: BuildTarget, output_dir: Path) -> ArtifactRef:
        """Build the static library for *target* and copy it under *output_dir*."""

    def merge(
        self,
        platform: LogicalPlatform,
        artifacts: Sequence[ArtifactRef],
        output: Path,
    ) -> Path:
        """Combine per-architecture libraries into one universal library."""

    def assemble(self, entries: Sequence[BundleEntry], output: Path) -> Path:
        """Create the multi-slice bundle at *output* from every entry."""


# ---------------------------------------------------------------------------
# Shared utilities
# ---------------------------------------------------------------------------

MODULEMAP_TEMPLATE = textwrap.dedent("""\
    module {module} {{
        umbrella header "{header}"
        export *
    }}
""")


def render_modulemap(layout: HeaderLayout) -> str:
    return MODULEMAP_TEMPLATE.format(
        module=layout.module_name,
        header=layout.header_file.name,
    )


def write_modulemap(layout: HeaderLayout) -> Path:
    """Write the umbrella-header module map next to the generated header."""
    layout.modulemap_file.parent.mkdir(parents=True, exist_ok=True)
    layout.modulemap_file.write_text(render_modulemap(layout), encoding="utf-8")
    return layout.modulemap_file
