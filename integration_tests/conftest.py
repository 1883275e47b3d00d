"""Shared helpers for integration tests against the real Rust and Xcode tools."""

from __future__ import annotations

import shutil
import sys
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

REQUIRED_TOOLS = ("rustup", "cargo", "lipo", "xcodebuild")


def snapshot_tree(root: Path) -> dict[str, str]:
    """Capture every file under *root* as ``{relative_path: content}``."""
    tree: dict[str, str] = {}
    for path in sorted(root.rglob("*")):
        if path.is_file():
            try:
                tree[str(path.relative_to(root))] = path.read_text(encoding="utf-8")
            except UnicodeDecodeError:
                tree[str(path.relative_to(root))] = "<binary>"
    return tree


@pytest.fixture
def tree_snapshot() -> Callable[[Path], dict[str, str]]:
    return snapshot_tree


@pytest.fixture
def rust_project(tmp_path: Path) -> Path:
    """Write a minimal staticlib crate laid out like the packaged project."""
    if sys.platform != "darwin":
        pytest.skip("XCFramework packaging requires a macOS host.")
    missing = [tool for tool in REQUIRED_TOOLS if shutil.which(tool) is None]
    if missing:
        pytest.skip(f"Missing tools: {', '.join(missing)}")

    project = tmp_path / "project"
    crate = project / "clash-ffi"
    (crate / "src").mkdir(parents=True)
    (project / "Cargo.toml").write_text(
        '[workspace]\nmembers = ["clash-ffi"]\nresolver = "2"\n',
        encoding="utf-8",
    )
    (project / "rust-toolchain.toml").write_text(
        '[toolchain]\nchannel = "stable"\n',
        encoding="utf-8",
    )
    (crate / "Cargo.toml").write_text(
        textwrap.dedent("""\
            [package]
            name = "clash-ffi"
            version = "0.1.0"
            edition = "2021"

            [lib]
            name = "clashrs"
            crate-type = ["staticlib"]
        """),
        encoding="utf-8",
    )
    (crate / "cbindgen.toml").write_text('language = "C"\n', encoding="utf-8")
    (crate / "src" / "lib.rs").write_text(
        textwrap.dedent("""\
            #[no_mangle]
            pub extern "C" fn clashrs_version() -> u32 {
                1
            }
        """),
        encoding="utf-8",
    )
    return project
