"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from xcforge.config import PackagingConfig
from xcforge.toolchains.inprocess import InProcessToolchain


@pytest.fixture
def inprocess_toolchain() -> InProcessToolchain:
    """Provide an in-process toolchain for tests that run the pipeline."""
    return InProcessToolchain()


@pytest.fixture
def config(tmp_path: Path) -> PackagingConfig:
    project = tmp_path / "project"
    project.mkdir()
    return PackagingConfig(project_dir=project)
