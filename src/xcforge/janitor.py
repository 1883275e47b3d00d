"""Remove intermediate build state once the bundle exists."""

from __future__ import annotations

import shutil
from pathlib import Path


def clean_workspace(output_dir: Path, *, keep: Path) -> tuple[Path, ...]:
    """Delete every top-level entry of *output_dir* except *keep*.

    A missing or already clean directory is a no-op.
    """
    if not output_dir.is_dir():
        return ()

    removed: list[Path] = []
    for entry in sorted(output_dir.iterdir()):
        if entry.name == keep.name:
            continue
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
        removed.append(entry)
    return tuple(removed)
