"""Packaging configuration and rust-toolchain.toml loading."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from xcforge.errors import ConfigurationError
from xcforge.models import HeaderLayout

DEFAULT_CRATE_NAME = "clash-ffi"
DEFAULT_LIB_NAME = "clashrs"
DEFAULT_OUTPUT_DIR = "build"
DEFAULT_TOOLCHAIN_FILE = "rust-toolchain.toml"


@dataclass(frozen=True, slots=True)
class PackagingConfig:
    project_dir: Path = field(default_factory=Path.cwd)
    crate_name: str = DEFAULT_CRATE_NAME
    lib_name: str = DEFAULT_LIB_NAME
    output_dir_name: str = DEFAULT_OUTPUT_DIR
    toolchain_file: str = DEFAULT_TOOLCHAIN_FILE

    def __post_init__(self) -> None:
        name = self.output_dir_name
        relative = Path(name)
        if not name or relative.is_absolute() or not relative.parts or ".." in relative.parts:
            raise _invalid_output_dir(name)
        # Symlinks inside the project may still point back at it or outside it.
        root = self.project_dir.resolve()
        resolved = (root / relative).resolve()
        if resolved == root or root not in resolved.parents:
            raise _invalid_output_dir(name)

    @property
    def output_dir(self) -> Path:
        return self.project_dir / self.output_dir_name

    @property
    def headers_dir(self) -> Path:
        return self.output_dir / "Headers"

    @property
    def header_file(self) -> Path:
        return self.headers_dir / self.lib_name / f"{self.lib_name}.h"

    @property
    def modulemap_file(self) -> Path:
        return self.headers_dir / self.lib_name / "module.modulemap"

    @property
    def bundle_path(self) -> Path:
        return self.output_dir / f"{self.lib_name}.xcframework"

    @property
    def library_filename(self) -> str:
        return f"lib{self.lib_name}.a"

    @property
    def cbindgen_config(self) -> Path:
        return self.project_dir / self.crate_name / "cbindgen.toml"

    @property
    def toolchain_path(self) -> Path:
        return self.project_dir / self.toolchain_file

    def header_layout(self) -> HeaderLayout:
        return HeaderLayout(
            headers_dir=self.headers_dir,
            header_file=self.header_file,
            modulemap_file=self.modulemap_file,
            module_name=self.lib_name,
        )


def _invalid_output_dir(name: str) -> ConfigurationError:
    return ConfigurationError(
        f"Invalid output directory {name!r}.",
        hint="Use a relative directory name inside the project, such as `build`.",
        context={"stage": "configure", "output_dir": name},
    )


def read_toolchain_channel(config: PackagingConfig) -> str:
    """Return the pinned toolchain channel from the project's toolchain file."""
    path = config.toolchain_path
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigurationError(
            f"{config.toolchain_file} not found.",
            hint="Ensure it exists in the project directory.",
            context={"stage": "configure", "path": str(path)},
        ) from exc

    try:
        payload = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(
            f"Invalid TOML in {config.toolchain_file}.",
            hint=str(exc),
            context={"stage": "configure", "path": str(path)},
        ) from exc

    section = payload.get("toolchain", payload)
    channel = section.get("channel") if isinstance(section, dict) else None
    if not isinstance(channel, str) or not channel:
        raise ConfigurationError(
            f"{config.toolchain_file} does not pin a toolchain channel.",
            hint='Add `channel = "<version>"` under [toolchain].',
            context={"stage": "configure", "path": str(path)},
        )
    return channel
