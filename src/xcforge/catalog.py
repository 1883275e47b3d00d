"""Static catalog of logical Apple platforms and the Rust targets they need."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal

from xcforge.errors import InvalidPlatform

LogicalPlatform = Literal["ios", "ios-sim", "macos"]
BuildTarget = str


@dataclass(frozen=True, slots=True)
class PlatformEntry:
    name: LogicalPlatform
    targets: tuple[BuildTarget, ...]
    description: str
    universal_dir: str | None = None

    @property
    def is_multi_arch(self) -> bool:
        return len(self.targets) > 1


CATALOG: Mapping[str, PlatformEntry] = MappingProxyType(
    {
        "ios": PlatformEntry(
            name="ios",
            targets=("aarch64-apple-ios",),
            description="Build for iOS device (aarch64-apple-ios)",
        ),
        "ios-sim": PlatformEntry(
            name="ios-sim",
            targets=("x86_64-apple-ios", "aarch64-apple-ios-sim"),
            description="Build for iOS Simulator (x86_64 + aarch64 universal)",
            universal_dir="ios-simulator-universal",
        ),
        "macos": PlatformEntry(
            name="macos",
            targets=("aarch64-apple-darwin", "x86_64-apple-darwin"),
            description="Build for macOS (x86_64 + aarch64 universal)",
            universal_dir="macos-universal",
        ),
    }
)


def known_platforms() -> tuple[LogicalPlatform, ...]:
    return tuple(sorted(CATALOG))  # type: ignore[arg-type]


def platform_entry(platform: str) -> PlatformEntry:
    entry = CATALOG.get(platform)
    if entry is None:
        raise InvalidPlatform(
            f"Unknown platform '{platform}'.",
            hint=f"Choose from: {', '.join(known_platforms())}.",
            context={"stage": "select", "platform": platform},
        )
    return entry


def targets_for(platform: str) -> tuple[BuildTarget, ...]:
    return platform_entry(platform).targets


def universal_dir_for(platform: str) -> str:
    """Return the directory name holding the platform's merged library."""
    entry = platform_entry(platform)
    return entry.universal_dir or f"{entry.name}-universal"
