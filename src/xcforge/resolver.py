"""Expand selected platforms into the deduplicated set of build targets."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from xcforge.catalog import BuildTarget, LogicalPlatform, known_platforms, platform_entry


@dataclass(frozen=True, slots=True)
class Resolution:
    platforms: tuple[LogicalPlatform, ...]
    targets: tuple[BuildTarget, ...]
    platform_targets: Mapping[LogicalPlatform, tuple[BuildTarget, ...]] = field(
        default_factory=dict
    )

    @property
    def multi_arch_platforms(self) -> tuple[LogicalPlatform, ...]:
        return tuple(
            platform for platform in self.platforms if len(self.platform_targets[platform]) > 1
        )

    def platforms_for_target(self, target: BuildTarget) -> tuple[LogicalPlatform, ...]:
        return tuple(
            platform
            for platform in self.platforms
            if target in self.platform_targets[platform]
        )


def resolve_targets(platforms: Iterable[str]) -> Resolution:
    """Union the catalog targets of *platforms* into one sorted target set.

    An empty selection resolves every known platform, matching
    :func:`xcforge.selector.select_platforms`.
    """
    selected = tuple(sorted(set(platforms))) or known_platforms()
    platform_targets: dict[LogicalPlatform, tuple[BuildTarget, ...]] = {}
    union: set[BuildTarget] = set()
    for name in selected:
        entry = platform_entry(name)
        platform_targets[entry.name] = entry.targets
        union.update(entry.targets)

    return Resolution(
        platforms=tuple(platform_targets),
        targets=tuple(sorted(union)),
        platform_targets=MappingProxyType(platform_targets),
    )
