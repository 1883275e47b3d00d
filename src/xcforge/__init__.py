"""Public package entrypoint for the XCFramework packaging orchestrator."""

from .catalog import CATALOG, PlatformEntry, known_platforms, targets_for
from .config import PackagingConfig, read_toolchain_channel
from .driver import BuildDriver, TargetSupportWarning
from .errors import (
    AssemblyFailure,
    CompileFailure,
    ConfigurationError,
    ErrorCode,
    HeaderGenerationFailure,
    HelpRequested,
    InvalidPlatform,
    MergeFailure,
    ToolchainSetupFailure,
    ToolchainUnavailable,
    XcforgeError,
)
from .models import (
    ArtifactRef,
    BundleEntry,
    BundleSpec,
    HeaderLayout,
    MergedArtifactRef,
    PackagingResult,
)
from .pipeline import package
from .resolver import Resolution, resolve_targets
from .selector import select_platforms

__all__ = [
    "ArtifactRef",
    "AssemblyFailure",
    "BuildDriver",
    "BundleEntry",
    "BundleSpec",
    "CATALOG",
    "CompileFailure",
    "ConfigurationError",
    "ErrorCode",
    "HeaderGenerationFailure",
    "HeaderLayout",
    "HelpRequested",
    "InvalidPlatform",
    "MergeFailure",
    "MergedArtifactRef",
    "PackagingConfig",
    "PackagingResult",
    "PlatformEntry",
    "Resolution",
    "TargetSupportWarning",
    "ToolchainSetupFailure",
    "ToolchainUnavailable",
    "XcforgeError",
    "known_platforms",
    "package",
    "read_toolchain_channel",
    "resolve_targets",
    "select_platforms",
    "targets_for",
]
