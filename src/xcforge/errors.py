"""Typed packaging error model with stable, machine-readable error codes."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum


class ErrorCode(StrEnum):
    """Stable error identifiers used across the CLI and library surfaces."""

    INVALID_PLATFORM = "E_INVALID_PLATFORM"
    CONFIGURATION = "E_CONFIGURATION"
    TOOLCHAIN_SETUP = "E_TOOLCHAIN_SETUP"
    TOOLCHAIN_UNAVAILABLE = "E_TOOLCHAIN_UNAVAILABLE"
    HEADER_GENERATION = "E_HEADER_GENERATION"
    COMPILE = "E_COMPILE"
    MERGE = "E_MERGE"
    ASSEMBLY = "E_ASSEMBLY"


class XcforgeError(Exception):
    """Base error class that carries code, optional hint, and context."""

    code: str
    hint: str | None
    context: Mapping[str, str]

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code.value
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        if self.context:
            for k, v in self.context.items():
                if v:
                    parts.append(f"  {k}: {v}")
        return "\n".join(parts)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "message": str(self),
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class InvalidPlatform(XcforgeError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.INVALID_PLATFORM, hint=hint, context=context)


class ConfigurationError(XcforgeError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.CONFIGURATION, hint=hint, context=context)


class ToolchainSetupFailure(XcforgeError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.TOOLCHAIN_SETUP, hint=hint, context=context)


class ToolchainUnavailable(XcforgeError):
    """Target support could not be installed. The build driver only warns."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(
            message, code=ErrorCode.TOOLCHAIN_UNAVAILABLE, hint=hint, context=context
        )


class HeaderGenerationFailure(XcforgeError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.HEADER_GENERATION, hint=hint, context=context)


class CompileFailure(XcforgeError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.COMPILE, hint=hint, context=context)


class MergeFailure(XcforgeError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.MERGE, hint=hint, context=context)


class AssemblyFailure(XcforgeError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.ASSEMBLY, hint=hint, context=context)


class HelpRequested(Exception):
    """Raised when a help token is found among the requested platforms."""


__all__ = [
    "AssemblyFailure",
    "CompileFailure",
    "ConfigurationError",
    "ErrorCode",
    "HeaderGenerationFailure",
    "HelpRequested",
    "InvalidPlatform",
    "MergeFailure",
    "ToolchainSetupFailure",
    "ToolchainUnavailable",
    "XcforgeError",
]
