"""Toolchain implementations for packaging runs."""

from .apple import RustAppleToolchain
from .base import Toolchain, render_modulemap, write_modulemap
from .inprocess import InProcessToolchain

__all__ = [
    "InProcessToolchain",
    "RustAppleToolchain",
    "Toolchain",
    "render_modulemap",
    "write_modulemap",
]
