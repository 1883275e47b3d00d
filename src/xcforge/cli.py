"""Command-line entrypoint for building the XCFramework.

Usage:
    xcforge                    # Build all platforms (default)
    xcforge ios                # Build iOS device only
    xcforge ios-sim macos      # Build iOS Simulator and macOS
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from xcforge.catalog import CATALOG, known_platforms
from xcforge.config import (
    DEFAULT_CRATE_NAME,
    DEFAULT_LIB_NAME,
    DEFAULT_OUTPUT_DIR,
    PackagingConfig,
)
from xcforge.errors import ConfigurationError, HelpRequested, InvalidPlatform, XcforgeError
from xcforge.observability import StructuredLogger
from xcforge.pipeline import package
from xcforge.toolchains import RustAppleToolchain

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    platform_lines = "\n".join(
        f"  {name:<12}  {CATALOG[name].description}" for name in known_platforms()
    )
    parser = argparse.ArgumentParser(
        prog="xcforge",
        description="Build XCFramework for specified Apple platforms.",
        epilog=(
            f"platforms:\n{platform_lines}\n\n"
            "examples:\n"
            "  xcforge                    # Build all platforms (default)\n"
            "  xcforge ios                # Build iOS device only\n"
            "  xcforge ios-sim macos      # Build iOS Simulator and macOS\n"
            "  xcforge ios macos          # Build iOS device and macOS\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("platforms", nargs="*", metavar="PLATFORM")
    parser.add_argument("-h", "--help", action="store_true", help="Show this message and exit")
    parser.add_argument(
        "--project-dir",
        type=Path,
        default=Path.cwd(),
        help="Directory holding rust-toolchain.toml and the crate (default: cwd)",
    )
    parser.add_argument(
        "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Working directory name under the project (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument("--crate", default=DEFAULT_CRATE_NAME, help="Crate passed to cbindgen")
    parser.add_argument("--lib-name", default=DEFAULT_LIB_NAME, help="Static library name")
    parser.add_argument("--log-json", type=Path, help="Write structured log records to this path")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)
    if args.help:
        parser.print_help()
        return EXIT_USAGE

    try:
        config = PackagingConfig(
            project_dir=args.project_dir.resolve(),
            crate_name=args.crate,
            lib_name=args.lib_name,
            output_dir_name=args.output_dir,
        )
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        print("", file=sys.stderr)
        parser.print_help(sys.stderr)
        return EXIT_USAGE

    logger = StructuredLogger(echo=sys.stdout)
    try:
        result = package(
            args.platforms,
            config=config,
            toolchain=RustAppleToolchain(config),
            logger=logger,
        )
    except HelpRequested:
        parser.print_help()
        return EXIT_USAGE
    except InvalidPlatform as exc:
        print(f"error: {exc}", file=sys.stderr)
        print("", file=sys.stderr)
        parser.print_help(sys.stderr)
        return EXIT_USAGE
    except XcforgeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    finally:
        if args.log_json is not None:
            logger.to_json_lines(args.log_json)

    print(result.bundle_path)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
