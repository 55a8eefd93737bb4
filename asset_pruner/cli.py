# asset_pruner/cli.py

import argparse
import logging
import sys

from . import config
from .driver import run
from .errors import PruneError, ProfileError
from .profiles import ProfileRegistry
from .report import (
    EXIT_FAULT,
    EXIT_OK,
    EXIT_PARTIAL,
    EXIT_USAGE,
    exit_status,
    format_summary,
    summarize,
)


def _plain_name(value: str) -> str:
    if not value or value in (".", "..") or "/" in value or "\\" in value:
        raise argparse.ArgumentTypeError(f"'{value}' must be a single directory name")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asset-prune",
        description="Remove installed toolchains, libraries and firmwares that do not "
        "belong to the selected target profile. Run after fetching all assets "
        "and before packaging.",
    )
    parser.add_argument(
        "--root",
        default=config.PROJECT_ROOT,
        help="Project root holding tools/ and firmwares/ (default: current directory).",
    )
    parser.add_argument(
        "--profile",
        default=config.PROFILE_NAME,
        help="Target profile to keep (default: %(default)s).",
    )
    parser.add_argument(
        "--profile-file",
        default=config.PROFILE_FILE,
        help="JSON file with additional profiles.",
    )
    parser.add_argument(
        "--toolchain-root",
        type=_plain_name,
        default=config.TOOLCHAIN_ROOT,
        help="Directory name under tools/ holding packages and libraries (default: %(default)s).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=config.STRICT,
        help=f"Exit with status {EXIT_PARTIAL} if any removal failed.",
    )
    parser.add_argument(
        "--list-profiles", action="store_true", help="Show available profiles and exit."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Also log entries that were not present."
    )
    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stdout,
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    registry = ProfileRegistry()
    try:
        if args.profile_file:
            registry.load_file(args.profile_file)
        if args.list_profiles:
            for profile in registry:
                print(f"{profile.name}: {profile.description}")
            return EXIT_OK
        profile = registry.get(args.profile)
    except ProfileError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE

    print(f"=== {profile.name} cleanup ===")
    try:
        results = run(args.root, profile, args.toolchain_root)
    except PruneError as e:
        print(f"ERROR: Cleanup failed: {e}", file=sys.stderr)
        return EXIT_FAULT
    except Exception as e:
        print(f"CRITICAL ERROR: Cleanup failed unexpectedly: {e}", file=sys.stderr)
        return EXIT_FAULT

    summary = summarize(results)
    for line in format_summary(summary, profile.name):
        print(line)
    return exit_status(summary, strict=args.strict)


if __name__ == "__main__":
    sys.exit(main())
