"""
devlink packages unlink command.

SUMMARY: Remove vendor symlinks of local packages
"""
from __future__ import annotations

import argparse

from devlink.cli import OutputFormatter, add_standard_flags, build_linker

SUMMARY = "Remove vendor symlinks of local packages"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)


def render_cleanup_result(formatter: OutputFormatter, result) -> None:
    """Print a CleanupResult in the formatter's mode."""
    if formatter.json_mode:
        formatter.json_output(result.to_dict())
        return
    if not result.removed:
        formatter.text("No vendor links to remove.")
    for path in result.removed:
        formatter.text(f"Removed link {path}")
    for path in result.skipped:
        formatter.text(f"Kept {path} (not a symlink)")


def main(args: argparse.Namespace) -> int:
    """Remove stale vendor links."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        linker = build_linker(args)
        render_cleanup_result(formatter, linker.remove_package_links())
        return 0

    except Exception as e:
        return formatter.fail(e)


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    exit(main(parsed))
