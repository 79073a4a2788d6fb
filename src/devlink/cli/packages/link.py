"""
devlink packages link command.

SUMMARY: Link local packages through the resolver
"""
from __future__ import annotations

import argparse

from devlink.cli import (
    EXIT_ERROR,
    EXIT_OK,
    OutputFormatter,
    add_standard_flags,
    build_linker,
)
from devlink.core.packages.host import NullIO

SUMMARY = "Link local packages through the resolver"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)


def render_link_result(formatter: OutputFormatter, result) -> None:
    """Print a LinkResult in the formatter's mode."""
    if formatter.json_mode:
        formatter.json_output(result.to_dict())
    elif result.status == "skipped":
        formatter.text("No local packages found; nothing to link.")
    elif result.status == "linked":
        formatter.text(f"Linked {len(result.packages)} local package(s):")
        for name in result.packages:
            formatter.text(f"  {name}")


def main(args: argparse.Namespace) -> int:
    """Run the link cycle."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        # JSON mode carries resolver errors in the payload
        linker = build_linker(args, io=NullIO() if formatter.json_mode else None)
        result = linker.install_local_packages()
        render_link_result(formatter, result)
        return EXIT_OK if result.success else EXIT_ERROR

    except Exception as e:
        return formatter.fail(e)


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    exit(main(parsed))
