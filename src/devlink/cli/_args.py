"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --repo-root flag for project root override.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override project root path (default: nearest directory with composer.json)",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add --json and --repo-root."""
    add_json_flag(parser)
    add_repo_root_flag(parser)


__all__ = ["add_json_flag", "add_repo_root_flag", "add_verbose_flag", "add_standard_flags"]
