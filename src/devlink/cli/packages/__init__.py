"""devlink packages CLI commands.

Provides CLI interface for local package management:
- list: List discovered local packages
- link: Link local packages through the resolver
- unlink: Remove vendor symlinks of local packages
"""
from __future__ import annotations

SUBCOMMANDS = {
    "list": "devlink.cli.packages.list",
    "link": "devlink.cli.packages.link",
    "unlink": "devlink.cli.packages.unlink",
}

__all__ = ["SUBCOMMANDS"]
