"""devlink hooks CLI commands.

Entry points for the dependency manager's scripts block:
- run: Dispatch a lifecycle event
"""
from __future__ import annotations

SUBCOMMANDS = {
    "run": "devlink.cli.hooks.run",
}

__all__ = ["SUBCOMMANDS"]
