"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path

from devlink.core.packages.config import DEFAULT_MANIFEST, DevPackagesConfig
from devlink.core.packages.host import ConsoleIO, HostIO
from devlink.core.packages.linker import DevPackageLinker
from devlink.core.stdlib_logging import configure_logging

PROJECT_MARKERS = (DEFAULT_MANIFEST, ".devlink/config.yaml")


def resolve_project_root(start: Path | None = None) -> Path:
    """Nearest directory at or above ``start`` that looks like a project root.

    A root holds ``composer.json`` or a ``.devlink/config.yaml``; projects
    whose manifest has another name are found through the config file.
    Falls back to ``start`` (the current directory by default).
    """
    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if any((candidate / marker).is_file() for marker in PROJECT_MARKERS):
            return candidate
    return current


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get project root from args or auto-detect."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).resolve()
    return resolve_project_root()


def load_config(args: argparse.Namespace) -> DevPackagesConfig:
    """Load project config and apply its logging settings.

    ``--verbose`` forces DEBUG regardless of the configured level.
    """
    config = DevPackagesConfig(get_repo_root(args))
    level = "DEBUG" if getattr(args, "verbose", False) else config.get_log_level()
    configure_logging(level=level, log_path=config.get_log_file())
    return config


def build_linker(args: argparse.Namespace, io: HostIO | None = None) -> DevPackageLinker:
    """Create a linker for the project selected by ``args``."""
    config = load_config(args)
    return DevPackageLinker(config.repo_root, config=config, io=io or ConsoleIO())


__all__ = [
    "PROJECT_MARKERS",
    "resolve_project_root",
    "get_repo_root",
    "load_config",
    "build_linker",
]
