"""
devlink data resource helpers.

Provides access to bundled schemas using importlib.resources.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Get absolute path to a data file or directory.

    Args:
        subpackage: Name of the data subpackage (e.g., "schemas")
        filename: Optional filename within the subpackage

    Returns:
        Absolute path to the file or directory
    """
    pkg = resources.files("devlink.data")
    base = Path(str(pkg / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=16)
def read_yaml(subpackage: str, filename: str) -> dict[str, Any]:
    """
    Read and parse a YAML data file (cached).

    Args:
        subpackage: Name of the data subpackage
        filename: YAML filename

    Returns:
        Parsed YAML content as dictionary
    """
    path = get_data_path(subpackage, filename)
    return yaml.safe_load(path.read_text(encoding="utf-8"))


__all__ = ["get_data_path", "read_yaml"]
