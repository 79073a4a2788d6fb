"""Vendor link maintenance.

Removes symlinks left in the vendor directory by a previous link cycle so
the resolver starts from a clean state.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from devlink.core.exceptions import FileWriteError
from devlink.core.packages.models import CleanupResult

logger = logging.getLogger(__name__)


def _vendor_entry(vendor_dir: Path, package_name: str) -> Path | None:
    """Return ``vendor_dir / package_name`` or None if it escapes ``vendor_dir``."""
    base = os.path.normpath(os.path.abspath(vendor_dir))
    target = os.path.normpath(os.path.join(base, package_name))
    if os.path.commonpath([base, target]) != base or target == base:
        return None
    return Path(target)


def remove_local_package_links(index: Mapping[str, Path], vendor_dir: Path) -> CleanupResult:
    """Remove vendor symlinks of the indexed packages.

    Only symbolic links are removed; real directories and files are left
    untouched.

    Args:
        index: Package name -> package directory
        vendor_dir: Installation target directory

    Returns:
        CleanupResult listing removed links and skipped real entries

    Raises:
        FileWriteError: If a link cannot be removed
    """
    removed: list[str] = []
    skipped: list[str] = []

    for package_name in index:
        entry = _vendor_entry(vendor_dir, package_name)
        if entry is None:
            logger.warning("Skipping package %s: vendor path escapes %s", package_name, vendor_dir)
            continue

        if entry.is_symlink():
            try:
                entry.unlink()
            except OSError as e:
                raise FileWriteError(
                    f"Could not remove vendor link '{entry}': {e.strerror or e}",
                    path=entry,
                    context={"package": package_name},
                ) from e
            logger.info("Removed vendor link %s", entry)
            removed.append(str(entry))
        elif entry.exists():
            logger.debug("Leaving %s in place: not a symlink", entry)
            skipped.append(str(entry))

    return CleanupResult(removed=tuple(removed), skipped=tuple(skipped))


def link_status(index: Mapping[str, Path], vendor_dir: Path) -> dict[str, str]:
    """Vendor state of each indexed package: 'linked', 'installed' or 'missing'."""
    statuses: dict[str, str] = {}
    for package_name in index:
        entry = _vendor_entry(vendor_dir, package_name)
        if entry is not None and entry.is_symlink():
            statuses[package_name] = "linked"
        elif entry is not None and entry.exists():
            statuses[package_name] = "installed"
        else:
            statuses[package_name] = "missing"
    return statuses


__all__ = ["remove_local_package_links", "link_status"]
