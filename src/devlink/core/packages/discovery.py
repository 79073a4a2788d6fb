"""Dev package discovery.

Scans the configured package directory for immediate child directories
carrying their own manifest and indexes them by declared package name.
Hidden (dot) directories are ignored.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

from devlink.core.exceptions import FileAccessError
from devlink.core.file_io import read_json
from devlink.core.packages.config import DEFAULT_MANIFEST
from devlink.core.packages.exceptions import DiscoveryError
from devlink.core.packages.models import PackageRecord

logger = logging.getLogger(__name__)


class PackageDiscovery:
    """Discovers local packages under ``repo_root / package_dir``.

    The index is computed on first use and reused by every later call on
    the same instance. Create a new instance per invocation.
    """

    def __init__(
        self,
        repo_root: Path,
        package_dir: str,
        *,
        manifest_name: str = DEFAULT_MANIFEST,
    ) -> None:
        """Initialize discovery.

        Args:
            repo_root: Path to project root
            package_dir: Package directory relative to the project root
            manifest_name: File name of a package manifest
        """
        self.repo_root = Path(repo_root)
        self.package_dir = package_dir.rstrip("/" + os.sep)
        self.manifest_name = manifest_name
        self._index: dict[str, Path] | None = None

    @property
    def search_root(self) -> Path:
        return self.repo_root / self.package_dir

    def discover(self) -> dict[str, Path]:
        """Return the package path index (name -> package directory).

        Raises:
            DiscoveryError: If the package directory cannot be scanned or a
                candidate manifest is unreadable or declares no name
        """
        if self._index is None:
            self._index = self._scan()
        return self._index

    def records(self) -> list[PackageRecord]:
        """Discovered packages sorted by name."""
        return [PackageRecord(name=name, path=path) for name, path in sorted(self.discover().items())]

    def _scan(self) -> dict[str, Path]:
        index: dict[str, Path] = {}
        for manifest_path in self._candidate_manifests():
            name = self._read_name(manifest_path)
            package_path = manifest_path.parent
            previous = index.get(name)
            if previous is not None:
                logger.warning(
                    "Package %s is declared by both %s and %s; using %s",
                    name,
                    previous,
                    package_path,
                    package_path,
                )
            index[name] = package_path

        logger.debug("Discovered %d dev package(s) under %s", len(index), self.search_root)
        return index

    def _candidate_manifests(self) -> list[Path]:
        root = self.search_root
        if not root.exists() and not root.is_symlink():
            return []

        try:
            children = sorted(root.iterdir())
        except OSError as e:
            raise DiscoveryError(
                f"Could not search for packages in {root}: {e.strerror or e}",
                context={"path": str(root)},
            ) from e

        manifests: list[Path] = []
        for child in children:
            if child.name.startswith(".") or not child.is_dir():
                continue
            candidate = child / self.manifest_name
            if candidate.is_file():
                manifests.append(candidate)
        return manifests

    def _read_name(self, manifest_path: Path) -> str:
        try:
            data = read_json(manifest_path)
        except FileAccessError as e:
            raise DiscoveryError(str(e), context={"path": str(manifest_path)}) from e

        if not isinstance(data, dict):
            raise DiscoveryError(
                f"{manifest_path} does not contain a JSON object",
                context={"path": str(manifest_path)},
            )

        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise DiscoveryError(
                f"{manifest_path} has no name attribute",
                context={"path": str(manifest_path)},
            )
        return name


__all__ = ["PackageDiscovery"]
