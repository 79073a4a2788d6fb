"""Root manifest mutations for local packages.

Structural edits only: nothing here reads or writes files.
"""
from __future__ import annotations

import os
from pathlib import Path, PurePosixPath
from typing import Mapping

from devlink.core.packages.exceptions import PackagePathError
from devlink.core.packages.manifest import ManifestDocument
from devlink.core.packages.models import DEV_CONSTRAINT, RepositoryDescriptor


def relative_package_url(package_path: Path, project_root: Path) -> str:
    """Return ``package_path`` relative to ``project_root`` in posix form.

    Raises:
        PackagePathError: If the package lies outside the project root,
            through ``..`` segments or through symbolic links
    """
    root = Path(os.path.abspath(project_root))
    candidate = Path(os.path.abspath(root / package_path))

    if not candidate.is_relative_to(root) or candidate == root:
        raise PackagePathError(
            f"Package path {package_path} is outside the project root {project_root}",
            context={"path": str(package_path), "root": str(project_root)},
        )
    if not candidate.resolve().is_relative_to(root.resolve()):
        raise PackagePathError(
            f"Package path {package_path} resolves outside the project root {project_root}",
            context={"path": str(package_path), "root": str(project_root)},
        )

    return PurePosixPath(*candidate.relative_to(root).parts).as_posix()


def add_path_repository(doc: ManifestDocument, package_path: Path, project_root: Path) -> None:
    """Prepend a symlinked path repository for ``package_path``."""
    descriptor = RepositoryDescriptor(url=relative_package_url(package_path, project_root))
    doc.ensure_repositories().insert(0, descriptor.to_dict())


def pin_dev_version(doc: ManifestDocument, package_name: str) -> None:
    """Require ``package_name`` at the development version."""
    doc.ensure_require()[package_name] = DEV_CONSTRAINT


def apply_local_packages(
    doc: ManifestDocument,
    index: Mapping[str, Path],
    project_root: Path,
) -> None:
    """Register every package of ``index`` in ``doc``.

    Packages are applied in index order, so the last one ends up first in
    ``repositories``.
    """
    for package_name, package_path in index.items():
        add_path_repository(doc, package_path, project_root)
        pin_dev_version(doc, package_name)


__all__ = [
    "relative_package_url",
    "add_path_repository",
    "pin_dev_version",
    "apply_local_packages",
]
