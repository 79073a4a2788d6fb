"""Dev package data models.

Provides immutable dataclasses for discovered packages and cycle results.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEV_CONSTRAINT = "@dev"


@dataclass(frozen=True, slots=True)
class PackageRecord:
    """A locally checked-out package.

    Attributes:
        name: Package name declared in the package manifest
        path: Package directory (manifest file name stripped)
    """

    name: str
    path: Path

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"name": self.name, "path": str(self.path)}


@dataclass(frozen=True, slots=True)
class RepositoryDescriptor:
    """A path repository entry for the root manifest.

    Attributes:
        url: Package directory relative to the project root (posix form)
        symlink: Whether the resolver should symlink instead of copy
    """

    url: str
    type: str = "path"
    symlink: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the manifest representation."""
        return {
            "type": self.type,
            "url": self.url,
            "options": {
                "symlink": self.symlink,
            },
        }


@dataclass(frozen=True, slots=True)
class ProcessOutput:
    """Captured result of a subprocess run.

    Attributes:
        exit_code: Process exit status
        stdout: Captured standard output
        stderr: Captured standard error
    """

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True, slots=True)
class LinkResult:
    """Result of a post-resolve link cycle.

    Attributes:
        status: 'skipped' (nothing discovered), 'linked' or 'failed'
        packages: Names of the packages passed to the resolver
        command: Resolver command line
        exit_code: Resolver exit status
        error_output: Captured resolver error output on failure
    """

    status: str
    packages: tuple[str, ...] = ()
    command: tuple[str, ...] = ()
    exit_code: int | None = None
    error_output: str | None = None

    @property
    def success(self) -> bool:
        return self.status != "failed"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "status": self.status,
            "packages": list(self.packages),
            "command": list(self.command),
            "exit_code": self.exit_code,
            "error_output": self.error_output,
        }


@dataclass(frozen=True, slots=True)
class CleanupResult:
    """Result of removing stale vendor links.

    Attributes:
        removed: Vendor paths whose symlink was removed
        skipped: Vendor paths that exist but are not symlinks
    """

    removed: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"removed": list(self.removed), "skipped": list(self.skipped)}


LINK_STATUSES = ("linked", "installed", "missing")


__all__ = [
    "DEV_CONSTRAINT",
    "PackageRecord",
    "RepositoryDescriptor",
    "ProcessOutput",
    "LinkResult",
    "CleanupResult",
    "LINK_STATUSES",
]
