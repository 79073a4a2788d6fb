"""Dev package subsystem exceptions.

Provides custom exceptions for discovery, manifest mutation and restore
so the CLI can map each failure to a distinct message and exit code.
"""
from __future__ import annotations

from devlink.core.exceptions import (
    DevlinkConfigError,
    DevlinkError,
    FileReadError,
    FileWriteError,
    JsonFormatError,
)


class DevPackageError(DevlinkError):
    """Base exception for dev package errors."""


class DiscoveryError(DevPackageError):
    """Raised when the package directory cannot be scanned or a candidate is invalid."""


class ManifestFormatError(DevPackageError):
    """Raised when a manifest has an unexpected structure."""


class PackagePathError(DevPackageError):
    """Raised when a package directory resolves outside the project root."""


class RestoreError(FileWriteError):
    """Raised when the original manifest or lockfile could not be written back.

    On-disk state may differ from the pre-run snapshot when this is raised.
    """


class UnknownEventError(DevPackageError):
    """Raised when a lifecycle event has no subscribed handler."""


__all__ = [
    "DevlinkConfigError",
    "DevPackageError",
    "DiscoveryError",
    "FileReadError",
    "FileWriteError",
    "JsonFormatError",
    "ManifestFormatError",
    "PackagePathError",
    "RestoreError",
    "UnknownEventError",
]
