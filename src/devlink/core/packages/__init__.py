"""devlink dev package subsystem.

Links locally checked-out packages into a project through the resolver and
restores the project's manifest and lockfile afterwards.

Key components:
- DevPackagesConfig: Resolve settings from the manifest and .devlink/config.yaml
- PackageDiscovery: Find local packages and index them by name
- ManifestDocument: Typed root manifest with passthrough of unknown fields
- DevPackageLinker: Run the pre- and post-resolution entry points
- DevPackagesPlugin: Bind the entry points to lifecycle events
"""
from __future__ import annotations

from devlink.core.packages.config import DevPackagesConfig
from devlink.core.packages.discovery import PackageDiscovery
from devlink.core.packages.exceptions import (
    DevPackageError,
    DiscoveryError,
    ManifestFormatError,
    PackagePathError,
    RestoreError,
    UnknownEventError,
)
from devlink.core.packages.host import ConsoleIO, HostContext, HostIO, NullIO
from devlink.core.packages.linker import DevPackageLinker
from devlink.core.packages.links import link_status, remove_local_package_links
from devlink.core.packages.manifest import ManifestDocument
from devlink.core.packages.models import (
    CleanupResult,
    LinkResult,
    PackageRecord,
    ProcessOutput,
    RepositoryDescriptor,
)
from devlink.core.packages.mutator import add_path_repository, apply_local_packages, pin_dev_version
from devlink.core.packages.plugin import DevPackagesPlugin, ScriptEvents
from devlink.core.packages.resolver import ProcessExecutor, ResolverCommand, SubprocessExecutor
from devlink.core.packages.snapshot import ManifestSnapshot, manifest_transaction

__all__ = [
    # Config
    "DevPackagesConfig",
    # Discovery
    "PackageDiscovery",
    # Manifest
    "ManifestDocument",
    "add_path_repository",
    "pin_dev_version",
    "apply_local_packages",
    # Snapshot
    "ManifestSnapshot",
    "manifest_transaction",
    # Resolver
    "ProcessExecutor",
    "SubprocessExecutor",
    "ResolverCommand",
    # Links
    "remove_local_package_links",
    "link_status",
    # Orchestration
    "DevPackageLinker",
    "DevPackagesPlugin",
    "ScriptEvents",
    "HostContext",
    "HostIO",
    "ConsoleIO",
    "NullIO",
    # Models
    "PackageRecord",
    "RepositoryDescriptor",
    "ProcessOutput",
    "LinkResult",
    "CleanupResult",
    # Exceptions
    "DevPackageError",
    "DiscoveryError",
    "ManifestFormatError",
    "PackagePathError",
    "RestoreError",
    "UnknownEventError",
]
