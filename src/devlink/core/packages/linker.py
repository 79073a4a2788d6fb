"""Dev package linker.

High-level orchestration of the two lifecycle entry points: vendor link
cleanup before resolution, and the snapshot / mutate / resolve / restore
cycle after it.
"""
from __future__ import annotations

import logging
from pathlib import Path

from devlink.core.file_io import write_text
from devlink.core.packages.config import DevPackagesConfig
from devlink.core.packages.discovery import PackageDiscovery
from devlink.core.packages.host import HostIO, NullIO
from devlink.core.packages.links import remove_local_package_links
from devlink.core.packages.manifest import ManifestDocument
from devlink.core.packages.models import CleanupResult, LinkResult
from devlink.core.packages.mutator import apply_local_packages
from devlink.core.packages.resolver import ProcessExecutor, ResolverCommand, SubprocessExecutor
from devlink.core.packages.snapshot import manifest_transaction

logger = logging.getLogger(__name__)


class DevPackageLinker:
    """Links local packages into the project through the resolver.

    One instance serves one invocation: package discovery runs once and is
    shared by both entry points.
    """

    def __init__(
        self,
        repo_root: Path,
        *,
        config: DevPackagesConfig | None = None,
        executor: ProcessExecutor | None = None,
        io: HostIO | None = None,
    ) -> None:
        """Initialize linker.

        Args:
            repo_root: Path to project root
            config: Configuration, loaded from ``repo_root`` if omitted
            executor: Process executor for the resolver
            io: Channel for user-visible messages
        """
        self.repo_root = Path(repo_root)
        self.config = config or DevPackagesConfig(self.repo_root)
        self.executor = executor or SubprocessExecutor(timeout=self.config.get_resolver_timeout())
        self.io: HostIO = io or NullIO()
        self._discovery: PackageDiscovery | None = None

    @property
    def discovery(self) -> PackageDiscovery:
        if self._discovery is None:
            self._discovery = PackageDiscovery(
                self.repo_root,
                self.config.get_package_dir(),
                manifest_name=self.config.manifest_name,
            )
        return self._discovery

    def get_package_paths_by_name(self) -> dict[str, Path]:
        return self.discovery.discover()

    def remove_package_links(self) -> CleanupResult:
        """Remove vendor symlinks of discovered packages (pre-resolve)."""
        index = self.get_package_paths_by_name()
        if not index:
            return CleanupResult()
        return remove_local_package_links(index, self.config.get_vendor_dir())

    def install_local_packages(self) -> LinkResult:
        """Link discovered packages through the resolver (post-resolve).

        The manifest and lockfile are restored to their original bytes
        before this returns or raises.

        Returns:
            LinkResult; a resolver failure is reported, not raised

        Raises:
            DiscoveryError: If discovery fails
            FileReadError: If the snapshot cannot be taken
            ManifestFormatError: If the manifest cannot be mutated
            FileWriteError: If the mutated manifest cannot be written
            RestoreError: If the original content cannot be written back
        """
        index = self.get_package_paths_by_name()
        if not index:
            logger.debug("No dev packages found; nothing to link")
            return LinkResult(status="skipped")

        manifest_path = self.config.manifest_path
        command = ResolverCommand(
            working_dir=self.repo_root,
            packages=tuple(index),
            binary=self.config.get_resolver_binary(),
            extra_args=tuple(self.config.get_resolver_extra_args()),
        )

        with manifest_transaction(manifest_path, self.config.lock_path) as snapshot:
            doc = ManifestDocument.parse(snapshot.manifest, path=manifest_path)
            apply_local_packages(doc, index, self.repo_root)
            write_text(manifest_path, doc.dumps())
            logger.debug("Wrote %s with %d path repositories", manifest_path, len(index))
            return self._update_packages(command)

    def _update_packages(self, command: ResolverCommand) -> LinkResult:
        package_list = " ".join(command.packages)
        self.io.write_error(f"Linking dev packages: {package_list}")
        logger.info("Running %s", command.command_line())

        output = command.run(self.executor)
        if output.success:
            return LinkResult(
                status="linked",
                packages=command.packages,
                command=tuple(command.argv()),
                exit_code=output.exit_code,
            )

        logger.error("Resolver exited with %d: %s", output.exit_code, output.stderr.strip())
        self.io.error(f"Could not link dev packages:\n{output.stderr}")
        return LinkResult(
            status="failed",
            packages=command.packages,
            command=tuple(command.argv()),
            exit_code=output.exit_code,
            error_output=output.stderr,
        )


__all__ = ["DevPackageLinker"]
