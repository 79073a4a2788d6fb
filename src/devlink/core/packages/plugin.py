"""Lifecycle plugin.

Binds the linker to the dependency manager's install/update events. The two
pre-resolution events clean stale vendor links, the two post-resolution
events run the link cycle.
"""
from __future__ import annotations

import logging
from typing import Callable

from devlink.core.packages.exceptions import UnknownEventError
from devlink.core.packages.host import HostContext
from devlink.core.packages.linker import DevPackageLinker
from devlink.core.packages.models import CleanupResult, LinkResult

logger = logging.getLogger(__name__)


class ScriptEvents:
    """Lifecycle event names."""

    PRE_INSTALL_CMD = "pre-install-cmd"
    PRE_UPDATE_CMD = "pre-update-cmd"
    POST_INSTALL_CMD = "post-install-cmd"
    POST_UPDATE_CMD = "post-update-cmd"


class DevPackagesPlugin:
    """Event subscriber wiring lifecycle events to a :class:`DevPackageLinker`."""

    def __init__(self) -> None:
        self._linker: DevPackageLinker | None = None

    def activate(self, host: HostContext) -> None:
        """Bind to a host; starts a fresh invocation (and discovery cache)."""
        config = host.build_config()
        self._linker = DevPackageLinker(
            host.working_dir,
            config=config,
            executor=host.build_executor(config),
            io=host.io,
        )

    def deactivate(self, host: HostContext) -> None:
        self._linker = None

    @staticmethod
    def get_subscribed_events() -> dict[str, str]:
        return {
            ScriptEvents.PRE_INSTALL_CMD: "remove_package_vendor_directories",
            ScriptEvents.PRE_UPDATE_CMD: "remove_package_vendor_directories",
            ScriptEvents.POST_INSTALL_CMD: "install_local_packages",
            ScriptEvents.POST_UPDATE_CMD: "install_local_packages",
        }

    @property
    def linker(self) -> DevPackageLinker:
        if self._linker is None:
            raise RuntimeError("Plugin is not active; call activate() first")
        return self._linker

    def remove_package_vendor_directories(self) -> CleanupResult:
        return self.linker.remove_package_links()

    def install_local_packages(self) -> LinkResult:
        return self.linker.install_local_packages()

    def dispatch(self, event: str) -> CleanupResult | LinkResult:
        """Run the handler subscribed to ``event``.

        Raises:
            UnknownEventError: If no handler is subscribed to ``event``
        """
        method_name = self.get_subscribed_events().get(event)
        if method_name is None:
            known = ", ".join(sorted(self.get_subscribed_events()))
            raise UnknownEventError(
                f"No handler for event '{event}' (known events: {known})",
                context={"event": event},
            )
        logger.debug("Dispatching %s to %s", event, method_name)
        handler: Callable[[], CleanupResult | LinkResult] = getattr(self, method_name)
        return handler()


__all__ = ["ScriptEvents", "DevPackagesPlugin"]
