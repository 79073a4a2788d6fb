"""Host runtime boundary.

What the dependency manager hands to devlink: the project location, its
resolved configuration, a process executor and a channel for user-visible
messages.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Protocol, TextIO

from devlink.core.packages.config import DevPackagesConfig
from devlink.core.packages.resolver import ProcessExecutor, SubprocessExecutor


class HostIO(Protocol):
    """User-visible message channel of the host."""

    def write_error(self, message: str) -> None:
        """Write an informational message to the error stream."""

    def error(self, message: str) -> None:
        """Report an error to the user."""


class ConsoleIO:
    """HostIO writing to a text stream (stderr by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def write_error(self, message: str) -> None:
        print(message, file=self.stream)

    def error(self, message: str) -> None:
        rule = "=" * min(80, max((len(line) for line in message.splitlines()), default=0))
        print(rule, file=self.stream)
        print(message, file=self.stream)
        print(rule, file=self.stream)


class NullIO:
    """HostIO that discards every message."""

    def write_error(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass


@dataclass
class HostContext:
    """Everything the host supplies to the plugin.

    Attributes:
        working_dir: Project root
        vendor_dir: Installation target directory, None to read it from
            the manifest
        extra: Manifest ``extra`` block, None to read it from the manifest
        executor: Process executor, None for a subprocess-backed one
        io: Message channel
    """

    working_dir: Path
    vendor_dir: Path | None = None
    extra: Mapping[str, Any] | None = None
    executor: ProcessExecutor | None = None
    io: HostIO = field(default_factory=ConsoleIO)

    def build_config(self) -> DevPackagesConfig:
        return DevPackagesConfig(self.working_dir, extra=self.extra, vendor_dir=self.vendor_dir)

    def build_executor(self, config: DevPackagesConfig) -> ProcessExecutor:
        if self.executor is not None:
            return self.executor
        return SubprocessExecutor(timeout=config.get_resolver_timeout())


__all__ = ["HostIO", "ConsoleIO", "NullIO", "HostContext"]
