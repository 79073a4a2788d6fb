"""Manifest snapshot and restore.

The root manifest and lockfile are captured byte-for-byte before they are
touched and written back when the surrounding transaction exits, however it
exits.
"""
from __future__ import annotations

import logging
import signal
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

from devlink.core.exceptions import FileWriteError
from devlink.core.file_io import read_bytes, write_bytes
from devlink.core.packages.exceptions import RestoreError

logger = logging.getLogger(__name__)

_TRAPPED_SIGNALS = ("SIGTERM", "SIGHUP")


@dataclass(frozen=True, slots=True)
class ManifestSnapshot:
    """Original content of the root manifest and lockfile.

    Attributes:
        manifest_path: Root manifest path
        manifest: Manifest bytes at capture time
        lock_path: Lockfile path
        lock: Lockfile bytes at capture time
    """

    manifest_path: Path
    manifest: bytes
    lock_path: Path
    lock: bytes

    @classmethod
    def capture(cls, manifest_path: Path, lock_path: Path) -> ManifestSnapshot:
        """Read both files.

        Raises:
            FileReadError: If either file cannot be read
        """
        return cls(
            manifest_path=manifest_path,
            manifest=read_bytes(manifest_path),
            lock_path=lock_path,
            lock=read_bytes(lock_path),
        )

    def restore(self) -> None:
        """Write both files back.

        Both writes are attempted even if the first one fails.

        Raises:
            RestoreError: If either file could not be written
        """
        failures: list[FileWriteError] = []
        for path, content in ((self.manifest_path, self.manifest), (self.lock_path, self.lock)):
            try:
                write_bytes(path, content)
            except FileWriteError as e:
                logger.error("Failed to restore %s: %s", path, e)
                failures.append(e)

        if failures:
            paths = [str(f.path) for f in failures]
            raise RestoreError(
                "Could not restore original content of "
                + ", ".join(paths)
                + "; files may differ from their state before the run",
                path=failures[0].path,
                context={"paths": paths},
            ) from failures[0]

        logger.debug("Restored %s and %s", self.manifest_path, self.lock_path)


def _raise_system_exit(signum: int, frame: Any) -> None:
    raise SystemExit(128 + signum)


@contextmanager
def trap_termination() -> Iterator[None]:
    """Turn SIGTERM/SIGHUP into ``SystemExit`` while the block runs.

    Signal handlers can only be installed from the main thread; elsewhere
    this is a no-op.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous: dict[int, Any] = {}
    for name in _TRAPPED_SIGNALS:
        signum = getattr(signal, name, None)
        if signum is None:
            continue
        previous[signum] = signal.signal(signum, _raise_system_exit)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


@contextmanager
def manifest_transaction(manifest_path: Path, lock_path: Path) -> Iterator[ManifestSnapshot]:
    """Snapshot manifest and lockfile, restore them on exit.

    The snapshot is taken before the block runs; restore runs exactly once
    when the block exits, whether it returned, raised or was interrupted.

    Raises:
        FileReadError: If the snapshot cannot be taken (nothing is restored)
        RestoreError: If the restore fails
    """
    snapshot = ManifestSnapshot.capture(manifest_path, lock_path)
    with trap_termination():
        try:
            yield snapshot
        finally:
            snapshot.restore()


__all__ = ["ManifestSnapshot", "manifest_transaction", "trap_termination"]
