"""External resolver invocation.

Builds the Composer update command restricted to the local packages and runs
it through a :class:`ProcessExecutor`.
"""
from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, Sequence

from devlink.core.packages.config import DEFAULT_RESOLVER_BINARY, DEFAULT_RESOLVER_TIMEOUT
from devlink.core.packages.models import ProcessOutput

logger = logging.getLogger(__name__)

EXIT_TIMEOUT = 124
EXIT_NOT_FOUND = 127


class ProcessExecutor(Protocol):
    """Runs a command and captures its result."""

    def execute(self, command: Sequence[str], *, cwd: Path | None = None) -> ProcessOutput: ...


class SubprocessExecutor:
    """Executor backed by :func:`subprocess.run`.

    A missing binary or a timeout is reported as a failed run (exit codes
    127 and 124) rather than raised. Output is decoded as UTF-8 with
    undecodable bytes replaced.
    """

    def __init__(self, timeout: float | None = DEFAULT_RESOLVER_TIMEOUT) -> None:
        self.timeout = timeout

    def execute(self, command: Sequence[str], *, cwd: Path | None = None) -> ProcessOutput:
        argv = [str(part) for part in command]
        logger.debug("Running %s", shlex.join(argv))
        try:
            result = subprocess.run(
                argv,
                cwd=cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            return ProcessOutput(exit_code=EXIT_NOT_FOUND, stderr=f"{argv[0]}: command not found ({e})")
        except subprocess.TimeoutExpired as e:
            stdout = e.stdout.decode("utf-8", errors="replace") if isinstance(e.stdout, bytes) else (e.stdout or "")
            stderr = e.stderr.decode("utf-8", errors="replace") if isinstance(e.stderr, bytes) else (e.stderr or "")
            return ProcessOutput(
                exit_code=EXIT_TIMEOUT,
                stdout=stdout,
                stderr=f"{stderr}\n{argv[0]} timed out after {self.timeout}s".lstrip(),
            )
        return ProcessOutput(exit_code=result.returncode, stdout=result.stdout, stderr=result.stderr)


@dataclass(frozen=True)
class ResolverCommand:
    """Update command restricted to a package set.

    Attributes:
        working_dir: Project root the resolver operates on
        packages: Package names to update
        binary: Resolver executable
        extra_args: Additional arguments appended after the package names
    """

    working_dir: Path
    packages: tuple[str, ...]
    binary: str = DEFAULT_RESOLVER_BINARY
    extra_args: tuple[str, ...] = field(default_factory=tuple)

    def argv(self) -> list[str]:
        return [
            self.binary,
            "--no-plugins",
            "--no-scripts",
            f"--working-dir={self.working_dir}",
            "update",
            "--no-audit",
            *self.packages,
            *self.extra_args,
        ]

    def command_line(self) -> str:
        """Shell-quoted form, for display."""
        return shlex.join(self.argv())

    def run(self, executor: ProcessExecutor) -> ProcessOutput:
        return executor.execute(self.argv(), cwd=self.working_dir)


__all__ = [
    "ProcessExecutor",
    "SubprocessExecutor",
    "ResolverCommand",
    "EXIT_TIMEOUT",
    "EXIT_NOT_FOUND",
]
