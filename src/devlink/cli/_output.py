"""Command output for the devlink CLI.

Results go to stdout, as text or as one JSON document. Failures go to
stderr and map to the process exit code.
"""
from __future__ import annotations

import json
import sys
from typing import Any

from devlink.core.exceptions import DevlinkError
from devlink.core.packages.exceptions import RestoreError

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_RESTORE_FAILED = 2


def error_code_for(error: BaseException) -> tuple[str, int]:
    """JSON error code and process exit code for ``error``."""
    if isinstance(error, RestoreError):
        return "restore_error", EXIT_RESTORE_FAILED
    if isinstance(error, DevlinkError):
        return "devlink_error", EXIT_ERROR
    return "internal_error", EXIT_ERROR


def restore_hint(error: RestoreError) -> str:
    paths = ", ".join(error.context.get("paths", [])) or "the manifest and lockfile"
    return f"Check {paths} against version control: the content may differ from before the run."


class OutputFormatter:
    """Writes command results in text or JSON mode."""

    def __init__(self, json_mode: bool = False) -> None:
        self.json_mode = json_mode

    def json_output(self, data: Any) -> None:
        print(json.dumps(data, indent=2, default=str))

    def text(self, message: str) -> None:
        print(message)

    def fail(self, error: BaseException) -> int:
        """Report ``error`` on stderr and return the exit code to use.

        JSON mode prints ``{"error", "message", "context"}``; a restore
        failure adds a ``hint`` naming the files left behind.
        """
        code, exit_code = error_code_for(error)
        context = error.context if isinstance(error, DevlinkError) else {}
        hint = restore_hint(error) if isinstance(error, RestoreError) else None

        if self.json_mode:
            payload: dict[str, Any] = {"error": code, "message": str(error), "context": context}
            if hint:
                payload["hint"] = hint
            print(json.dumps(payload, indent=2, default=str), file=sys.stderr)
        else:
            print(f"Error: {error}", file=sys.stderr)
            if hint:
                print(hint, file=sys.stderr)
        return exit_code


__all__ = [
    "OutputFormatter",
    "error_code_for",
    "restore_hint",
    "EXIT_OK",
    "EXIT_ERROR",
    "EXIT_RESTORE_FAILED",
]
