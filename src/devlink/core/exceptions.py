from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping


class DevlinkError(Exception):
    """Base exception for devlink."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class DevlinkConfigError(DevlinkError):
    """Raised when devlink configuration is invalid."""


class FileAccessError(DevlinkError):
    """Raised when a file cannot be read, written or decoded."""

    def __init__(
        self,
        message: str = "",
        *,
        path: Path | str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if path is not None:
            ctx.setdefault("path", str(path))
        super().__init__(message, context=ctx)
        self.path = Path(path) if path is not None else None


class FileReadError(FileAccessError):
    """Raised when a file cannot be read."""


class FileWriteError(FileAccessError):
    """Raised when a file cannot be written."""


class JsonFormatError(FileAccessError):
    """Raised when a file does not contain valid JSON."""


__all__ = [
    "DevlinkError",
    "DevlinkConfigError",
    "FileAccessError",
    "FileReadError",
    "FileWriteError",
    "JsonFormatError",
]
