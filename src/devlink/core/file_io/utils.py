"""File I/O utilities for devlink core.

Single source of truth for file access patterns:
- Byte-exact reads that fail fast with the offending path
- Atomic writes with fsync and permission preservation
- JSON helpers producing Composer-style manifests
"""
from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

from devlink.core.exceptions import FileReadError, FileWriteError, JsonFormatError

PathLike = Union[str, Path]

JSON_INDENT = 4


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory for ``path`` exists."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def _atomic_write(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` atomically using a temp file + fsync + rename.

    - A symlinked target is written through: the link stays, its target
      is replaced
    - Data is written to a temporary file next to the real target
    - The temp file takes over the permission bits of an existing target
    - File is fsync'd, then atomically replaced
    - Any leftover temp file is cleaned up on failure
    """
    path = Path(os.path.realpath(path))
    ensure_parent_dir(path)

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "wb",
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

        if path.exists():
            os.chmod(tmp_path, stat.S_IMODE(path.stat().st_mode))

        os.replace(str(tmp_path), str(path))
        tmp_path = None
    finally:
        if tmp_path is not None and tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                # Best-effort cleanup; the original error is more useful
                pass


def read_bytes(path: PathLike) -> bytes:
    """Read the full content of ``path``.

    Raises:
        FileReadError: If the file is missing or cannot be read
    """
    path = Path(path)
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileReadError(f"Could not read '{path}': {e.strerror or e}", path=path) from e


def write_bytes(path: PathLike, data: bytes) -> None:
    """Atomically replace the content of ``path`` with ``data``.

    Raises:
        FileWriteError: If the file cannot be written
    """
    path = Path(path)
    try:
        _atomic_write(path, data)
    except OSError as e:
        raise FileWriteError(f"Could not write '{path}': {e.strerror or e}", path=path) from e


def read_text(path: PathLike) -> str:
    """Read a UTF-8 text file."""
    path = Path(path)
    data = read_bytes(path)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FileReadError(f"Could not decode '{path}' as UTF-8", path=path) from e


def write_text(path: PathLike, content: str) -> None:
    """Atomically write UTF-8 text to ``path``."""
    write_bytes(path, content.encode("utf-8"))


def parse_json(content: str | bytes, *, path: PathLike | None = None) -> Any:
    """Parse JSON ``content``; ``path`` only labels the error."""
    try:
        return json.loads(content)
    except (ValueError, UnicodeDecodeError) as e:
        label = str(path) if path is not None else "<string>"
        raise JsonFormatError(f"Invalid JSON in '{label}': {e}", path=path) from e


def read_json(path: PathLike) -> Any:
    """Read and parse a JSON file.

    Raises:
        FileReadError: If the file cannot be read
        JsonFormatError: If the content is not valid JSON
    """
    return parse_json(read_bytes(path), path=path)


def dump_json(data: Any, *, indent: int = JSON_INDENT) -> str:
    """Serialize ``data`` the way Composer writes its manifests.

    Pretty-printed, slashes unescaped, non-ASCII kept verbatim and key order
    preserved.
    """
    return json.dumps(data, indent=indent, ensure_ascii=False) + "\n"


def write_json(path: PathLike, data: Any, *, indent: int = JSON_INDENT) -> None:
    """Atomically write ``data`` as JSON to ``path``."""
    write_text(path, dump_json(data, indent=indent))


__all__ = [
    "PathLike",
    "JSON_INDENT",
    "ensure_parent_dir",
    "read_bytes",
    "write_bytes",
    "read_text",
    "write_text",
    "parse_json",
    "read_json",
    "dump_json",
    "write_json",
]
