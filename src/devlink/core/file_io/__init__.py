"""
IO utilities package for devlink core.

Re-exports the byte-exact read and atomic write helpers used for
manifest snapshots and restores.
"""
from __future__ import annotations

from . import utils
from .utils import (
    dump_json,
    parse_json,
    read_bytes,
    read_json,
    read_text,
    write_bytes,
    write_json,
    write_text,
)

__all__ = [
    "utils",
    "dump_json",
    "parse_json",
    "read_bytes",
    "read_json",
    "read_text",
    "write_bytes",
    "write_json",
    "write_text",
]
