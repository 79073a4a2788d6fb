"""Root manifest model.

Typed access to the manifest fields devlink edits (``repositories`` and
``require``). Every other top-level field is carried through untouched and
the original key order is kept on serialization.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from devlink.core.file_io import dump_json, parse_json
from devlink.core.packages.exceptions import ManifestFormatError

REPOSITORIES = "repositories"
REQUIRE = "require"


@dataclass
class ManifestDocument:
    """In-memory root manifest.

    Attributes:
        repositories: Repository descriptors, None when the field is absent
        require: Package name -> version constraint, None when absent
        passthrough: Every other top-level field, in original order
        key_order: Top-level key order; created fields are appended
    """

    repositories: list[Any] | None = None
    require: dict[str, Any] | None = None
    passthrough: dict[str, Any] = field(default_factory=dict)
    key_order: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, path: Path | None = None) -> ManifestDocument:
        """Create a document from parsed manifest data.

        Raises:
            ManifestFormatError: If ``repositories`` is not a list or
                ``require`` is not an object
        """
        ctx = {"path": str(path)} if path is not None else {}
        label = str(path) if path is not None else "manifest"

        repositories = data.get(REPOSITORIES)
        if REPOSITORIES in data and not isinstance(repositories, list):
            raise ManifestFormatError(f"{label}: '{REPOSITORIES}' must be a list", context=ctx)

        require = data.get(REQUIRE)
        if require == []:
            # PHP encodes an empty map as an empty list
            require = {}
        if REQUIRE in data and not isinstance(require, dict):
            raise ManifestFormatError(f"{label}: '{REQUIRE}' must be an object", context=ctx)

        return cls(
            repositories=list(repositories) if repositories is not None else None,
            require=dict(require) if require is not None else None,
            passthrough={k: v for k, v in data.items() if k not in (REPOSITORIES, REQUIRE)},
            key_order=list(data.keys()),
        )

    @classmethod
    def parse(cls, content: str | bytes, *, path: Path | None = None) -> ManifestDocument:
        """Parse manifest JSON content."""
        data = parse_json(content, path=path)
        if not isinstance(data, dict):
            label = str(path) if path is not None else "manifest"
            raise ManifestFormatError(
                f"{label} does not contain a JSON object",
                context={"path": str(path)} if path is not None else {},
            )
        return cls.from_dict(data, path=path)

    def ensure_repositories(self) -> list[Any]:
        """Return ``repositories``, creating an empty list if absent."""
        if self.repositories is None:
            self.repositories = []
            self._track(REPOSITORIES)
        return self.repositories

    def ensure_require(self) -> dict[str, Any]:
        """Return ``require``, creating an empty mapping if absent."""
        if self.require is None:
            self.require = {}
            self._track(REQUIRE)
        return self.require

    def _track(self, key: str) -> None:
        if key not in self.key_order:
            self.key_order.append(key)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to manifest data in the tracked key order."""
        result: dict[str, Any] = {}
        for key in self.key_order:
            if key == REPOSITORIES:
                if self.repositories is not None:
                    result[key] = self.repositories
            elif key == REQUIRE:
                if self.require is not None:
                    result[key] = self.require
            elif key in self.passthrough:
                result[key] = self.passthrough[key]
        for key, value in self.passthrough.items():
            result.setdefault(key, value)
        return result

    def dumps(self) -> str:
        """Serialize to pretty-printed manifest JSON."""
        return dump_json(self.to_dict())


__all__ = ["ManifestDocument"]
