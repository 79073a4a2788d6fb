"""Dev package configuration loading.

Settings are resolved from, highest priority first:

1. The root manifest ``extra.devlink`` block (``package-dir``) and Composer's
   own ``config.vendor-dir``
2. The optional project file ``.devlink/config.yaml``
3. Built-in defaults
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

from devlink.core.exceptions import DevlinkConfigError
from devlink.core.file_io import read_json

EXTRA_NAMESPACE = "devlink"
DEFAULT_PACKAGE_DIR = "dev-packages"
DEFAULT_VENDOR_DIR = "vendor"
DEFAULT_MANIFEST = "composer.json"
DEFAULT_LOCKFILE = "composer.lock"
DEFAULT_RESOLVER_BINARY = "composer"
DEFAULT_RESOLVER_TIMEOUT = 600.0
DEFAULT_LOG_LEVEL = "WARNING"


class DevPackagesConfig:
    """Load and access dev package configuration.

    ``extra`` and ``vendor_dir`` are host-supplied overrides; when omitted
    they are read from the root manifest.
    """

    def __init__(
        self,
        repo_root: Path,
        *,
        extra: Mapping[str, Any] | None = None,
        vendor_dir: Path | str | None = None,
    ) -> None:
        """Initialize dev package config.

        Args:
            repo_root: Path to the project root
            extra: Host-supplied manifest ``extra`` block
            vendor_dir: Host-supplied installation target directory
        """
        self.repo_root = Path(repo_root)
        self._extra = dict(extra) if extra is not None else None
        self._vendor_dir = vendor_dir
        self._config: dict[str, Any] | None = None
        self._manifest: dict[str, Any] | None = None

    @property
    def config_path(self) -> Path:
        """Path to the project config file."""
        return self.repo_root / ".devlink" / "config.yaml"

    def _load(self) -> dict[str, Any]:
        """Load and validate the project config file.

        Returns:
            The ``devlink`` section, empty if the file doesn't exist
        """
        if self._config is not None:
            return self._config

        if not self.config_path.exists():
            self._config = {}
            return self._config

        import yaml

        try:
            content = self.config_path.read_text(encoding="utf-8")
            data = yaml.safe_load(content) or {}
        except (OSError, yaml.YAMLError) as e:
            raise DevlinkConfigError(
                f"Could not load {self.config_path}: {e}",
                context={"path": str(self.config_path)},
            ) from e

        self._validate(data)
        self._config = data.get("devlink") or {}
        return self._config

    def _validate(self, data: Any) -> None:
        from jsonschema import Draft202012Validator

        from devlink.data import read_yaml

        schema = read_yaml("schemas", "config.schema.yaml")
        validator = Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
        if errors:
            details = []
            for error in errors:
                location = ".".join(str(p) for p in error.absolute_path) or "<root>"
                details.append(f"{location}: {error.message}")
            raise DevlinkConfigError(
                f"Invalid configuration in {self.config_path}: " + "; ".join(details),
                context={"path": str(self.config_path), "errors": details},
            )

    def _load_manifest(self) -> dict[str, Any]:
        """Root manifest content, empty if it doesn't exist yet."""
        if self._manifest is not None:
            return self._manifest

        if not self.manifest_path.exists():
            self._manifest = {}
            return self._manifest

        data = read_json(self.manifest_path)
        self._manifest = data if isinstance(data, dict) else {}
        return self._manifest

    @property
    def extra(self) -> dict[str, Any]:
        """The manifest ``extra`` block."""
        if self._extra is not None:
            return self._extra
        extra = self._load_manifest().get("extra")
        return extra if isinstance(extra, dict) else {}

    @property
    def manifest_name(self) -> str:
        return str(self._load().get("manifest", DEFAULT_MANIFEST))

    @property
    def lockfile_name(self) -> str:
        return str(self._load().get("lockfile", DEFAULT_LOCKFILE))

    @property
    def manifest_path(self) -> Path:
        return self.repo_root / self.manifest_name

    @property
    def lock_path(self) -> Path:
        return self.repo_root / self.lockfile_name

    def get_package_dir(self) -> str:
        """Get the configured package directory, relative to the project root.

        Returns:
            Package directory with trailing separators removed

        Raises:
            DevlinkConfigError: If the directory is empty, absolute or escapes
                the project root
        """
        namespaced = self.extra.get(EXTRA_NAMESPACE)
        value: Any = None
        if isinstance(namespaced, dict):
            value = namespaced.get("package-dir")
        if value is None:
            value = self._load().get("packageDir", DEFAULT_PACKAGE_DIR)
        if not isinstance(value, str):
            raise DevlinkConfigError(
                f"Package directory must be a string, got {type(value).__name__}",
                context={"value": value},
            )

        package_dir = value.rstrip("/" + os.sep)
        if not package_dir or package_dir == ".":
            raise DevlinkConfigError(
                f"Package directory '{value}' must name a subdirectory of the project root.",
                context={"value": value},
            )
        if Path(package_dir).is_absolute() or package_dir.startswith("~"):
            raise DevlinkConfigError(
                f"Package directory '{value}' must be relative to the project root.",
                context={"value": value},
            )
        normalized = os.path.normpath(package_dir)
        if normalized == ".." or normalized.startswith(".." + os.sep):
            raise DevlinkConfigError(
                f"Package directory '{value}' escapes the project root.",
                context={"value": value},
            )
        return package_dir

    def get_vendor_dir(self) -> Path:
        """Get the installation target directory.

        Relative values are resolved against the project root.
        """
        raw: Any = self._vendor_dir
        if raw is None:
            composer_config = self._load_manifest().get("config")
            if isinstance(composer_config, dict):
                raw = composer_config.get("vendor-dir")
        if raw is None:
            raw = self._load().get("vendorDir", DEFAULT_VENDOR_DIR)

        path = Path(str(raw)).expanduser()
        return path if path.is_absolute() else self.repo_root / path

    def get_resolver_binary(self) -> str:
        return str(self._load().get("resolver", {}).get("binary", DEFAULT_RESOLVER_BINARY))

    def get_resolver_timeout(self) -> float:
        return float(self._load().get("resolver", {}).get("timeout", DEFAULT_RESOLVER_TIMEOUT))

    def get_resolver_extra_args(self) -> list[str]:
        return list(self._load().get("resolver", {}).get("extraArgs", []))

    def get_log_level(self) -> str:
        return str(self._load().get("logging", {}).get("level", DEFAULT_LOG_LEVEL))

    def get_log_file(self) -> Path | None:
        """Log file path, resolved against the project root, or None."""
        value = self._load().get("logging", {}).get("file")
        if not value:
            return None
        path = Path(value).expanduser()
        return path if path.is_absolute() else self.repo_root / path


__all__ = [
    "DevPackagesConfig",
    "EXTRA_NAMESPACE",
    "DEFAULT_PACKAGE_DIR",
    "DEFAULT_VENDOR_DIR",
    "DEFAULT_MANIFEST",
    "DEFAULT_LOCKFILE",
    "DEFAULT_RESOLVER_BINARY",
    "DEFAULT_RESOLVER_TIMEOUT",
    "DEFAULT_LOG_LEVEL",
]
