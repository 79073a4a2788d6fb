from __future__ import annotations

import logging
import sys
from pathlib import Path

_DEVLINK_HANDLER: logging.Handler | None = None
_JSON_MODE_NULL_HANDLER_INSTALLED: bool = False

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(*, level: str = "WARNING", log_path: Path | None = None) -> None:
    """Install devlink's handler on the ``devlink`` logger.

    Logs go to ``log_path`` when given, otherwise to stderr. Calling this
    again replaces the previously installed handler.
    """
    global _DEVLINK_HANDLER

    logger = logging.getLogger("devlink")
    logger.setLevel(_level_from_name(level))

    if _DEVLINK_HANDLER is not None:
        logger.removeHandler(_DEVLINK_HANDLER)
        _DEVLINK_HANDLER.close()
        _DEVLINK_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    _DEVLINK_HANDLER = handler


def reset_logging_for_tests() -> None:
    """Test-only: remove the installed handler."""
    global _DEVLINK_HANDLER
    logger = logging.getLogger("devlink")
    logger.setLevel(logging.NOTSET)
    if _DEVLINK_HANDLER is not None:
        logger.removeHandler(_DEVLINK_HANDLER)
        _DEVLINK_HANDLER.close()
        _DEVLINK_HANDLER = None


def suppress_lastresort_in_json_mode() -> None:
    """Keep stdlib logging's lastResort handler from polluting JSON output.

    Python may emit WARNING+ records to stderr through the implicit
    ``lastResort`` handler when no handler is configured. Install a
    NullHandler on the root logger when it has none.
    """
    global _JSON_MODE_NULL_HANDLER_INSTALLED

    root = logging.getLogger()
    if root.handlers or _JSON_MODE_NULL_HANDLER_INSTALLED:
        return
    root.addHandler(logging.NullHandler())
    _JSON_MODE_NULL_HANDLER_INSTALLED = True


__all__ = ["configure_logging", "reset_logging_for_tests", "suppress_lastresort_in_json_mode"]
