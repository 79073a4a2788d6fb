"""
devlink CLI package.

Provides the command-line interface with auto-discovery of commands from
subfolders (packages/, hooks/).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import EXIT_ERROR, EXIT_OK, EXIT_RESTORE_FAILED, OutputFormatter, error_code_for
from ._args import add_json_flag, add_repo_root_flag, add_standard_flags, add_verbose_flag
from ._utils import build_linker, get_repo_root, load_config

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_repo_root_flag",
    "add_standard_flags",
    "add_verbose_flag",
    # Utilities
    "EXIT_OK",
    "EXIT_ERROR",
    "EXIT_RESTORE_FAILED",
    "build_linker",
    "error_code_for",
    "get_repo_root",
    "load_config",
]
