"""Helpers for automation scripts: diagnostics, common flags and idempotent text edits."""

__version__ = "0.1.0"

from scriptlib.arguments import ParsedArguments, export_flags, process_common_arguments
from scriptlib.config import ProcessFlags, Settings, get_settings
from scriptlib.diagnostics import (
    debug,
    debug_arguments,
    dry_run,
    error,
    fail,
    info,
    setup_logging,
    todo,
    warn,
    yes,
)
from scriptlib.errors import (
    ConfigurationError,
    ErrorCode,
    IdenticalContentError,
    InvalidConfigError,
    MissingArgumentError,
    MissingFileError,
    ScriptLibError,
    TransformError,
)
from scriptlib.models import EditResult, Outcome
from scriptlib.tools import (
    first_line_containing,
    insert_at_line,
    last_line_containing,
    line_at,
    move,
    remove_regex_line,
    replace_regex,
)

__all__ = [
    "ConfigurationError",
    "EditResult",
    "ErrorCode",
    "IdenticalContentError",
    "InvalidConfigError",
    "MissingArgumentError",
    "MissingFileError",
    "Outcome",
    "ParsedArguments",
    "ProcessFlags",
    "ScriptLibError",
    "Settings",
    "TransformError",
    "debug",
    "debug_arguments",
    "dry_run",
    "error",
    "export_flags",
    "fail",
    "first_line_containing",
    "get_settings",
    "info",
    "insert_at_line",
    "last_line_containing",
    "line_at",
    "move",
    "process_common_arguments",
    "remove_regex_line",
    "replace_regex",
    "setup_logging",
    "todo",
    "warn",
    "yes",
]
