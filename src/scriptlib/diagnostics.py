"""Loguru-based diagnostics for scripts built on scriptlib.

Every message goes to standard error as one tagged line:

    info / debug    <message>
    warn            [warning]: <message>
    error / fail    [error]: <message>
    todo            [TODO]: <message>
    dry_run         [dry-run]: <message>

Debug output (including debug_arguments) only appears when the flags passed
to setup_logging() are verbose. With --debug the console lines also carry the
time and the calling location, and tracebacks show variable values.

Usage:
    from scriptlib.diagnostics import setup_logging, info, warn

    setup_logging(flags)
    info("Rewriting configuration")

When nothing has called setup_logging(), the first diagnostic configures
logging from the inherited environment (ProcessFlags()).
"""

import inspect
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any, NoReturn, TextIO

from loguru import logger
from rich.console import Console
from rich.text import Text

from scriptlib.config import ProcessFlags, Settings, get_settings

FATAL_EXIT_STATUS = 255
EMPTY_ARGUMENT = "<empty>"

TODO_LEVEL = "TODO"
DRY_RUN_LEVEL = "DRY-RUN"

# Both sit between INFO (20) and WARNING (30) so they are never filtered out
_CUSTOM_LEVELS = {TODO_LEVEL: 24, DRY_RUN_LEVEL: 22}

_TAGS = {
    "WARNING": "[warning]: ",
    "ERROR": "[error]: ",
    "CRITICAL": "[error]: ",
    TODO_LEVEL: "[TODO]: ",
    DRY_RUN_LEVEL: "[dry-run]: ",
}

LOCATION_PREFIX = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | "
    "{level: <8} | "
    "{name}:{function}:{line} | "
    "{message}"
)

_configured = False
_verbose = False


def _register_levels() -> None:
    for name, no in _CUSTOM_LEVELS.items():
        try:
            logger.level(name)
        except ValueError:
            logger.level(name, no=no)


def _console_format(show_location: bool):
    def _format(record: dict[str, Any]) -> str:
        tag = _TAGS.get(record["level"].name, "")
        prefix = LOCATION_PREFIX if show_location else ""
        return prefix + tag + "{message}\n{exception}"

    return _format


def _stderr_sink(message: str) -> None:
    # Resolved at write time so redirected or captured stderr is honoured
    sys.stderr.write(message)
    sys.stderr.flush()


def setup_logging(
    flags: ProcessFlags | None = None,
    settings: Settings | None = None,
    sink: Any = None,
) -> None:
    """Configure loguru handlers for a script run.

    Args:
        flags: Process flags; verbose or debug enables debug output.
            Defaults to the flags inherited from the environment.
        settings: Settings providing the optional file sink.
        sink: Console sink (default: the current standard error stream).
    """
    global _configured, _verbose

    if flags is None:
        flags = ProcessFlags()
    if settings is None:
        settings = get_settings()

    logger.remove()
    _register_levels()

    _verbose = flags.verbose or flags.debug
    logger.add(
        sink if sink is not None else _stderr_sink,
        format=_console_format(flags.debug),
        level="DEBUG" if _verbose else "INFO",
        backtrace=flags.debug,
        diagnose=flags.debug,
    )

    if settings.logging.log_file:
        log_path = Path(settings.logging.log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_path),
            level=settings.logging.file_level,
            format=FILE_FORMAT,
            rotation=settings.logging.rotation,
            retention=settings.logging.retention,
            compression="gz",
            backtrace=True,
            diagnose=False,
        )

    _configured = True


def _ensure_configured() -> None:
    if not _configured:
        setup_logging()


def debug(message: str) -> None:
    _ensure_configured()
    logger.opt(depth=1).debug(message)


def info(message: str) -> None:
    _ensure_configured()
    logger.opt(depth=1).info(message)


def warn(message: str) -> None:
    _ensure_configured()
    logger.opt(depth=1).warning(message)


def error(message: str) -> None:
    _ensure_configured()
    logger.opt(depth=1).error(message)


def todo(message: str) -> None:
    _ensure_configured()
    logger.opt(depth=1).log(TODO_LEVEL, message)


def dry_run(message: str) -> None:
    """Announce what would have happened.

    Purely informational: checking flags.dry_run and skipping the real
    work is up to the caller.
    """
    _ensure_configured()
    logger.opt(depth=1).log(DRY_RUN_LEVEL, message)


def fail(message: str) -> NoReturn:
    """Log an error and terminate with FATAL_EXIT_STATUS."""
    _ensure_configured()
    logger.opt(depth=1).error(message)
    sys.exit(FATAL_EXIT_STATUS)


def render_arguments(args: Sequence[str], settings: Settings | None = None) -> str:
    """Render arguments as a comma-separated, quoted list with secrets masked.

    A configured secret argument name masks the argument that follows it
    (``--token abc``) or its own value (``--token=abc``). Empty arguments are
    rendered as EMPTY_ARGUMENT.
    """
    redaction = (settings or get_settings()).redaction
    secret_names = set(redaction.secret_arguments)

    rendered = []
    mask_next = False
    for arg in args:
        if mask_next:
            value = redaction.mask
            mask_next = False
        elif arg in secret_names:
            value = arg
            mask_next = True
        else:
            name, sep, _ = arg.partition("=")
            value = f"{name}={redaction.mask}" if sep and name in secret_names else arg
        rendered.append(f'"{value}"' if value else EMPTY_ARGUMENT)
    return ", ".join(rendered)


def debug_arguments(*args: str, caller: str | None = None, settings: Settings | None = None) -> None:
    """Log the calling function's arguments when verbose.

    Args:
        *args: Arguments as the caller received them
        caller: Name to prefix the line with (default: the calling function)
        settings: Settings providing the redaction rules
    """
    _ensure_configured()
    if not _verbose:
        return
    if caller is None:
        frame = inspect.currentframe()
        caller = frame.f_back.f_code.co_name if frame and frame.f_back else "<unknown>"
    logger.opt(depth=1).debug(f"{caller}: {render_arguments(args, settings)}")


def yes(prompt: str, stream: TextIO | None = None) -> bool:
    """Ask a yes/no question on standard error and read one line of input.

    Args:
        prompt: Question to display
        stream: Input stream (default: standard input)

    Returns:
        True if the first character of the line is 'y', False otherwise
        (including leading whitespace and EOF)
    """
    console = Console(stderr=True)
    try:
        # Raw line: leading whitespace counts as the first character
        answer = console.input(Text(f"{prompt} "), stream=stream)
    except EOFError:
        return False
    return answer.startswith("y")
