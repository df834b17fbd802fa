"""Read-only line lookups."""

import os

from scriptlib.config import Settings, get_settings
from scriptlib.core import compile_pattern, read_bytes, split_lines, strip_eol
from scriptlib.diagnostics import debug_arguments
from scriptlib.errors import ErrorCode, MissingFileError, TransformError


def _read_lines(path: str, operation: str, settings: Settings | None) -> list[str]:
    if settings is None:
        settings = get_settings()
    if not os.path.isfile(path):
        raise MissingFileError(f"{operation}: file not found: {path}", path=path)
    encoding = settings.edit.encoding
    try:
        text = read_bytes(path).decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise TransformError(
            f"{operation}: failed to decode {path} with encoding '{encoding}': {e}",
            error_code=ErrorCode.ENCODING_ERROR,
            path=path,
        ) from e
    return [strip_eol(line)[0] for line in split_lines(text)]


def _matching_line_numbers(regex: str, path: str, operation: str, settings: Settings | None) -> list[int]:
    pattern = compile_pattern(regex)
    lines = _read_lines(path, operation, settings)
    return [number for number, line in enumerate(lines, start=1) if pattern.search(line)]


def first_line_containing(regex: str, path: str, settings: Settings | None = None) -> int | None:
    """Return the 1-based number of the first line matching regex, or None."""
    debug_arguments(regex, path, settings=settings)
    matches = _matching_line_numbers(regex, path, "first_line_containing", settings)
    return matches[0] if matches else None


def last_line_containing(regex: str, path: str, settings: Settings | None = None) -> int | None:
    """Return the 1-based number of the last line matching regex, or None."""
    debug_arguments(regex, path, settings=settings)
    matches = _matching_line_numbers(regex, path, "last_line_containing", settings)
    return matches[-1] if matches else None


def line_at(line_number: int, path: str, settings: Settings | None = None) -> str:
    """
    Return the text of line line_number (1-based) without its terminator.

    Returns an empty string when the file has no such line.

    Raises:
        MissingFileError: If path does not exist
    """
    debug_arguments(str(line_number), path, settings=settings)
    lines = _read_lines(path, "line_at", settings)
    if 1 <= line_number <= len(lines):
        return lines[line_number - 1]
    return ""
