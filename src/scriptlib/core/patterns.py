"""Regular expression and line helpers shared by the text primitives.

Patterns use Python `re` syntax and are matched against one line at a time,
without its terminator, the way a line-oriented stream editor sees them.
Nothing is wrapped in delimiters, so `/` needs no escaping.
"""

import re

from scriptlib.errors import InvalidPatternError

_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a pattern, reporting syntax errors as InvalidPatternError."""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidPatternError(f"Invalid regular expression {pattern!r}: {e}") from e


def split_lines(text: str) -> list[str]:
    """Split text into lines on '\\n', keeping each line's terminator."""
    return _LINE_RE.findall(text)


def strip_eol(line: str) -> tuple[str, str]:
    """Split a line into its body and its terminator ('' for an unterminated last line)."""
    if line.endswith("\r\n"):
        return line[:-2], "\r\n"
    if line.endswith("\n"):
        return line[:-1], "\n"
    return line, ""
