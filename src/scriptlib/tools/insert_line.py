"""Insert a line after a given line number."""

from scriptlib.config import Settings
from scriptlib.core import apply_transformation, split_lines, strip_eol
from scriptlib.diagnostics import debug_arguments
from scriptlib.models import EditResult


def insert_at_line(
    line_number: int,
    new_line: str,
    path: str,
    settings: Settings | None = None,
) -> EditResult:
    """
    Insert new_line immediately after line line_number (1-based) of path.

    The new line takes the terminator of the line it follows. If that line is
    an unterminated last line, both get a '\\n'.

    Returns:
        EditResult; Outcome.UNCHANGED when line_number is out of range
    """
    debug_arguments(str(line_number), new_line, path, settings=settings)

    def _insert(text: str) -> str:
        lines = split_lines(text)
        if not 1 <= line_number <= len(lines):
            return text
        body, eol = strip_eol(lines[line_number - 1])
        eol = eol or "\n"
        lines[line_number - 1] = body + eol
        lines.insert(line_number, new_line + eol)
        return "".join(lines)

    return apply_transformation(path, _insert, operation="insert_at_line", settings=settings)
