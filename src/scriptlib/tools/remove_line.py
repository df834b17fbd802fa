"""Delete every line matching a regular expression."""

from scriptlib.config import Settings
from scriptlib.core import apply_transformation, compile_pattern, split_lines, strip_eol
from scriptlib.diagnostics import debug_arguments
from scriptlib.models import EditResult


def remove_regex_line(regex: str, path: str, settings: Settings | None = None) -> EditResult:
    """
    Remove each whole line of path that contains a match for regex.

    Args:
        regex: Python regular expression, searched in each line body
        path: File to edit

    Returns:
        EditResult; Outcome.UNCHANGED when no line matched
    """
    debug_arguments(regex, path, settings=settings)
    pattern = compile_pattern(regex)

    def _remove(text: str) -> str:
        return "".join(
            line for line in split_lines(text)
            if not pattern.search(strip_eol(line)[0])
        )

    return apply_transformation(path, _remove, operation="remove_regex_line", settings=settings)
