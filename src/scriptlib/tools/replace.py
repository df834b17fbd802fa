"""Regular expression substitution across a whole file."""

import re

from scriptlib.config import Settings
from scriptlib.core import apply_transformation, compile_pattern, split_lines, strip_eol
from scriptlib.diagnostics import debug_arguments
from scriptlib.errors import InvalidPatternError
from scriptlib.models import EditResult


def replace_regex(
    source_pattern: str,
    target_pattern: str,
    path: str,
    settings: Settings | None = None,
) -> EditResult:
    """
    Replace every match of source_pattern on every line of path.

    The replacement may refer to groups of source_pattern with \\1 or
    \\g<name>. Matches never span a line terminator.

    Args:
        source_pattern: Python regular expression
        target_pattern: Replacement template
        path: File to edit

    Returns:
        EditResult; Outcome.UNCHANGED when the substitution changed nothing

    Raises:
        InvalidPatternError: If either pattern is invalid (e.g. an unknown group)
    """
    debug_arguments(source_pattern, target_pattern, path, settings=settings)
    pattern = compile_pattern(source_pattern)

    def _replace(text: str) -> str:
        lines = []
        for line in split_lines(text):
            body, eol = strip_eol(line)
            try:
                body = pattern.sub(target_pattern, body)
            except (re.error, IndexError) as e:
                raise InvalidPatternError(
                    f"Invalid replacement {target_pattern!r} for {source_pattern!r} in {path}: {e}",
                    path=path,
                ) from e
            lines.append(body + eol)
        return "".join(lines)

    return apply_transformation(path, _replace, operation="replace_regex", settings=settings)
