"""Editing commands: each wraps one transformation primitive.

Exit status: 0 when the file changed, 1 when it was already in the requested
state, 255 on error.
"""

from collections.abc import Callable

import typer

from scriptlib.config import ProcessFlags
from scriptlib.diagnostics import dry_run, fail
from scriptlib.errors import ScriptLibError
from scriptlib.models import EditResult
from scriptlib.tools import insert_at_line, move, remove_regex_line, replace_regex

UNCHANGED_EXIT_STATUS = 1


def get_flags(ctx: typer.Context) -> ProcessFlags:
    """Flags handed to the app by main(), or the inherited ones."""
    obj = ctx.find_root().obj
    return obj if isinstance(obj, ProcessFlags) else ProcessFlags()


def _apply(ctx: typer.Context, description: str, primitive: Callable[..., EditResult], *args) -> None:
    if get_flags(ctx).dry_run:
        dry_run(f"would {description}")
        return
    try:
        result = primitive(*args)
    except ScriptLibError as e:
        fail(str(e))
    if not result.changed:
        raise typer.Exit(code=UNCHANGED_EXIT_STATUS)


def move_cmd(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="File holding the new content"),
    destination: str = typer.Argument(..., help="Existing file to replace"),
):
    """Replace DESTINATION with SOURCE; fails if they are identical."""
    _apply(ctx, f"move {source} to {destination}", move, source, destination)


def remove_line(
    ctx: typer.Context,
    regex: str = typer.Argument(..., help="Regular expression"),
    path: str = typer.Argument(..., help="File to edit"),
):
    """Delete every line matching REGEX."""
    _apply(ctx, f"remove lines matching {regex!r} from {path}", remove_regex_line, regex, path)


def replace(
    ctx: typer.Context,
    source_pattern: str = typer.Argument(..., help="Regular expression"),
    target_pattern: str = typer.Argument(..., help="Replacement, may use \\1 back-references"),
    path: str = typer.Argument(..., help="File to edit"),
):
    """Replace every match of SOURCE_PATTERN with TARGET_PATTERN."""
    _apply(
        ctx,
        f"replace {source_pattern!r} with {target_pattern!r} in {path}",
        replace_regex,
        source_pattern,
        target_pattern,
        path,
    )


def insert(
    ctx: typer.Context,
    line_number: int = typer.Argument(..., help="Insert after this 1-based line"),
    new_line: str = typer.Argument(..., help="Text of the new line"),
    path: str = typer.Argument(..., help="File to edit"),
):
    """Insert NEW_LINE after line LINE_NUMBER."""
    _apply(ctx, f"insert {new_line!r} after line {line_number} of {path}", insert_at_line, line_number, new_line, path)
