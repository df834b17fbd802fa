"""Lookup commands; results go to stdout, an empty line when nothing matched."""

import typer

from scriptlib.diagnostics import fail
from scriptlib.errors import ScriptLibError
from scriptlib.tools import first_line_containing, last_line_containing, line_at


def _echo_number(value: int | None) -> None:
    typer.echo("" if value is None else str(value))


def first_line(
    regex: str = typer.Argument(..., help="Regular expression"),
    path: str = typer.Argument(..., help="File to search"),
):
    """Print the number of the first line matching REGEX."""
    try:
        _echo_number(first_line_containing(regex, path))
    except ScriptLibError as e:
        fail(str(e))


def last_line(
    regex: str = typer.Argument(..., help="Regular expression"),
    path: str = typer.Argument(..., help="File to search"),
):
    """Print the number of the last line matching REGEX."""
    try:
        _echo_number(last_line_containing(regex, path))
    except ScriptLibError as e:
        fail(str(e))


def line_at_cmd(
    line_number: int = typer.Argument(..., help="1-based line number"),
    path: str = typer.Argument(..., help="File to read"),
):
    """Print line LINE_NUMBER of PATH."""
    try:
        typer.echo(line_at(line_number, path))
    except ScriptLibError as e:
        fail(str(e))
