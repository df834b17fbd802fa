"""CLI package for scriptlib.

main() strips the common flags before typer sees the arguments, so every
command understands --verbose, --debug, --dry-run and --help in any position.
"""

import sys

import typer
from pydantic import ValidationError

from scriptlib.arguments import process_common_arguments
from scriptlib.cli import config_cmd, edit_cmd, lookup_cmd
from scriptlib.config import APP_NAME, Settings, get_settings
from scriptlib.diagnostics import fail, render_arguments, setup_logging, yes
from scriptlib.errors import InvalidConfigError

app = typer.Typer(
    name=APP_NAME,
    help="Idempotent text edits and helpers for shell scripts",
    no_args_is_help=True,
)

app.add_typer(config_cmd.app, name="config", help="Configuration management")

app.command(name="move")(edit_cmd.move_cmd)
app.command(name="remove-line")(edit_cmd.remove_line)
app.command(name="replace")(edit_cmd.replace)
app.command(name="insert")(edit_cmd.insert)

app.command(name="first-line")(lookup_cmd.first_line)
app.command(name="last-line")(lookup_cmd.last_line)
app.command(name="line-at")(lookup_cmd.line_at_cmd)


@app.command()
def confirm(prompt: str = typer.Argument(..., help="Question to ask")):
    """Ask a yes/no question; exit 0 on yes, 1 otherwise."""
    if not yes(prompt):
        raise typer.Exit(code=1)


@app.command(name="show-args", context_settings={"ignore_unknown_options": True})
def show_args(args: list[str] | None = typer.Argument(None, help="Arguments to render")):
    """Print arguments the way verbose mode logs them, secrets masked."""
    typer.echo(render_arguments(args or []))


@app.command()
def version():
    """Show version information."""
    from scriptlib import __version__
    typer.echo(f"{APP_NAME} {__version__}")


def _describe_validation_error(e: ValidationError) -> str:
    return "; ".join(
        f"{' -> '.join(str(x) for x in error['loc'])}: {error['msg']}" for error in e.errors()
    )


def main(argv: list[str] | None = None) -> None:
    """Console script entry point."""
    if argv is None:
        argv = sys.argv[1:]
    parsed = process_common_arguments(argv)

    try:
        settings = get_settings()
    except (InvalidConfigError, ValidationError) as e:
        # Console only: the file sink settings are not available
        setup_logging(parsed.flags, settings=Settings.model_construct())
        if isinstance(e, ValidationError):
            fail(f"Invalid configuration: {_describe_validation_error(e)}")
        fail(str(e))
    setup_logging(parsed.flags, settings=settings)

    args = list(parsed.remaining)
    if parsed.flags.help:
        args.append("--help")
    app(args=args, obj=parsed.flags, prog_name=APP_NAME)


if __name__ == "__main__":
    main()
